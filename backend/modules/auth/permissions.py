"""
Role to permission table and permission matching.

Permission strings are ``resource:action``. A granted permission of ``*``
matches everything; one ending in ``:*`` matches any permission that shares
its prefix. Wildcards are only honoured as the final segment.
"""

from shared.models import UserRole


ROLE_PERMISSIONS: dict[UserRole, list[str]] = {
    UserRole.ADMIN: ["*"],
    UserRole.MANAGER: [
        "users:read",
        "users:invite",
        "collections:*",
        "files:*",
        "search:*",
        "billing:read",
    ],
    UserRole.USER: [
        "collections:read",
        "collections:create",
        "collections:update",
        "files:read",
        "files:create",
        "files:update",
        "search:read",
        "billing:read",
    ],
}


def permission_matches(granted: str, required: str) -> bool:
    if granted == "*" or granted == required:
        return True
    if granted.endswith(":*"):
        return required.startswith(granted[:-1])
    return False


def has_permission(role: UserRole, required: str) -> bool:
    return any(permission_matches(p, required) for p in ROLE_PERMISSIONS.get(role, []))
