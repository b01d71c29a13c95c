"""
User module exceptions.

These exceptions are raised by the user service and converted to
responses by the API error handlers.
"""

from typing import Optional

from shared.exceptions import BusinessRuleError, ConflictError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when no user has the requested id."""

    def __init__(self, user_id: Optional[str] = None):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"userId": user_id} if user_id else None,
        )


class CannotDeleteSelfError(BusinessRuleError):
    """Raised when an actor tries to delete their own account."""

    def __init__(self):
        super().__init__("Cannot delete your own account", code="USER_CANNOT_DELETE_SELF")


class CannotChangeOwnRoleError(BusinessRuleError):
    """Raised when an actor tries to change their own role."""

    def __init__(self):
        super().__init__("Cannot change your own role", code="USER_CANNOT_CHANGE_OWN_ROLE")


class EmailInUseError(ConflictError):
    """Raised when a profile update takes an email another user already has."""

    def __init__(self, email: str = ""):
        super().__init__(
            "Email already in use",
            code="USER_EMAIL_ALREADY_EXISTS",
            details={"email": email} if email else None,
        )


class InvalidRoleError(ValidationError):
    """Raised when a role outside admin/manager/user is requested."""

    def __init__(self, role: Optional[str] = None):
        super().__init__(
            "Invalid role specified",
            code="USER_INVALID_ROLE",
            details={"role": role} if role else None,
        )


class UserError:
    """Named constructors for user business-rule violations."""

    not_found = UserNotFoundError
    cannot_delete_self = CannotDeleteSelfError
    cannot_change_own_role = CannotChangeOwnRoleError
    invalid_role = InvalidRoleError
    email_exists = EmailInUseError
