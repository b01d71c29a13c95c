"""
Fixed-window rate limiting.

Each route class has its own budget. Requests are counted per key
(client IP, or user id for the ``user`` class) inside a fixed window that
starts with the key's first request; the count resets once the window has
elapsed. No smoothing.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, Request

from shared.exceptions import RateLimitExceededError
from shared.models import AuthUser

from ..dependencies import get_container
from .auth import authenticate
from .context import get_request_context


@dataclass(frozen=True)
class RateLimitPolicy:
    name: str
    max_requests: int
    window_seconds: int
    message: str
    key_by_user: bool = False


POLICIES: dict[str, RateLimitPolicy] = {
    "standard": RateLimitPolicy(
        "standard", 100, 15 * 60, "Too many requests from this IP, please try again later"
    ),
    "auth": RateLimitPolicy(
        "auth", 5, 15 * 60, "Too many authentication attempts, please try again later"
    ),
    "api": RateLimitPolicy("api", 200, 15 * 60, "Too many API requests, please try again later"),
    "upload": RateLimitPolicy("upload", 10, 60 * 60, "Too many file uploads, please try again later"),
    "search": RateLimitPolicy("search", 30, 60, "Too many search requests, please slow down"),
    "user": RateLimitPolicy(
        "user", 500, 15 * 60, "Too many requests for this account, please try again later", key_by_user=True
    ),
}


@dataclass
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int


class FixedWindowRateLimiter:
    """
    Per-key request counters.

    ``clock`` returns seconds and is injectable so tests can move time.
    A disabled limiter allows everything and records nothing.
    """

    def __init__(
        self,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        self.enabled = enabled
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._windows: dict[tuple[str, str], tuple[float, int]] = {}

    def hit(self, policy: RateLimitPolicy, key: str) -> RateLimitDecision:
        """Count one request for ``key`` and say whether it is within budget."""
        if not self.enabled:
            return RateLimitDecision(True, policy.max_requests, policy.max_requests, 0)

        now = self._clock()
        bucket = (policy.name, key)
        with self._lock:
            started, count = self._windows.get(bucket, (now, 0))
            if now - started >= policy.window_seconds:
                started, count = now, 0
            count += 1
            self._windows[bucket] = (started, count)

        reset_after = max(0, int(started + policy.window_seconds - now + 0.999))
        allowed = count <= policy.max_requests
        if not allowed:
            self._logger.warning(
                "Rate limit exceeded",
                extra={"policy": policy.name, "key": key, "limit": policy.max_requests},
            )
        return RateLimitDecision(
            allowed=allowed,
            limit=policy.max_requests,
            remaining=max(0, policy.max_requests - count),
            reset_after=reset_after,
        )

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


def _enforce(request: Request, policy: RateLimitPolicy, key: str) -> None:
    decision = get_container(request).rate_limiter.hit(policy, key)
    if not decision.allowed:
        raise RateLimitExceededError(policy.message, retry_after=decision.reset_after, limit=decision.limit)


def rate_limit(policy_name: str) -> Callable[..., None]:
    """
    Dependency factory enforcing the named policy.

    Per-account policies depend on ``authenticate``, so the caller is known
    before the key is built; all others count by client IP.

    Usage:
        router = APIRouter(dependencies=[Depends(rate_limit("api"))])
    """
    policy = POLICIES[policy_name]

    if policy.key_by_user:
        def user_dependency(request: Request, user: AuthUser = Depends(authenticate)) -> None:
            _enforce(request, policy, f"user:{user.id}")

        return user_dependency

    def dependency(request: Request) -> None:
        _enforce(request, policy, f"ip:{get_request_context(request).client_ip}")

    return dependency
