"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

One container is attached to each application instance
(``app.state.container``), so every app built by ``create_app`` starts
from freshly seeded in-memory data.
"""

import logging
from typing import TYPE_CHECKING, Optional

from fastapi import Request

from shared.config import Settings, get_settings
from shared.responses import DelayStrategy, NoDelay, RandomDelay

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from api.middleware.rate_limit import FixedWindowRateLimiter
    from modules.auth.interfaces import IAuthService
    from modules.billing.interfaces import IBillingService
    from modules.collections.interfaces import ICollectionService
    from modules.collections.repository import CollectionRepository
    from modules.files.interfaces import IFileService
    from modules.files.repository import FileRepository
    from modules.search.interfaces import ISearchService
    from modules.users.interfaces import IUserService
    from modules.users.repository import UserRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services (and their data) for testing.
    """

    def __init__(self, settings: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> None:
        self.settings = settings or get_settings()
        self.logger = logger or logging.getLogger("mockapi")
        self.reset()

    def _child_logger(self, name: str) -> logging.Logger:
        return self.logger.getChild(name)

    @property
    def delay(self) -> DelayStrategy:
        """Latency strategy used by every controller."""
        if self._delay is None:
            if self.settings.delay_active:
                self._delay = RandomDelay(self.settings.delay_min_ms, self.settings.delay_max_ms)
            else:
                self._delay = NoDelay()
        return self._delay

    @property
    def rate_limiter(self) -> "FixedWindowRateLimiter":
        if self._rate_limiter is None:
            from api.middleware.rate_limit import FixedWindowRateLimiter
            self._rate_limiter = FixedWindowRateLimiter(
                enabled=self.settings.rate_limit_active,
                logger=self._child_logger("rate_limit"),
            )
        return self._rate_limiter

    @property
    def user_repository(self) -> "UserRepository":
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            self._user_repository = UserRepository()
        return self._user_repository

    @property
    def collection_repository(self) -> "CollectionRepository":
        if self._collection_repository is None:
            from modules.collections.repository import CollectionRepository
            self._collection_repository = CollectionRepository()
        return self._collection_repository

    @property
    def file_repository(self) -> "FileRepository":
        if self._file_repository is None:
            from modules.files.repository import FileRepository
            self._file_repository = FileRepository()
        return self._file_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                self.user_repository,
                settings=self.settings,
                logger=self._child_logger("auth"),
            )
        return self._auth_service

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(self.user_repository, logger=self._child_logger("users"))
        return self._user_service

    @property
    def collections(self) -> "ICollectionService":
        """Get the collection service instance."""
        if self._collection_service is None:
            from modules.collections.service import CollectionService
            self._collection_service = CollectionService(
                self.collection_repository,
                self.file_repository,
                logger=self._child_logger("collections"),
            )
        return self._collection_service

    @property
    def files(self) -> "IFileService":
        """Get the file service instance."""
        if self._file_service is None:
            from modules.files.service import FileService
            self._file_service = FileService(
                self.file_repository,
                collections=self.collection_repository,
                settings=self.settings,
                logger=self._child_logger("files"),
            )
        return self._file_service

    @property
    def search(self) -> "ISearchService":
        """Get the search service instance."""
        if self._search_service is None:
            from modules.search.service import SearchService
            self._search_service = SearchService(logger=self._child_logger("search"))
        return self._search_service

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        if self._billing_service is None:
            from modules.billing.service import BillingService
            self._billing_service = BillingService(logger=self._child_logger("billing"))
        return self._billing_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - the next access builds fresh
        repositories from seed data and fresh services on top of them.
        """
        self._delay: Optional[DelayStrategy] = None
        self._rate_limiter: "FixedWindowRateLimiter | None" = None
        self._user_repository: "UserRepository | None" = None
        self._collection_repository: "CollectionRepository | None" = None
        self._file_repository: "FileRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._user_service: "IUserService | None" = None
        self._collection_service: "ICollectionService | None" = None
        self._file_service: "IFileService | None" = None
        self._search_service: "ISearchService | None" = None
        self._billing_service: "IBillingService | None" = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_container(request: Request) -> ServiceContainer:
    """The container belonging to the app serving this request."""
    return request.app.state.container


def get_auth_service(request: Request) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container(request).auth


def get_user_service(request: Request) -> "IUserService":
    """FastAPI dependency for user service."""
    return get_container(request).users


def get_collection_service(request: Request) -> "ICollectionService":
    """FastAPI dependency for collection service."""
    return get_container(request).collections


def get_file_service(request: Request) -> "IFileService":
    """FastAPI dependency for file service."""
    return get_container(request).files


def get_search_service(request: Request) -> "ISearchService":
    """FastAPI dependency for search service."""
    return get_container(request).search


def get_billing_service(request: Request) -> "IBillingService":
    """FastAPI dependency for billing service."""
    return get_container(request).billing
