"""
Billing module interface.

Route handlers depend on IBillingService, not the concrete implementation.
"""

from typing import Protocol, runtime_checkable

from shared.models import PaginatedResult, PaginationOptions

from .models import BillingPlan, BillingUsage, Invoice, Subscription


@runtime_checkable
class IBillingService(Protocol):
    """Interface for plans, subscriptions and invoices."""

    async def get_plans(self) -> list[BillingPlan]:
        ...

    async def get_subscription(self, user_id: str) -> Subscription:
        """
        Get the user's subscription.

        A user seen for the first time is given an active premium
        subscription so the dashboard always has something to show.
        """
        ...

    async def subscribe(self, user_id: str, plan_id: str) -> Subscription:
        """
        Start (or replace) the user's subscription.

        Raises:
            InvalidPlanError: If ``plan_id`` is not a known plan
        """
        ...

    async def cancel_subscription(self, user_id: str) -> None:
        """
        Raises:
            NoActiveSubscriptionError: If the user has no active subscription
        """
        ...

    async def get_invoices(self, user_id: str, pagination: PaginationOptions) -> PaginatedResult[Invoice]:
        ...

    async def update_payment_method(self, user_id: str, payment_method_id: str) -> None:
        ...

    async def get_billing_usage(self, user_id: str) -> BillingUsage:
        ...
