"""
Billing service implementation.

Subscriptions are kept per user in memory. Invoices and usage figures
are generated from a generator seeded with the user id, so repeated
calls for the same user agree with each other.
"""

import logging
import random
import threading
from datetime import timedelta
from typing import Optional

from shared.exceptions import ValidationError
from shared.models import PaginatedResult, PaginationOptions
from shared.repository import generate_id, paginate, utcnow

from .exceptions import InvalidPlanError, NoActiveSubscriptionError
from .interfaces import IBillingService
from .models import (
    DEFAULT_PLANS,
    BillingPlan,
    BillingUsage,
    Invoice,
    InvoiceStatus,
    Subscription,
    SubscriptionStatus,
    UsageMeter,
    UsagePeriod,
)

BILLING_CYCLE = timedelta(days=30)
INVOICE_DUE = timedelta(days=7)
INVOICE_COUNT = 12
DEFAULT_PLAN_ID = "premium"

_INVOICE_STATUSES = (InvoiceStatus.PAID, InvoiceStatus.PENDING, InvoiceStatus.FAILED)


class BillingService(IBillingService):
    """Implementation of the billing service."""

    def __init__(self, plans: Optional[tuple[BillingPlan, ...]] = None, logger: Optional[logging.Logger] = None):
        self._plans = {plan.id: plan for plan in (plans or DEFAULT_PLANS)}
        self._subscriptions: dict[str, Subscription] = {}
        self._lock = threading.Lock()
        self._logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _require_user(user_id: str) -> None:
        if not user_id:
            raise ValidationError.required_field("userId")

    def _new_subscription(self, plan: BillingPlan, payment_method_id: Optional[str] = None) -> Subscription:
        return Subscription(
            id=generate_id("sub"),
            plan_id=plan.id,
            status=SubscriptionStatus.ACTIVE,
            next_billing_date=utcnow() + BILLING_CYCLE,
            amount=plan.price,
            currency=plan.currency,
            payment_method_id=payment_method_id,
        )

    async def get_plans(self) -> list[BillingPlan]:
        return list(self._plans.values())

    async def get_subscription(self, user_id: str) -> Subscription:
        self._require_user(user_id)
        with self._lock:
            subscription = self._subscriptions.get(user_id)
            if subscription is None:
                subscription = self._new_subscription(self._plans[DEFAULT_PLAN_ID])
                self._subscriptions[user_id] = subscription
        return subscription

    async def subscribe(self, user_id: str, plan_id: str) -> Subscription:
        self._require_user(user_id)
        if not plan_id:
            raise ValidationError.required_field("planId")

        plan = self._plans.get(plan_id)
        if plan is None:
            raise InvalidPlanError(plan_id)

        with self._lock:
            previous = self._subscriptions.get(user_id)
            subscription = self._new_subscription(plan, previous.payment_method_id if previous else None)
            self._subscriptions[user_id] = subscription

        self._logger.info(
            "User subscribed",
            extra={"user_id": user_id, "plan_id": plan_id, "subscription_id": subscription.id},
        )
        return subscription

    async def cancel_subscription(self, user_id: str) -> None:
        self._require_user(user_id)
        with self._lock:
            subscription = self._subscriptions.get(user_id)
            if subscription is None or subscription.status != SubscriptionStatus.ACTIVE:
                raise NoActiveSubscriptionError(user_id)
            self._subscriptions[user_id] = subscription.model_copy(
                update={"status": SubscriptionStatus.CANCELED, "canceled_at": utcnow()}
            )

        self._logger.info(
            "Subscription canceled",
            extra={"user_id": user_id, "subscription_id": subscription.id},
        )

    async def get_invoices(self, user_id: str, pagination: PaginationOptions) -> PaginatedResult[Invoice]:
        self._require_user(user_id)
        rng = random.Random(user_id)
        now = utcnow()

        invoices = []
        for i in range(INVOICE_COUNT):
            created = now - i * BILLING_CYCLE
            status = _INVOICE_STATUSES[i % len(_INVOICE_STATUSES)]
            invoices.append(Invoice(
                id=f"inv_{i + 1}",
                amount=round(rng.uniform(5, 30), 2),
                status=status,
                created_at=created,
                due_date=created + INVOICE_DUE,
                paid_at=created + timedelta(days=1) if status == InvoiceStatus.PAID else None,
            ))
        return paginate(invoices, pagination)

    async def update_payment_method(self, user_id: str, payment_method_id: str) -> None:
        self._require_user(user_id)
        if not payment_method_id:
            raise ValidationError.required_field("paymentMethodId")

        with self._lock:
            subscription = self._subscriptions.get(user_id)
            if subscription is not None:
                self._subscriptions[user_id] = subscription.model_copy(
                    update={"payment_method_id": payment_method_id}
                )

        self._logger.info(
            "Payment method updated",
            extra={"user_id": user_id, "payment_method_id": payment_method_id},
        )

    async def get_billing_usage(self, user_id: str) -> BillingUsage:
        self._require_user(user_id)
        plan = self._plans[(await self.get_subscription(user_id)).plan_id]
        rng = random.Random(f"usage:{user_id}")
        now = utcnow()

        def meter(used: int, limit: int) -> UsageMeter:
            percentage = 0.0 if limit <= 0 else round(min(used / limit * 100, 100.0), 2)
            return UsageMeter(used=used, limit=limit, percentage=percentage)

        return BillingUsage(
            storage=meter(rng.randint(100_000_000, 1_000_000_000), plan.limits.storage),
            api_calls=meter(rng.randint(100, 5000), plan.limits.api_calls),
            users=meter(rng.randint(1, 8), plan.limits.users),
            period=UsagePeriod(start=now - BILLING_CYCLE, end=now),
        )
