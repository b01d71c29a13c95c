"""
Billing module data models.

Plans are fixed; subscriptions live in memory per user.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from shared.models import CamelModel


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    CANCELED = "canceled"
    PAST_DUE = "past_due"


class InvoiceStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    FAILED = "failed"


class PlanLimits(CamelModel):
    """Per-plan quotas. ``-1`` means unlimited."""

    storage: int
    users: int
    api_calls: int


class BillingPlan(CamelModel):
    id: str
    name: str
    price: float
    currency: str = "USD"
    features: list[str] = Field(default_factory=list)
    limits: PlanLimits


GIB = 1024 * 1024 * 1024

DEFAULT_PLANS: tuple[BillingPlan, ...] = (
    BillingPlan(
        id="free",
        name="Free",
        price=0.0,
        features=["Up to 1GB storage", "Basic file sharing", "Email support"],
        limits=PlanLimits(storage=GIB, users=1, api_calls=1000),
    ),
    BillingPlan(
        id="premium",
        name="Premium",
        price=9.99,
        features=["Up to 100GB storage", "Advanced file sharing", "Priority support", "API access"],
        limits=PlanLimits(storage=100 * GIB, users=10, api_calls=10000),
    ),
    BillingPlan(
        id="enterprise",
        name="Enterprise",
        price=29.99,
        features=["Unlimited storage", "Advanced security", "24/7 support", "Custom integrations"],
        limits=PlanLimits(storage=-1, users=-1, api_calls=-1),
    ),
)


class Subscription(CamelModel):
    id: str
    plan_id: str
    status: SubscriptionStatus
    next_billing_date: datetime
    amount: float
    currency: str = "USD"
    payment_method_id: Optional[str] = None
    canceled_at: Optional[datetime] = None


class Invoice(CamelModel):
    id: str
    amount: float
    currency: str = "USD"
    status: InvoiceStatus
    created_at: datetime
    due_date: datetime
    paid_at: Optional[datetime] = None


class UsageMeter(CamelModel):
    used: int
    limit: int
    percentage: float


class UsagePeriod(CamelModel):
    start: datetime
    end: datetime


class BillingUsage(CamelModel):
    storage: UsageMeter
    api_calls: UsageMeter
    users: UsageMeter
    period: UsagePeriod


class SubscribeRequest(CamelModel):
    plan_id: str = Field(..., min_length=1)


class PaymentMethodRequest(CamelModel):
    payment_method_id: str = Field(..., min_length=1)
