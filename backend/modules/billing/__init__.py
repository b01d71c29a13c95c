"""
Billing module.

Mock plans, subscriptions, invoices and usage meters. Nothing is charged.

Public API:
- IBillingService: Interface for billing operations
- BillingPlan / Subscription / Invoice / BillingUsage: Billing records
- Billing exceptions: InvalidPlanError, NoActiveSubscriptionError
"""

from .interfaces import IBillingService
from .models import (
    DEFAULT_PLANS,
    BillingPlan,
    BillingUsage,
    Invoice,
    InvoiceStatus,
    Subscription,
    SubscriptionStatus,
)
from .exceptions import InvalidPlanError, NoActiveSubscriptionError

__all__ = [
    # Interface
    "IBillingService",
    # Models
    "DEFAULT_PLANS",
    "BillingPlan",
    "BillingUsage",
    "Invoice",
    "InvoiceStatus",
    "Subscription",
    "SubscriptionStatus",
    # Exceptions
    "InvalidPlanError",
    "NoActiveSubscriptionError",
]
