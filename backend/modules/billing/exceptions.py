"""
Billing module exceptions.
"""

from shared.exceptions import BusinessRuleError, ValidationError


class InvalidPlanError(ValidationError):
    """Raised when subscribing to a plan that does not exist."""

    def __init__(self, plan_id: str):
        super().__init__(
            "Invalid plan ID",
            code="INVALID_REQUEST",
            details={"planId": plan_id},
        )


class NoActiveSubscriptionError(BusinessRuleError):
    """Raised when canceling without an active subscription."""

    def __init__(self, user_id: str):
        super().__init__(
            "No active subscription found",
            code="INVALID_REQUEST",
            details={"userId": user_id},
        )
