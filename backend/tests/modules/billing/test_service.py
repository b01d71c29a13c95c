"""Tests for the billing service."""

import pytest

from modules.billing.exceptions import InvalidPlanError, NoActiveSubscriptionError
from modules.billing.models import InvoiceStatus, SubscriptionStatus
from modules.billing.service import BillingService
from shared.exceptions import ValidationError
from shared.models import PaginationOptions


@pytest.fixture
def service() -> BillingService:
    return BillingService()


class TestPlans:
    @pytest.mark.asyncio
    async def test_three_plans(self, service):
        plans = await service.get_plans()
        assert [p.id for p in plans] == ["free", "premium", "enterprise"]
        assert [p.price for p in plans] == [0.0, 9.99, 29.99]

    @pytest.mark.asyncio
    async def test_enterprise_is_unlimited(self, service):
        enterprise = (await service.get_plans())[2]
        assert enterprise.limits.storage == -1
        assert enterprise.limits.users == -1


class TestSubscriptions:
    @pytest.mark.asyncio
    async def test_first_lookup_creates_premium(self, service):
        subscription = await service.get_subscription("user_5")
        assert subscription.plan_id == "premium"
        assert subscription.status is SubscriptionStatus.ACTIVE
        assert subscription.amount == 9.99
        assert (await service.get_subscription("user_5")).id == subscription.id

    @pytest.mark.asyncio
    async def test_subscribe(self, service):
        subscription = await service.subscribe("user_5", "enterprise")
        assert subscription.plan_id == "enterprise"
        assert (await service.get_subscription("user_5")).plan_id == "enterprise"

    @pytest.mark.asyncio
    async def test_subscribe_unknown_plan(self, service):
        with pytest.raises(InvalidPlanError) as exc_info:
            await service.subscribe("user_5", "platinum")
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_subscribe_keeps_payment_method(self, service):
        await service.subscribe("user_5", "free")
        await service.update_payment_method("user_5", "pm_123")
        subscription = await service.subscribe("user_5", "premium")
        assert subscription.payment_method_id == "pm_123"

    @pytest.mark.asyncio
    async def test_cancel(self, service):
        await service.subscribe("user_5", "premium")
        await service.cancel_subscription("user_5")
        subscription = await service.get_subscription("user_5")
        assert subscription.status is SubscriptionStatus.CANCELED
        assert subscription.canceled_at is not None

    @pytest.mark.asyncio
    async def test_cancel_without_subscription(self, service):
        with pytest.raises(NoActiveSubscriptionError):
            await service.cancel_subscription("user_5")

    @pytest.mark.asyncio
    async def test_cancel_twice(self, service):
        await service.subscribe("user_5", "premium")
        await service.cancel_subscription("user_5")
        with pytest.raises(NoActiveSubscriptionError):
            await service.cancel_subscription("user_5")

    @pytest.mark.asyncio
    async def test_user_id_required(self, service):
        with pytest.raises(ValidationError):
            await service.get_subscription("")


class TestInvoicesAndUsage:
    @pytest.mark.asyncio
    async def test_twelve_invoices(self, service):
        invoices = await service.get_invoices("user_5", PaginationOptions(page=1, limit=5))
        assert invoices.total == 12
        assert len(invoices.items) == 5

    @pytest.mark.asyncio
    async def test_only_paid_invoices_have_paid_at(self, service):
        invoices = await service.get_invoices("user_5", PaginationOptions(page=1, limit=12))
        for invoice in invoices.items:
            assert (invoice.paid_at is not None) == (invoice.status is InvoiceStatus.PAID)

    @pytest.mark.asyncio
    async def test_usage_against_plan_limits(self, service):
        usage = await service.get_billing_usage("user_5")
        assert usage.api_calls.limit == 10000
        assert 0 <= usage.api_calls.percentage <= 100

    @pytest.mark.asyncio
    async def test_unlimited_plan_reports_zero_percent(self, service):
        await service.subscribe("user_5", "enterprise")
        usage = await service.get_billing_usage("user_5")
        assert usage.storage.limit == -1
        assert usage.storage.percentage == 0.0
