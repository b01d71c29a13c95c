"""
Billing endpoints. Every operation acts on the caller's own account.
"""

from fastapi import APIRouter, Depends, Request

from api.controller import execute_with_delay, execute_with_pagination, pagination_params
from api.dependencies import get_billing_service
from api.middleware.auth import authenticate, current_user
from api.middleware.rate_limit import rate_limit
from shared.models import AuthUser, PaginationOptions

from .interfaces import IBillingService
from .models import PaymentMethodRequest, SubscribeRequest

router = APIRouter(dependencies=[Depends(rate_limit("api")), Depends(authenticate)])


@router.get("/plans")
async def list_plans(request: Request, service: IBillingService = Depends(get_billing_service)):
    return await execute_with_delay(request, service.get_plans, "Plans retrieved successfully")


@router.get("/subscription")
async def get_subscription(
    request: Request,
    user: AuthUser = Depends(current_user),
    service: IBillingService = Depends(get_billing_service),
):
    return await execute_with_delay(
        request, lambda: service.get_subscription(user.id), "Subscription retrieved successfully"
    )


@router.post("/subscribe", status_code=201)
async def subscribe(
    request: Request,
    body: SubscribeRequest,
    user: AuthUser = Depends(current_user),
    service: IBillingService = Depends(get_billing_service),
):
    return await execute_with_delay(
        request,
        lambda: service.subscribe(user.id, body.plan_id),
        "Subscription created successfully",
        status_code=201,
    )


@router.post("/cancel")
async def cancel_subscription(
    request: Request,
    user: AuthUser = Depends(current_user),
    service: IBillingService = Depends(get_billing_service),
):
    return await execute_with_delay(
        request, lambda: service.cancel_subscription(user.id), "Subscription canceled successfully"
    )


@router.get("/invoices")
async def list_invoices(
    request: Request,
    pagination: PaginationOptions = Depends(pagination_params),
    user: AuthUser = Depends(current_user),
    service: IBillingService = Depends(get_billing_service),
):
    return await execute_with_pagination(
        request, lambda: service.get_invoices(user.id, pagination), "Invoices retrieved successfully"
    )


@router.put("/payment-method")
async def update_payment_method(
    request: Request,
    body: PaymentMethodRequest,
    user: AuthUser = Depends(current_user),
    service: IBillingService = Depends(get_billing_service),
):
    return await execute_with_delay(
        request,
        lambda: service.update_payment_method(user.id, body.payment_method_id),
        "Payment method updated successfully",
    )


@router.get("/usage")
async def billing_usage(
    request: Request,
    user: AuthUser = Depends(current_user),
    service: IBillingService = Depends(get_billing_service),
):
    return await execute_with_delay(
        request, lambda: service.get_billing_usage(user.id), "Billing usage retrieved successfully"
    )
