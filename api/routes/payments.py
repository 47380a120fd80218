"""
Payments API routes.

Exposes the three processor-backed operations. Keep this thin: validation
lives in the DTOs, orchestration in PaymentService, SDK details in the
gateway adapter.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_payment_service, require_api_key
from application.services.payment_service import PaymentService
from application.dtos.payments import (
    CancelOrderResponse,
    ConfirmPaymentResponse,
    CreatePaymentIntentRequest,
    CreatePaymentIntentResponse,
    PaymentIntentLookup,
)


router = APIRouter(tags=["Payments"], dependencies=[Depends(require_api_key)])


@router.post(
    "/create-payment-intent",
    summary="Create payment intent",
    response_model=CreatePaymentIntentResponse,
)
async def create_payment_intent(
    payload: CreatePaymentIntentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    return await service.create_payment_intent(payload)


@router.post(
    "/confirm-payment",
    summary="Retrieve payment intent status",
    response_model=ConfirmPaymentResponse,
)
async def confirm_payment(
    payload: PaymentIntentLookup,
    service: PaymentService = Depends(get_payment_service),
):
    return await service.confirm_payment(payload)


@router.post(
    "/cancel-order",
    summary="Refund a succeeded payment",
    response_model=CancelOrderResponse,
)
async def cancel_order(
    payload: PaymentIntentLookup,
    service: PaymentService = Depends(get_payment_service),
):
    return await service.cancel_and_refund(payload)
