"""
Application service orchestrating payment use-cases.

This class depends only on the application PaymentGateway port and DTOs.
Gateway implementations are provided by infrastructure and must be injected
from the composition root (API/tasks), keeping dependencies one-way.

Refunds are not deduplicated locally: cancelling the same intent twice
issues two refund calls, and the processor decides whether the second one
is rejected.
"""
from __future__ import annotations

from application.dtos.payments import (
    CancelOrderResponse,
    ConfirmPaymentResponse,
    CreatePaymentIntentRequest,
    CreatePaymentIntentResponse,
    PaymentIntentLookup,
)
from application.ports.payment_gateway import PaymentGateway
from domain.common.exceptions import IneligibleStateException
from domain.payment.money import to_major_units, to_minor_units
from domain.payment.refund_policy import ensure_refundable
from core.logging_config import get_logger


logger = get_logger(__name__)


class PaymentService:
    def __init__(self, gateway: PaymentGateway) -> None:
        self.gateway = gateway

    async def create_payment_intent(self, req: CreatePaymentIntentRequest) -> CreatePaymentIntentResponse:
        amount_minor = to_minor_units(req.amount)
        logger.info(
            "payment_intent_create_request",
            provider=self.gateway.provider,
            amount_minor=amount_minor,
            currency=req.currency,
        )
        intent = await self.gateway.create_payment_intent(amount_minor, req.currency, dict(req.metadata or {}))
        logger.info("payment_intent_created", intent_id=intent.id, status=intent.status)
        return CreatePaymentIntentResponse(client_secret=intent.client_secret, payment_intent_id=intent.id)

    async def confirm_payment(self, req: PaymentIntentLookup) -> ConfirmPaymentResponse:
        intent = await self.gateway.retrieve_payment_intent(req.payment_intent_id)
        logger.info("payment_intent_retrieved", intent_id=intent.id, status=intent.status)
        return ConfirmPaymentResponse(status=intent.status, payment_intent=intent.raw)

    async def cancel_and_refund(self, req: PaymentIntentLookup) -> CancelOrderResponse:
        intent = await self.gateway.retrieve_payment_intent(req.payment_intent_id)
        try:
            charge_id = ensure_refundable(intent.id, intent.status, intent.latest_charge)
        except IneligibleStateException as exc:
            logger.info("refund_rejected", intent_id=intent.id, status=intent.status, reason=str(exc))
            raise
        refund = await self.gateway.refund_charge(charge_id)
        logger.info(
            "refund_created",
            intent_id=intent.id,
            refund_id=refund.id,
            charge_id=charge_id,
            status=refund.status,
        )
        return CancelOrderResponse(
            status=refund.status,
            refund_id=refund.id,
            amount_refunded=float(to_major_units(refund.amount)),
            amount_original=float(to_major_units(intent.amount)),
            currency=refund.currency,
        )
