"""
Stripe PaymentIntents adapter using the official stripe-python SDK.

Notes on SDK usage:
- The async resource helpers (`stripe.PaymentIntent.create_async`,
  `retrieve_async`, `stripe.Refund.create_async`) run on the SDK's async
  HTTP client (httpx), so each processor call is an await point.
- The secret key and API version are sent as per-request options; module
  globals such as `stripe.api_key` are never mutated, which keeps several
  gateways (or a test double) side by side in one process.
- `max_network_retries` is left at the SDK default (0): no retries.
"""
from __future__ import annotations

from typing import Any, Optional

import stripe

from application.dtos.payments import PaymentIntent, Refund
from infrastructure.external.payments.base import BasePaymentClient
from shared.codes.payment_codes import STRIPE_INTENT_STATUSES
from core.logging_config import get_logger


logger = get_logger(__name__)


def _plain(value: Any) -> Any:
    """StripeObject (possibly nested) -> plain dict/list tree."""
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        value = to_dict()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def _object_id(value: Any) -> Optional[str]:
    # Expandable fields come back either as an id or as the expanded object
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    return str(value["id"])


class StripeGateway(BasePaymentClient):
    provider = "stripe"

    def __init__(self, secret_key: Optional[str], *, api_version: Optional[str] = None):
        if not secret_key:
            raise RuntimeError("STRIPE_SECRET_KEY not configured")
        self._api_key = secret_key
        self._api_version = api_version

    def _request_options(self) -> dict[str, Any]:
        opts: dict[str, Any] = {"api_key": self._api_key}
        if self._api_version:
            opts["stripe_version"] = self._api_version
        return opts

    def _to_intent(self, pi: Any) -> PaymentIntent:
        data = _plain(pi)
        status = str(data["status"])
        if status not in STRIPE_INTENT_STATUSES:
            logger.warning("stripe_unknown_intent_status", intent_id=data["id"], status=status)
        return PaymentIntent(
            id=str(data["id"]),
            status=status,
            amount=int(data["amount"]),
            currency=str(data["currency"]),
            client_secret=data.get("client_secret"),
            latest_charge=_object_id(data.get("latest_charge")),
            raw=data,
        )

    def _to_refund(self, refund: Any) -> Refund:
        data = _plain(refund)
        return Refund(
            id=str(data["id"]),
            status=data.get("status"),
            amount=int(data["amount"]),
            currency=str(data["currency"]),
            charge=_object_id(data.get("charge")),
        )

    async def create_payment_intent(self, amount_minor: int, currency: str, metadata: dict[str, str]) -> PaymentIntent:  # type: ignore[override]
        try:
            pi = await stripe.PaymentIntent.create_async(
                amount=amount_minor,
                currency=currency,
                metadata=metadata,
                automatic_payment_methods={"enabled": True},
                **self._request_options(),
            )
            intent = self._to_intent(pi)
        except Exception as exc:
            raise self._processor_error(exc, operation="create_payment_intent") from exc
        self._log("stripe_payment_intent_created", intent_id=intent.id, status=intent.status)
        return intent

    async def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:  # type: ignore[override]
        try:
            pi = await stripe.PaymentIntent.retrieve_async(intent_id, **self._request_options())
            return self._to_intent(pi)
        except Exception as exc:
            raise self._processor_error(exc, operation="retrieve_payment_intent") from exc

    async def refund_charge(self, charge_id: str) -> Refund:  # type: ignore[override]
        try:
            refund = self._to_refund(
                await stripe.Refund.create_async(charge=charge_id, **self._request_options())
            )
        except Exception as exc:
            raise self._processor_error(exc, operation="refund_charge") from exc
        self._log("stripe_refund_created", refund_id=refund.id, charge_id=charge_id, status=refund.status)
        return refund
