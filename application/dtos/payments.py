"""
Payment DTOs (Pydantic v2) used at application boundaries.

Request/response models keep the wire names of the public JSON contract
(``paymentIntentId``, ``clientSecret``...) through aliases; Python code
uses snake_case attributes.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


DEFAULT_CURRENCY = "usd"
AMOUNTS_NOTE = "All amounts are shown in dollars"
REFUND_SUCCESS_MESSAGE = "Refund processed successfully"


class CreatePaymentIntentRequest(BaseModel):
    # Optional at the type level so a missing amount reaches the validator
    amount: Optional[Decimal] = Field(default=None, validate_default=True)
    currency: str = Field(default=DEFAULT_CURRENCY)
    metadata: Optional[dict[str, str]] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, v: Any) -> Decimal:
        if v is None or isinstance(v, bool):
            raise ValueError("Valid amount is required")
        try:
            value = Decimal(str(v).strip())
        except InvalidOperation:
            raise ValueError("Valid amount is required") from None
        if not value.is_finite() or value <= 0:
            raise ValueError("Valid amount is required")
        return value

    @field_validator("currency", mode="before")
    @classmethod
    def _lower_and_validate_currency(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise ValueError("currency must be an ISO-4217 alpha-3 string")
        c = v.strip().lower()
        if len(c) != 3 or not (c.isascii() and c.isalpha()):
            raise ValueError("currency must be an ISO-4217 alpha-3 string")
        return c


class PaymentIntentLookup(BaseModel):
    payment_intent_id: Optional[str] = Field(default=None, alias="paymentIntentId", validate_default=True)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("payment_intent_id", mode="before")
    @classmethod
    def _require_id(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Payment intent ID is required")
        return v.strip()


class PaymentIntent(BaseModel):
    """Processor view of a payment intent. Amounts are minor units."""

    id: str
    status: str
    amount: int
    currency: str
    client_secret: Optional[str] = None
    latest_charge: Optional[str] = None
    # full record as reported by the processor
    raw: dict[str, Any] = Field(default_factory=dict)


class Refund(BaseModel):
    """Processor view of a refund. Amounts are minor units."""

    id: str
    status: Optional[str] = None
    amount: int
    currency: str
    charge: Optional[str] = None


class CreatePaymentIntentResponse(BaseModel):
    client_secret: Optional[str] = Field(alias="clientSecret")
    payment_intent_id: str = Field(alias="paymentIntentId")

    model_config = ConfigDict(populate_by_name=True)


class ConfirmPaymentResponse(BaseModel):
    status: str
    payment_intent: dict[str, Any] = Field(alias="paymentIntent")

    model_config = ConfigDict(populate_by_name=True)


class RefundNote(BaseModel):
    note: str = AMOUNTS_NOTE


class CancelOrderResponse(BaseModel):
    status: Optional[str] = None
    refund_id: str = Field(alias="refundId")
    amount_refunded: float
    amount_original: float
    currency: str
    message: str = REFUND_SUCCESS_MESSAGE
    metadata: RefundNote = Field(default_factory=RefundNote)

    model_config = ConfigDict(populate_by_name=True)
