"""Pytest bootstrap configuration.

Ensure mandatory environment variables are set before test collection
and module imports that depend on application settings.
"""
import os

# Processor credential is required to build the real gateway
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
# Tests run in parity mode unless they enable the key explicitly
os.environ.pop("API_KEY", None)

from typing import Optional

import pytest

from application.dtos.payments import PaymentIntent, Refund
from infrastructure.external.payments.exceptions import ProcessorError


class StubGateway:
    """In-memory processor double recording every call."""

    provider = "stub"

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.intents: dict[str, PaymentIntent] = {}
        self.refund_amount: Optional[int] = None
        self.refund_error: Optional[Exception] = None
        self.closed = False

    def add_intent(
        self,
        intent_id: str = "pi_123",
        *,
        status: str = "succeeded",
        amount: int = 2500,
        currency: str = "usd",
        latest_charge: Optional[str] = "ch_123",
    ) -> PaymentIntent:
        intent = PaymentIntent(
            id=intent_id,
            status=status,
            amount=amount,
            currency=currency,
            client_secret=f"{intent_id}_secret_abc",
            latest_charge=latest_charge,
            raw={
                "id": intent_id,
                "object": "payment_intent",
                "status": status,
                "amount": amount,
                "currency": currency,
                "latest_charge": latest_charge,
            },
        )
        self.intents[intent_id] = intent
        return intent

    async def create_payment_intent(self, amount_minor: int, currency: str, metadata: dict[str, str]) -> PaymentIntent:
        self.calls.append(("create_payment_intent", amount_minor, currency, metadata))
        return self.add_intent(
            f"pi_{len(self.intents) + 1}",
            status="requires_payment_method",
            amount=amount_minor,
            currency=currency,
            latest_charge=None,
        )

    async def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        self.calls.append(("retrieve_payment_intent", intent_id))
        if intent_id not in self.intents:
            raise ProcessorError(
                f"No such payment_intent: '{intent_id}'",
                provider=self.provider,
                operation="retrieve_payment_intent",
                provider_code="resource_missing",
                http_status=404,
            )
        return self.intents[intent_id]

    async def refund_charge(self, charge_id: str) -> Refund:
        self.calls.append(("refund_charge", charge_id))
        if self.refund_error is not None:
            raise self.refund_error
        intent = next(i for i in self.intents.values() if i.latest_charge == charge_id)
        return Refund(
            id=f"re_{len(self.calls)}",
            status="succeeded",
            amount=self.refund_amount if self.refund_amount is not None else intent.amount,
            currency=intent.currency,
            charge=charge_id,
        )

    async def aclose(self) -> None:
        self.closed = True

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def client(gateway):
    from fastapi.testclient import TestClient
    from main import app
    from api.dependencies import get_payment_gateway

    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
