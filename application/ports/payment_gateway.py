"""
Payment gateway port (application/ports) exposing a replaceable protocol.

Application depends on this Protocol; infrastructure implements adapters.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from application.dtos.payments import PaymentIntent, Refund


@runtime_checkable
class PaymentGateway(Protocol):
    """Gateway protocol for the third-party payment processor.

    Implementations should be async and side-effect free beyond IO. Amounts
    crossing this boundary are integer minor units. Every failure must be
    raised as ``ProcessorError``.
    """

    provider: str

    async def create_payment_intent(
        self,
        amount_minor: int,
        currency: str,
        metadata: dict[str, str],
    ) -> PaymentIntent: ...

    async def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent: ...

    async def refund_charge(self, charge_id: str) -> Refund: ...

    async def aclose(self) -> None: ...
