"""
Base payment client implementing shared concerns: logging and error wrapping.

Concrete providers should subclass and implement provider-specific logic.
"""
from __future__ import annotations

from application.dtos.payments import PaymentIntent, Refund
from application.ports.payment_gateway import PaymentGateway
from core.logging_config import get_logger
from infrastructure.external.payments.exceptions import ProcessorError


logger = get_logger(__name__)


class BasePaymentClient(PaymentGateway):
    provider: str = "base"

    async def aclose(self) -> None:
        """Release provider resources (no-op by default)."""

    # Default implementations raise to force override where needed
    async def create_payment_intent(self, amount_minor: int, currency: str, metadata: dict[str, str]) -> PaymentIntent:  # type: ignore[override]
        raise NotImplementedError

    async def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:  # type: ignore[override]
        raise NotImplementedError

    async def refund_charge(self, charge_id: str) -> Refund:  # type: ignore[override]
        raise NotImplementedError

    # Helpers
    def _processor_error(self, exc: Exception, *, operation: str) -> ProcessorError:
        """Wrap any provider/transport exception, keeping the provider's message."""
        if isinstance(exc, ProcessorError):
            return exc
        message = getattr(exc, "user_message", None) or str(exc) or type(exc).__name__
        provider_code = getattr(exc, "code", None)
        http_status = getattr(exc, "http_status", None)
        logger.error(
            "payment_provider_call_failed",
            provider=self.provider,
            operation=operation,
            error=message,
            error_type=type(exc).__name__,
            provider_code=provider_code,
            http_status=http_status,
        )
        return ProcessorError(
            message,
            provider=self.provider,
            operation=operation,
            provider_code=str(provider_code) if provider_code is not None else None,
            http_status=http_status if isinstance(http_status, int) else None,
        )

    def _log(self, event: str, **kwargs) -> None:
        logger.info(
            event,
            provider=self.provider,
            **kwargs,
        )
