"""
Exceptions for payment providers mapped to unified BusinessException variants.
"""
from __future__ import annotations

from typing import Optional
from domain.common.exceptions import BusinessException
from shared.codes.payment_codes import PaymentCode


class ProcessorError(BusinessException):
    """A processor call failed; ``message`` is the processor's own message."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        operation: str | None = None,
        provider_code: str | None = None,
        http_status: int | None = None,
        details: Optional[dict] = None,
    ):
        full_details = {
            "provider": provider,
            "operation": operation,
            "provider_code": provider_code,
            "http_status": http_status,
        }
        if details:
            full_details.update(details)
        self.provider = provider
        self.operation = operation
        super().__init__(
            code=PaymentCode.PROVIDER_ERROR,
            message=message,
            error_type="ProcessorError",
            details=full_details,
        )
