"""领域层业务异常定义，供领域与基础设施使用。

核心（core）层仅负责全局映射与异常处理，尽量避免领域层反向依赖核心层。
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode
from shared.codes.payment_codes import PaymentCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class InvalidRequestException(BusinessException):
    """Caller input is missing or malformed; raised before any processor call."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=message,
            error_type="InvalidRequest",
            details=details,
            field=field,
        )


class IneligibleStateException(BusinessException):
    """The referenced payment exists but its state does not permit the operation."""

    def __init__(self, message: str, *, payment_intent_id: str, status: str | None = None):
        details = {"payment_intent_id": payment_intent_id}
        if status is not None:
            details["status"] = status
        super().__init__(
            code=PaymentCode.INELIGIBLE_STATE,
            message=message,
            error_type="IneligibleState",
            details=details,
        )
