"""
统一错误响应格式定义

Success bodies are operation specific (see application.dtos.payments);
every error body shares this shape and always carries the message in
``error``.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field, field_serializer
from datetime import datetime, timezone


class ErrorBody(BaseModel):
    """错误响应模型"""
    error: str
    type: str
    code: int
    field: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_serializer('timestamp')
    def serialize_timestamp(self, timestamp: datetime) -> str:
        """序列化时间戳为 UTC ISO8601，统一使用 Z 结尾"""
        ts = timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        else:
            ts = ts.astimezone(timezone.utc)
        s = ts.isoformat()
        return s.replace("+00:00", "Z")


def error_response(
    code: int,
    message: str,
    error_type: str = "BusinessError",
    details: Optional[dict] = None,
    field: Optional[str] = None,
    request_id: Optional[str] = None
) -> ErrorBody:
    """
    创建错误响应

    Args:
        code: 业务状态码
        message: 错误消息
        error_type: 错误类型
        details: 错误详情
        field: 错误字段
        request_id: 请求ID

    Returns:
        ErrorBody: 错误响应对象
    """
    return ErrorBody(
        error=message,
        type=error_type,
        code=int(code),
        field=field,
        details=details,
        request_id=request_id,
    )
