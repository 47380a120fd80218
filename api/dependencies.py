"""
API依赖项 - 支付网关注入与调用方认证
"""
import secrets
from typing import Optional

from fastapi import Depends, Header, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from application.ports.payment_gateway import PaymentGateway
from application.services.payment_service import PaymentService
from core.config import settings
from core.exceptions import UnauthorizedException


# HTTP Bearer for direct API calls
http_bearer = HTTPBearer(
    scheme_name="Bearer",
    description="API key sent as a bearer token",
    auto_error=False,
)


async def get_payment_gateway(request: Request) -> PaymentGateway:
    """返回进程启动时构建的网关实例（见 main.lifespan）。"""
    gateway = getattr(request.app.state, "payment_gateway", None)
    if gateway is None:
        raise RuntimeError("Payment gateway is not initialised")
    return gateway


async def get_payment_service(gateway: PaymentGateway = Depends(get_payment_gateway)) -> PaymentService:
    return PaymentService(gateway=gateway)


async def require_api_key(
    x_api_key: Optional[str] = Header(default=None),
    bearer_token: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> None:
    """未配置 API_KEY 时放行；否则校验 X-API-Key 或 Bearer token。"""
    expected = settings.API_KEY
    if not expected:
        return
    presented = x_api_key or (bearer_token.credentials if bearer_token else None)
    if not presented:
        raise UnauthorizedException("API key required")
    if not secrets.compare_digest(presented.encode("utf-8"), expected.encode("utf-8")):
        raise UnauthorizedException("Invalid API key")
