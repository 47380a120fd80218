"""
Structlog 日志配置模块

所有事件（structlog 与桥接过来的标准库 logging）共用一条处理链；
链上的 mask_sensitive 会在渲染前把支付凭据替换为 "***"：
- 敏感键：client_secret / api_key / authorization 等，任意嵌套层级
- 敏感值：Stripe 密钥（sk_/rk_）和 PaymentIntent 的 client secret，即使藏在普通字段或异常文本里
"""
import logging
import json
import re
import structlog
from structlog.processors import TimeStamper, add_log_level, JSONRenderer
from structlog.dev import ConsoleRenderer
from structlog.contextvars import merge_contextvars
from structlog.stdlib import ProcessorFormatter
from structlog.typing import EventDict, WrappedLogger
from typing import Any, List

from core.config import settings


MASK = "***"

# 比较时统一小写，并忽略 "-" / "_"（clientSecret、x-api-key 也能命中）
SENSITIVE_KEYS = frozenset({
    "clientsecret",
    "secret",
    "secretkey",
    "apikey",
    "xapikey",
    "token",
    "authorization",
})

# sk_test_xxx / sk_live_xxx / rk_live_xxx，以及 pi_xxx_secret_yyy
_SECRET_VALUE_RE = re.compile(r"\b(?:[sr]k_(?:test|live)_[A-Za-z0-9]+|pi_[A-Za-z0-9]+_secret_[A-Za-z0-9]+)\b")


def _is_sensitive_key(key: Any) -> bool:
    return str(key).lower().replace("_", "").replace("-", "") in SENSITIVE_KEYS


def mask_sensitive_data(data: Any) -> Any:
    """递归脱敏 dict/list/str；其他类型原样返回。"""
    if isinstance(data, dict):
        return {k: (MASK if _is_sensitive_key(k) else mask_sensitive_data(v)) for k, v in data.items()}
    if isinstance(data, list):
        return [mask_sensitive_data(v) for v in data]
    if isinstance(data, tuple):
        return tuple(mask_sensitive_data(v) for v in data)
    if isinstance(data, str):
        return _SECRET_VALUE_RE.sub(MASK, data)
    return data


def mask_sensitive(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """structlog processor: 对整个 event dict 做脱敏。"""
    return mask_sensitive_data(event_dict)


def get_renderer() -> Any:
    """根据环境选择渲染器 (Console in DEBUG, JSON otherwise).
    注意：structlog 会向 serializer 传入 default/sort_keys 等参数，需要适配。
    """
    if settings.DEBUG:
        return ConsoleRenderer(colors=True)

    def _dumps(obj, default=None, **kwargs):
        return json.dumps(obj, ensure_ascii=False, default=default, **kwargs)
    return JSONRenderer(serializer=_dumps)


def build_shared_processors() -> List[Any]:
    """structlog 与 stdlib ProcessorFormatter 共用的预处理链。

    mask_sensitive 放在 format_exc_info 之后，异常文本里的密钥也会被替换。
    """
    return [
        merge_contextvars,
        add_log_level,
        TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        mask_sensitive,
    ]


def configure_logging() -> None:
    """配置 structlog 并桥接标准库 logging 到同一处理链。"""
    shared_pre_chain = build_shared_processors()

    structlog.configure(
        processors=[
            *shared_pre_chain,
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # 标准库 logging（uvicorn、stripe SDK 等）也纳入 structlog 渲染
    formatter = ProcessorFormatter(
        foreign_pre_chain=shared_pre_chain,
        processors=[
            ProcessorFormatter.remove_processors_meta,
            get_renderer(),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    # stripe SDK 在 DEBUG 下会打印完整请求/响应，压到 WARNING
    logging.getLogger("stripe").setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """获取 structlog logger 实例。"""
    return structlog.get_logger(name)
