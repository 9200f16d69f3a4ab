"""
Structlog 日志配置模块

共享库不在导入时配置日志；宿主服务在入口处调用 configure_logging()。
"""
import json
import logging
from typing import Any, Optional

import structlog
from structlog.contextvars import merge_contextvars
from structlog.stdlib import ProcessorFormatter

from core.config import settings


def _json_dumps(obj, default=None, **kwargs) -> str:
    # structlog passes default/sort_keys through to the serializer
    return json.dumps(obj, ensure_ascii=False, default=default, **kwargs)


def build_pre_chain() -> list[Any]:
    """Processors shared by structlog loggers and foreign (stdlib) records."""
    return [
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def build_renderer(json_logs: bool) -> Any:
    if json_logs:
        return structlog.processors.JSONRenderer(serializer=_json_dumps)
    return structlog.dev.ConsoleRenderer(colors=True)


def resolve_level(level: Optional[str] = None) -> int:
    name = level or settings.LOG_LEVEL
    if name:
        value = logging.getLevelName(name.upper())
        if isinstance(value, int):
            return value
    return logging.DEBUG if settings.DEBUG else logging.INFO


def configure_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """配置 structlog，并让标准库 logging 共用同一条处理链。

    Args:
        level: 日志级别，默认取 LOG_LEVEL，否则 DEBUG 模式为 DEBUG、其余为 INFO
        json_logs: 是否输出 JSON；默认非 DEBUG 模式输出 JSON，DEBUG 模式输出控制台格式
    """
    if json_logs is None:
        json_logs = not settings.DEBUG
    pre_chain = build_pre_chain()

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                ProcessorFormatter.remove_processors_meta,
                build_renderer(json_logs),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """获取 structlog logger 实例。"""
    return structlog.get_logger(name)
