"""
把审计钩子接到 SQLAlchemy 会话的写入路径上

The listener lives on the session (or session factory) chosen by the host,
never on the entity classes.
"""
from typing import Callable

from sqlalchemy import event

from core.logging_config import get_logger
from domain.common.auditing import AuditingHook
from infrastructure.models.base import AuditMixin


logger = get_logger(__name__)

FlushListener = Callable[..., None]


def _resolve_target(target):
    # AsyncSession proxies a sync Session; session events live on the latter
    return getattr(target, "sync_session", target)


def build_flush_listener(hook: AuditingHook) -> FlushListener:
    """构造 before_flush 监听函数：新对象与有改动的脏对象交给钩子盖章"""

    def _before_flush(session, flush_context, instances) -> None:
        stamped = 0
        for obj in list(session.new):
            if isinstance(obj, AuditMixin):
                hook.before_write(obj)
                stamped += 1
        for obj in list(session.dirty):
            if isinstance(obj, AuditMixin) and session.is_modified(obj, include_collections=False):
                hook.before_write(obj)
                stamped += 1
        if stamped:
            logger.debug("audit_flush_stamped", count=stamped)

    return _before_flush


def register_auditing(target, hook: AuditingHook) -> FlushListener:
    """
    在会话（Session 实例 / sessionmaker / Session 子类 / AsyncSession 实例）上注册审计钩子

    Returns:
        注册的监听函数，可传给 unregister_auditing 注销
    """
    listener = build_flush_listener(hook)
    event.listen(_resolve_target(target), "before_flush", listener)
    logger.info("auditing_registered", target=getattr(target, "__name__", type(target).__name__))
    return listener


def unregister_auditing(target, listener: FlushListener) -> None:
    resolved = _resolve_target(target)
    if event.contains(resolved, "before_flush", listener):
        event.remove(resolved, "before_flush", listener)
        logger.info("auditing_unregistered", target=getattr(target, "__name__", type(target).__name__))
