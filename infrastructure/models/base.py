"""
数据库模型基类与可复用的审计/软删除字段（SQLAlchemy 2.0 风格）
"""
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

from shared.codes import DeleteFlag


class Base(DeclarativeBase):
    pass


# 元数据对象用于数据库迁移
metadata = Base.metadata


class DeleteFlagType(TypeDecorator):
    """以整数 0/1 持久化 DeleteFlag"""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return DeleteFlag(value).flag

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return DeleteFlag(value)


class AuditMixin:
    """
    审计字段

    只定义字段；由 infrastructure.auditing 注册到会话上的钩子负责填充
    """

    created_by = Column(String(100), nullable=True, comment="创建人")
    created_at = Column(DateTime(timezone=True), nullable=True, comment="创建时间")
    last_modified_by = Column(String(100), nullable=True, comment="最后修改人")
    last_modified_at = Column(DateTime(timezone=True), nullable=True, comment="最后修改时间")


class SoftDeleteMixin:
    """软删除标记：0=ACTIVE，1=DELETED"""

    delete_flag = Column(
        DeleteFlagType(),
        nullable=False,
        default=DeleteFlag.ACTIVE,
        index=True,
        comment="删除标记：0=正常，1=已删除",
    )

    @property
    def is_deleted(self) -> bool:
        return self.delete_flag == DeleteFlag.DELETED

    def mark_deleted(self) -> None:
        self.delete_flag = DeleteFlag.DELETED

    def restore(self) -> None:
        self.delete_flag = DeleteFlag.ACTIVE

    @classmethod
    def active_clause(cls):
        return cls.delete_flag == DeleteFlag.ACTIVE

    @classmethod
    def deleted_clause(cls):
        return cls.delete_flag == DeleteFlag.DELETED
