"""Infrastructure models package exports."""
from .base import Base, metadata, AuditMixin, SoftDeleteMixin, DeleteFlagType

__all__ = [
    "Base",
    "metadata",
    "AuditMixin",
    "SoftDeleteMixin",
    "DeleteFlagType",
]
