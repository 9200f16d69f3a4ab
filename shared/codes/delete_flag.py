"""
Soft-delete flag and its persisted integer encoding.
"""
from __future__ import annotations

from enum import IntEnum


class DeleteFlag(IntEnum):
    # Stored verbatim in existing rows; never renumber.
    ACTIVE = 0
    DELETED = 1

    @property
    def flag(self) -> int:
        return int(self)

    @property
    def is_deleted(self) -> bool:
        return self is DeleteFlag.DELETED

    @classmethod
    def of(cls, is_deleted: bool) -> DeleteFlag:
        return cls.DELETED if is_deleted else cls.ACTIVE
