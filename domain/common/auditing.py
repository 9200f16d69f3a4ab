"""Audit fields and the before-write population rule.

The fields are plain data on the entity. Populating them is the job of
``AuditingHook.before_write``, which the host persistence layer calls
explicitly on its write path (see ``infrastructure.auditing`` for the
SQLAlchemy wiring).

Rule:
  * first write (no ``created_at`` yet): ``created_by``/``created_at`` come from the current actor
    and clock, and ``last_modified_by``/``last_modified_at`` are set to the
    same values;
  * every later write: only ``last_modified_by``/``last_modified_at`` move.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol, runtime_checkable

ActorProvider = Callable[[], Optional[str]]
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@runtime_checkable
class Auditable(Protocol):
    created_by: Optional[str]
    created_at: Optional[datetime]
    last_modified_by: Optional[str]
    last_modified_at: Optional[datetime]


@dataclass
class AuditFields:
    """Standalone carrier of the four audit fields."""

    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    last_modified_by: Optional[str] = None
    last_modified_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entity: Auditable) -> AuditFields:
        return cls(
            created_by=entity.created_by,
            created_at=entity.created_at,
            last_modified_by=entity.last_modified_by,
            last_modified_at=entity.last_modified_at,
        )


class AuditingHook:
    """Explicit interception point for stamping audit fields before a write."""

    def __init__(self, actor_provider: ActorProvider, clock: Clock = utc_now) -> None:
        self._actor_provider = actor_provider
        self._clock = clock

    def before_write(self, entity: Auditable) -> None:
        actor = self._actor_provider()
        now = self._clock()
        # created fields are written once; preset values survive an insert
        if entity.created_at is None:
            entity.created_by = actor
            entity.created_at = now
        entity.last_modified_by = actor
        entity.last_modified_at = now
