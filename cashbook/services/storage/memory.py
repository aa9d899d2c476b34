"""
In-Memory Storage Implementation

Holds a snapshot and an audit trail in process memory. Used by tests and
by hosts that already have their data loaded and only want reports.
"""

from typing import Optional
from uuid import UUID

from cashbook.exceptions import SnapshotSourceError
from cashbook.models.audit import AuditEvent
from cashbook.models.snapshot import LedgerSnapshot
from cashbook.services.storage.interface import (
    AuditSinkInterface,
    SnapshotSourceInterface,
)


class InMemorySnapshotSource(SnapshotSourceInterface):
    """Serves whatever snapshot it was last given."""

    def __init__(self, snapshot: Optional[LedgerSnapshot] = None):
        self._snapshot = snapshot

    def replace(self, snapshot: LedgerSnapshot) -> None:
        """Swap in a newer snapshot; later reports will see it."""
        self._snapshot = snapshot

    def load_snapshot(self) -> LedgerSnapshot:
        if self._snapshot is None:
            raise SnapshotSourceError("No snapshot has been loaded")
        return self._snapshot


class InMemoryAuditSink(AuditSinkInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(self, correlation_id: UUID) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
