"""
Abstract Storage Interface

DESIGN DECISION: The reporting core never talks to a database. It reads
a snapshot from whatever store the host application uses and writes
audit events to whatever sink it provides. Both sides are defined here
as small abstract interfaces so that:
1. The host can plug in its own store without touching report logic
2. Tests use in-memory implementations
3. Business logic stays decoupled from storage

The interfaces are intentionally tiny - just the operations the reports
need.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from cashbook.models.audit import AuditEvent
from cashbook.models.snapshot import LedgerSnapshot


class SnapshotSourceInterface(ABC):
    """
    Abstract source of ledger snapshots.

    Implementations return the current state of the books every time
    they are asked; reports never cache a snapshot between requests.
    """

    @abstractmethod
    def load_snapshot(self) -> LedgerSnapshot:
        """
        Load the current snapshot.

        Returns:
            An immutable LedgerSnapshot

        Raises:
            SnapshotSourceError: If the snapshot cannot be loaded
        """
        pass


class AuditSinkInterface(ABC):
    """
    Abstract interface for audit event storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if stored successfully
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(self, correlation_id: UUID) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (one report request).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass
