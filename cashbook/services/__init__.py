"""Services package."""

from cashbook.services.storage import (
    AuditSinkInterface,
    InMemoryAuditSink,
    InMemorySnapshotSource,
    SnapshotSourceInterface,
)

__all__ = [
    "AuditSinkInterface",
    "InMemoryAuditSink",
    "InMemorySnapshotSource",
    "SnapshotSourceInterface",
]
