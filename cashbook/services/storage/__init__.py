"""
Storage Services Package

Abstract interfaces for reading snapshots and writing audit events, plus
in-memory implementations.
"""

from cashbook.services.storage.interface import (
    AuditSinkInterface,
    SnapshotSourceInterface,
)
from cashbook.services.storage.memory import (
    InMemoryAuditSink,
    InMemorySnapshotSource,
)

__all__ = [
    # Interfaces
    "AuditSinkInterface",
    "SnapshotSourceInterface",
    # In-memory implementation
    "InMemoryAuditSink",
    "InMemorySnapshotSource",
]
