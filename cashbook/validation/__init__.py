"""Snapshot validation package."""

from cashbook.validation.validator import SnapshotValidator

__all__ = ["SnapshotValidator"]
