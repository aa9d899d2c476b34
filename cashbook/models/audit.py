"""
Audit Models for Cashbook

Every report the system produces is logged for audit purposes. This
gives:
1. Traceability of which figures were shown to whom and when
2. A record of every reconciliation failure
3. Debugging information when a report looks wrong

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every report the core can produce has its own event type.
    """
    # Ledgers
    ACCOUNT_LEDGER_BUILT = "account_ledger_built"
    CATEGORY_LEDGER_BUILT = "category_ledger_built"
    BUSINESS_PERFORMANCE_BUILT = "business_performance_built"
    BUSINESS_UNIT_LEDGER_BUILT = "business_unit_ledger_built"
    PARTY_LEDGER_BUILT = "party_ledger_built"
    PARTY_NOT_FOUND = "party_not_found"

    # Statements
    STATEMENT_GENERATED = "statement_generated"
    RECONCILIATION_PASSED = "reconciliation_passed"
    RECONCILIATION_FAILED = "reconciliation_failed"

    # Supporting reports
    BOOK_STATISTICS_COMPUTED = "book_statistics_computed"
    OUTSTANDING_REPORT_BUILT = "outstanding_report_built"

    # Data quality
    SNAPSHOT_VALIDATED = "snapshot_validated"
    SNAPSHOT_VALIDATION_FAILED = "snapshot_validation_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every report request creates at least one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'book', 'party', 'statement')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Identifier of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one statements request)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }

    def to_row(self) -> list:
        """
        Flatten to a single row for tabular audit sinks.

        Columns: [event_id, timestamp, event_type, severity, entity_type,
        entity_id, correlation_id, description, details_json, error_message]
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.entity_type or "",
            self.entity_id or "",
            str(self.correlation_id) if self.correlation_id else "",
            self.description,
            json.dumps(self.details, default=str) if self.details else "",
            self.error_message or "",
        ]


def _money(value: Decimal) -> str:
    return str(value)


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.account_ledger_built("CASH", 12, closing, correlation_id)
        event = AuditEventBuilder.reconciliation_failed(difference, tolerance, correlation_id)
    """

    @staticmethod
    def account_ledger_built(
        book_id: str,
        row_count: int,
        closing_balance: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_LEDGER_BUILT,
            entity_type="book",
            entity_id=book_id,
            correlation_id=correlation_id,
            description=f"Ledger built for {book_id}: {row_count} rows",
            details={
                "row_count": row_count,
                "closing_balance": _money(closing_balance),
            },
        )

    @staticmethod
    def category_ledger_built(
        kind: str,
        category_filter: str,
        row_count: int,
        grand_total: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_LEDGER_BUILT,
            entity_type="category_ledger",
            entity_id=kind,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} ledger built: {row_count} entries",
            details={
                "category_filter": category_filter,
                "row_count": row_count,
                "grand_total": _money(grand_total),
            },
        )

    @staticmethod
    def business_performance_built(
        unit_count: int,
        net_total: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUSINESS_PERFORMANCE_BUILT,
            entity_type="business_units",
            correlation_id=correlation_id,
            description=f"Business performance built for {unit_count} units",
            details={"unit_count": unit_count, "net_total": _money(net_total)},
        )

    @staticmethod
    def business_unit_ledger_built(
        unit: str,
        row_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUSINESS_UNIT_LEDGER_BUILT,
            entity_type="business_unit",
            entity_id=unit,
            correlation_id=correlation_id,
            description=f"Business unit ledger built for {unit}",
            details={"row_count": row_count},
        )

    @staticmethod
    def party_ledger_built(
        party_id: str,
        scope: str,
        closing_balance: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PARTY_LEDGER_BUILT,
            entity_type="party",
            entity_id=party_id,
            correlation_id=correlation_id,
            description=f"Party ledger built ({scope})",
            details={"scope": scope, "closing_balance": _money(closing_balance)},
        )

    @staticmethod
    def party_not_found(
        party_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PARTY_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="party",
            entity_id=party_id,
            correlation_id=correlation_id,
            description=f"No customer or lender with id {party_id}",
        )

    @staticmethod
    def statement_generated(
        period: str,
        net_profit: Decimal,
        total_assets: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATEMENT_GENERATED,
            entity_type="statement",
            entity_id=period,
            correlation_id=correlation_id,
            description=f"Financial statements generated for {period}",
            details={
                "net_profit": _money(net_profit),
                "total_assets": _money(total_assets),
            },
        )

    @staticmethod
    def reconciliation_passed(
        difference: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECONCILIATION_PASSED,
            entity_type="statement",
            correlation_id=correlation_id,
            description="Balance sheet balances",
            details={"difference": _money(difference)},
        )

    @staticmethod
    def reconciliation_failed(
        difference: Decimal,
        tolerance: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECONCILIATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="statement",
            correlation_id=correlation_id,
            description=f"Balance sheet out of balance by ₹{difference}",
            error_code="NOT_BALANCED",
            details={
                "difference": _money(difference),
                "tolerance": _money(tolerance),
            },
        )

    @staticmethod
    def book_statistics_computed(
        cash_in_hand: Decimal,
        bank_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BOOK_STATISTICS_COMPUTED,
            entity_type="statistics",
            correlation_id=correlation_id,
            description="Book statistics computed",
            details={"cash_in_hand": _money(cash_in_hand), "bank_count": bank_count},
        )

    @staticmethod
    def outstanding_report_built(
        view: str,
        line_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OUTSTANDING_REPORT_BUILT,
            entity_type="outstanding",
            entity_id=view,
            correlation_id=correlation_id,
            description=f"Outstanding {view} report: {line_count} lines",
            details={"line_count": line_count},
        )

    @staticmethod
    def snapshot_validated(
        is_valid: bool,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        if is_valid:
            return AuditEvent(
                event_type=AuditEventType.SNAPSHOT_VALIDATED,
                entity_type="snapshot",
                correlation_id=correlation_id,
                description=f"Snapshot validated with {len(issues)} non-blocking issues",
                details={"issues": issues},
            )
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="snapshot",
            correlation_id=correlation_id,
            description=f"Snapshot validation failed with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
