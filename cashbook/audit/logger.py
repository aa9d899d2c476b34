"""
Audit Logger

DESIGN DECISION: Every report the system hands out is logged.
This provides:
1. Traceability of the figures a user was shown
2. A record of every balance sheet that failed to reconcile
3. Debugging capability when a number looks wrong

The audit logger:
- Is synchronous, because the report builders are pure and fast
- Gracefully handles failures (a broken sink never breaks a report)
- Supports correlation IDs to trace the events of one request
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from cashbook.config import LoggingSettings, get_settings
from cashbook.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from cashbook.services.storage import AuditSinkInterface


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog for local logging.

    Called once at import with the environment's settings; call again to
    switch level or renderer.
    """
    settings = settings or get_settings().logging

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.getLogger("cashbook").setLevel(settings.log_level)


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit sink, when one is configured (for persistence)
    """

    def __init__(
        self,
        sink: Optional[AuditSinkInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Storage backend for persistence.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger("cashbook.audit")

    @property
    def sink(self) -> Optional[AuditSinkInterface]:
        return self._sink

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to the sink if available.

        Returns True if the sink write succeeded (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                return self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_statement_generated(
        self,
        period: str,
        net_profit: Decimal,
        total_assets: Decimal,
        correlation_id: UUID,
    ) -> None:
        """Log a generated set of financial statements."""
        event = AuditEventBuilder.statement_generated(
            period=period,
            net_profit=net_profit,
            total_assets=total_assets,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_reconciliation(
        self,
        is_balanced: bool,
        difference: Decimal,
        tolerance: Decimal,
        correlation_id: UUID,
    ) -> None:
        """Log the outcome of the balance sheet check."""
        if is_balanced:
            event = AuditEventBuilder.reconciliation_passed(
                difference=difference,
                correlation_id=correlation_id,
            )
        else:
            event = AuditEventBuilder.reconciliation_failed(
                difference=difference,
                tolerance=tolerance,
                correlation_id=correlation_id,
            )
        self.log(event)

    def log_party_not_found(
        self,
        party_id: str,
        correlation_id: UUID,
    ) -> None:
        """Log a lookup for a party that does not exist."""
        event = AuditEventBuilder.party_not_found(
            party_id=party_id,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_snapshot_validated(
        self,
        is_valid: bool,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log snapshot validation outcome."""
        event = AuditEventBuilder.snapshot_validated(
            is_valid=is_valid,
            issues=issues,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a report request and pass it through
    every event the request emits.
    """
    return uuid4()
