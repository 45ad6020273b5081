"""
Audit Logger

DESIGN DECISION: Every significant user action in the form is logged.
This provides:
1. Complete traceability of a form session
2. Debugging capability
3. A record of which date the user actually picked

The audit logger:
- Is synchronous; it only writes to the local structured log
- Gracefully handles failures (doesn't crash the form if logging fails)
- Supports correlation IDs to trace related events
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

import structlog

from ledger_form.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(log_level: str = "INFO") -> None:
    """
    Route structured logs to stderr at the given level.

    Called once by the app entry point with the configured level.
    """
    logging.basicConfig(format="%(message)s", level=log_level)
    logging.getLogger("ledger_form").setLevel(log_level)


class AuditLogger:
    """
    Central audit logging service.

    Writes every event to the structured local log at the level
    matching its severity.
    """

    def __init__(self):
        self._logger = structlog.get_logger("ledger_form.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written, False if logging failed.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # Logging must never break the form
            return False

        return True

    def log_date_selected(
        self,
        selected: Optional[datetime],
        correlation_id: Optional[UUID],
    ) -> None:
        """Log the date emitted by the date selector."""
        self.log(AuditEventBuilder.date_selected(selected, correlation_id))

    def log_categories_loaded(
        self,
        count: int,
        correlation_id: Optional[UUID],
    ) -> None:
        self.log(AuditEventBuilder.categories_loaded(count, correlation_id))

    def log_categories_fallback(
        self,
        reason: str,
        count: int,
        correlation_id: Optional[UUID],
    ) -> None:
        self.log(AuditEventBuilder.categories_fallback_used(reason, count, correlation_id))

    def log_validation(
        self,
        passed: bool,
        issues: list[dict],
        warnings: list[str],
        correlation_id: Optional[UUID],
    ) -> None:
        """Log the outcome of entry validation."""
        if passed:
            event = AuditEventBuilder.validation_passed(warnings, correlation_id)
        else:
            event = AuditEventBuilder.validation_failed(issues, correlation_id)
        self.log(event)

    def log_entry_submitted(
        self,
        entry_id: UUID,
        category: str,
        value: str,
        correlation_id: Optional[UUID],
    ) -> None:
        self.log(AuditEventBuilder.entry_submitted(entry_id, category, value, correlation_id))

    def log_entry_rejected(
        self,
        reason: Optional[str],
        correlation_id: Optional[UUID],
    ) -> None:
        self.log(AuditEventBuilder.entry_rejected(reason, correlation_id))

    def log_login_attempted(
        self,
        username: str,
        correlation_id: Optional[UUID],
    ) -> None:
        self.log(AuditEventBuilder.login_attempted(username, correlation_id))

    def log_login_result(
        self,
        username: str,
        succeeded: bool,
        message: Optional[str],
        correlation_id: Optional[UUID],
    ) -> None:
        self.log(AuditEventBuilder.login_result(username, succeeded, message, correlation_id))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))

    def log_external_service_error(
        self,
        service: str,
        error_message: str,
        correlation_id: Optional[UUID],
    ) -> None:
        """Log external service error."""
        self.log(AuditEventBuilder.external_service_error(
            service=service,
            error_message=error_message,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this when a form session starts (page load or "new entry").
    Pass it through all subsequent operations.
    """
    return uuid4()
