"""
Audit Models for Ledger Form

Every significant user action in the form is logged for audit purposes.
This provides:
1. Traceability of what the user picked and submitted
2. Debugging information when the backend misbehaves
3. A way to reconstruct one form session from its correlation ID

DESIGN DECISION: Audit events are immutable records. We never modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every step of the entry form has its own event type.
    """
    # Date selection
    DATE_SELECTED = "date_selected"
    DATE_CLEARED = "date_cleared"

    # Categories
    CATEGORIES_LOADED = "categories_loaded"
    CATEGORIES_FALLBACK_USED = "categories_fallback_used"

    # Entry form
    ENTRY_VALIDATION_PASSED = "entry_validation_passed"
    ENTRY_VALIDATION_FAILED = "entry_validation_failed"
    ENTRY_SUBMITTED = "entry_submitted"
    ENTRY_REJECTED = "entry_rejected"

    # Login
    LOGIN_ATTEMPTED = "login_attempted"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"

    # System events
    SYSTEM_ERROR = "system_error"
    EXTERNAL_SERVICE_ERROR = "external_service_error"


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
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
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

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'entry', 'date', 'session')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., all events in one form session)"
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

    # Error information (if applicable)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

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
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.date_selected(selected, correlation_id)
        event = AuditEventBuilder.entry_submitted(entry_id, category, value, correlation_id)
    """

    @staticmethod
    def date_selected(
        selected: Optional[datetime],
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        if selected is None:
            return AuditEvent(
                event_type=AuditEventType.DATE_CLEARED,
                entity_type="date",
                correlation_id=correlation_id,
                description="Date selection does not resolve to a date",
                is_user_action=True,
            )
        return AuditEvent(
            event_type=AuditEventType.DATE_SELECTED,
            entity_type="date",
            correlation_id=correlation_id,
            description=f"Date selected: {selected.date().isoformat()}",
            details={"selected_date": selected.isoformat()},
            is_user_action=True,
        )

    @staticmethod
    def categories_loaded(
        count: int,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORIES_LOADED,
            entity_type="categories",
            correlation_id=correlation_id,
            description=f"Loaded {count} categories",
            details={"count": count},
        )

    @staticmethod
    def categories_fallback_used(
        reason: str,
        count: int,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORIES_FALLBACK_USED,
            severity=AuditSeverity.WARNING,
            entity_type="categories",
            correlation_id=correlation_id,
            description="Backend categories unavailable, using configured fallback",
            details={"reason": reason, "count": count},
        )

    @staticmethod
    def validation_failed(
        issues: list[dict],
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="entry",
            correlation_id=correlation_id,
            description=f"Entry validation failed with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def validation_passed(
        warnings: list[str],
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_VALIDATION_PASSED,
            entity_type="entry",
            correlation_id=correlation_id,
            description="Entry validation passed",
            details={"warnings": warnings},
        )

    @staticmethod
    def entry_submitted(
        entry_id: UUID,
        category: str,
        value: str,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_SUBMITTED,
            entity_type="entry",
            entity_id=entry_id,
            correlation_id=correlation_id,
            description=f"Entry submitted: {category} - {value}",
            details={"category": category, "value": value},
            is_user_action=True,
        )

    @staticmethod
    def entry_rejected(
        reason: Optional[str],
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_REJECTED,
            entity_type="entry",
            correlation_id=correlation_id,
            description="User discarded the entry form",
            details={"reason": reason or "No reason provided"},
            is_user_action=True,
        )

    @staticmethod
    def login_attempted(
        username: str,
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_ATTEMPTED,
            entity_type="session",
            correlation_id=correlation_id,
            description=f"Login attempted for {username}",
            details={"username": username},
            is_user_action=True,
        )

    @staticmethod
    def login_result(
        username: str,
        succeeded: bool,
        message: Optional[str],
        correlation_id: Optional[UUID],
    ) -> AuditEvent:
        if succeeded:
            return AuditEvent(
                event_type=AuditEventType.LOGIN_SUCCEEDED,
                entity_type="session",
                correlation_id=correlation_id,
                description=f"Login succeeded for {username}",
                details={"username": username},
            )
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="session",
            correlation_id=correlation_id,
            description=f"Login failed for {username}",
            error_message=message,
            details={"username": username},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={"service": service},
            correlation_id=correlation_id,
        )
