"""
Data Models Package

This package contains all Pydantic models used in Ledger Form.
All data flowing through the system must conform to these schemas.
"""

from ledger_form.models.dates import (
    DateRange,
    Day,
    Month,
    Year,
)
from ledger_form.models.select import SelectOption
from ledger_form.models.entry import (
    LoginCredentials,
    NewEntry,
    ValidationIssue,
    ValidationResult,
)
from ledger_form.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Calendar models
    "DateRange",
    "Day",
    "Month",
    "Year",
    # Presentation models
    "SelectOption",
    # Entry models
    "LoginCredentials",
    "NewEntry",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
