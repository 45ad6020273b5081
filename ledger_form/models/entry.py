"""
Entry Data Models for Ledger Form

These models define the schemas for what a user submits:
1. A new dated financial entry
2. Login credentials

DESIGN DECISION: We use Pydantic v2 so malformed form data is caught at
the boundary with clear messages, instead of being silently coerced.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENTRY
# =============================================================================

class NewEntry(BaseModel):
    """
    A financial entry the user has filled in and submitted.

    CRITICAL: Only entries that passed validation are built.
    The entry date comes from the cascading date selector and
    carries the selector's fixed offset.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    entry_id: UUID = Field(
        default_factory=uuid4,
        description="Unique entry ID"
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="When the entry was submitted"
    )

    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Entry category (from the backend list)"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="What the entry is for"
    )
    value: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Entry amount"
    )
    entry_date: AwareDatetime = Field(
        ...,
        description="Date the entry is booked on"
    )


class LoginCredentials(BaseModel):
    """Username and password as typed into the login form."""
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(
        ...,
        min_length=1,
        max_length=100,
    )
    password: SecretStr = Field(
        ...,
        description="Never logged or echoed back"
    )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'out_of_range', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a submitted entry form.

    Errors block submission; warnings are shown but do not block.
    """

    validated_at: datetime = Field(
        default_factory=_utcnow
    )
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
