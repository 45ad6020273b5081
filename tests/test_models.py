"""
Tests for Ledger Form

Test strategy:
1. Unit tests for individual components (models, engine, controller, validators)
2. Integration tests for flows (with a static or mocked backend)
3. No real network calls in tests (use httpx.MockTransport)
"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from ledger_form.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    DateRange,
    LoginCredentials,
    Month,
    NewEntry,
    SelectOption,
    ValidationIssue,
    ValidationResult,
)


ENTRY_DATE = datetime(2024, 12, 15, 9, 30, tzinfo=timezone.utc)


class TestDateRange:
    """Tests for the DateRange model."""

    def test_date_range_creation(self):
        """Test DateRange keeps both instants as given."""
        start = datetime(1999, 1, 1, tzinfo=timezone.utc)
        end = datetime(2001, 12, 31, tzinfo=timezone.utc)
        date_range = DateRange.between(start, end)
        assert date_range.start == start
        assert date_range.end == end
        assert not date_range.is_inverted

    def test_inverted_range_is_allowed(self):
        """Test that start after end is valid data, not an error."""
        date_range = DateRange(
            start=datetime(2001, 1, 1, tzinfo=timezone.utc),
            end=datetime(1999, 1, 1, tzinfo=timezone.utc),
        )
        assert date_range.is_inverted

    def test_naive_datetimes_rejected(self):
        """Test that instants must carry an offset."""
        with pytest.raises(ValueError):
            DateRange(start=datetime(1999, 1, 1), end=datetime(2001, 1, 1))

    def test_date_range_is_immutable(self):
        """Test that a range cannot be changed after construction."""
        date_range = DateRange(
            start=datetime(1999, 1, 1, tzinfo=timezone.utc),
            end=datetime(2001, 1, 1, tzinfo=timezone.utc),
        )
        with pytest.raises(ValueError):
            date_range.start = datetime(1990, 1, 1, tzinfo=timezone.utc)


class TestSelectOption:
    """Tests for the SelectOption model."""

    def test_month_option(self):
        """Test month options carry the number as value and the name as label."""
        option = SelectOption.from_month(Month.MARCH)
        assert option.value == "3"
        assert option.display_text == "March"
        assert option.selected is False
        assert option.disabled is False

    def test_year_and_day_options(self):
        assert SelectOption.from_year(1999).value == "1999"
        assert SelectOption.from_day(7).display_text == "7"

    def test_with_selected_returns_copy(self):
        """Test that options are never mutated in place."""
        option = SelectOption.from_text("Groceries")
        selected = option.with_selected(True)
        assert selected.selected is True
        assert option.selected is False
        assert option.with_disabled(True).disabled is True


class TestEntryModels:
    """Tests for entry-related Pydantic models."""

    def test_new_entry_creation(self):
        """Test NewEntry model creation."""
        entry = NewEntry(
            category="Groceries",
            description="Weekly shop",
            value=Decimal("45.90"),
            entry_date=ENTRY_DATE,
        )
        assert entry.category == "Groceries"
        assert entry.value == Decimal("45.90")
        assert entry.entry_date == ENTRY_DATE
        assert entry.entry_id is not None

    def test_new_entry_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        entry = NewEntry(
            category="  Rent ",
            description=" December ",
            value=Decimal("900.00"),
            entry_date=ENTRY_DATE,
        )
        assert entry.category == "Rent"
        assert entry.description == "December"

    def test_new_entry_rejects_negative_value(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            NewEntry(
                category="Rent",
                description="Refund",
                value=Decimal("-1.00"),
                entry_date=ENTRY_DATE,
            )

    def test_new_entry_rejects_fractional_cents(self):
        """Test amounts have at most two decimal places."""
        with pytest.raises(ValueError):
            NewEntry(
                category="Rent",
                description="Rounding",
                value=Decimal("1.005"),
                entry_date=ENTRY_DATE,
            )

    def test_new_entry_requires_aware_date(self):
        """Test that the entry date must carry an offset."""
        with pytest.raises(ValueError):
            NewEntry(
                category="Rent",
                description="December",
                value=Decimal("900.00"),
                entry_date=datetime(2024, 12, 15),
            )

    def test_new_entry_keeps_offset(self):
        """Test the entry date is stored with its own offset."""
        offset = timezone(timedelta(hours=-3))
        entry = NewEntry(
            category="Rent",
            description="December",
            value=Decimal("900.00"),
            entry_date=datetime(2024, 12, 15, 9, 30, tzinfo=offset),
        )
        assert entry.entry_date.utcoffset() == timedelta(hours=-3)

    def test_login_credentials_hide_password(self):
        """Test the password is not exposed by repr or dump."""
        credentials = LoginCredentials(username=" ana ", password="s3cret")
        assert credentials.username == "ana"
        assert credentials.password.get_secret_value() == "s3cret"
        assert "s3cret" not in repr(credentials)
        assert "s3cret" not in str(credentials.model_dump())

    def test_login_credentials_require_username(self):
        with pytest.raises(ValueError):
            LoginCredentials(username="   ", password="pw")


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="value",
                    issue_type="invalid_value",
                    message="Amount must be greater than zero",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="entry_date",
                    issue_type="future_date",
                    message="Date in future",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0

    def test_validation_issue_severity_checked(self):
        """Test that only known severities are accepted."""
        with pytest.raises(ValueError):
            ValidationIssue(
                field="value",
                issue_type="invalid_value",
                message="Bad",
                severity="fatal",
            )


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.CATEGORIES_LOADED,
            description="Loaded 5 categories",
        )
        assert event.event_type == AuditEventType.CATEGORIES_LOADED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.ENTRY_SUBMITTED,
            description="Entry submitted",
            details={"category": "Rent", "value": "900.00"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "entry_submitted"
        assert log_dict["details"]["category"] == "Rent"
        assert log_dict["correlation_id"] is None

    def test_audit_event_builder_date_selected(self):
        """Test AuditEventBuilder.date_selected."""
        correlation_id = uuid4()

        event = AuditEventBuilder.date_selected(ENTRY_DATE, correlation_id)

        assert event.event_type == AuditEventType.DATE_SELECTED
        assert event.correlation_id == correlation_id
        assert event.details["selected_date"] == ENTRY_DATE.isoformat()
        assert event.is_user_action is True

    def test_audit_event_builder_date_cleared(self):
        """Test an unresolved selection is recorded as cleared."""
        event = AuditEventBuilder.date_selected(None, uuid4())
        assert event.event_type == AuditEventType.DATE_CLEARED

    def test_audit_event_builder_entry_submitted(self):
        """Test AuditEventBuilder.entry_submitted."""
        entry_id = uuid4()

        event = AuditEventBuilder.entry_submitted(
            entry_id=entry_id,
            category="Rent",
            value="900.00",
            correlation_id=uuid4(),
        )

        assert event.event_type == AuditEventType.ENTRY_SUBMITTED
        assert event.entity_id == entry_id
        assert event.is_user_action is True

    def test_audit_event_builder_login_failed(self):
        """Test a failed login is a warning with the backend message."""
        event = AuditEventBuilder.login_result("ana", False, "Invalid credentials", None)
        assert event.event_type == AuditEventType.LOGIN_FAILED
        assert event.severity == AuditSeverity.WARNING
        assert event.error_message == "Invalid credentials"
        assert "password" not in event.details


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
