"""
Entry Form Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - REQUIRED FIELDS:
- Category chosen
- Description present
- Amount greater than zero
- Date resolved by the date selector

STAGE 2 - CONSISTENCY:
- Category is one the backend offered
- Date lies inside the selectable range
- Date in the future (warning)
- Absurd amount (warning)

Stage 2 only runs when stage 1 passes.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the user can correct the form.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from ledger_form.config import AppSettings, get_settings
from ledger_form.models.dates import DateRange
from ledger_form.models.entry import ValidationIssue, ValidationResult


class EntryValidator:
    """
    Validates a filled-in entry form.

    The current time is passed in by the caller so results are reproducible.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app

    def _validate_required(
        self,
        category: Optional[str],
        description: Optional[str],
        value: Optional[Decimal],
        entry_date: Optional[datetime],
    ) -> list[ValidationIssue]:
        """Stage 1: every required field is present."""
        issues = []

        if not category or not category.strip():
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Please choose a category",
                severity="error",
            ))

        if not description or not description.strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Please describe what this entry is for",
                severity="error",
            ))

        if value is None or value <= 0:
            issues.append(ValidationIssue(
                field="value",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
                suggested_fix="Type the amount in cents, e.g. 1250 for 12.50",
            ))

        if entry_date is None:
            issues.append(ValidationIssue(
                field="entry_date",
                issue_type="missing",
                message="The selected year, month and day do not form a date",
                severity="error",
                suggested_fix="Pick a year, month and day from the lists",
            ))

        return issues

    def _validate_consistency(
        self,
        category: str,
        value: Decimal,
        entry_date: datetime,
        categories: Optional[list[str]],
        date_range: Optional[DateRange],
        now: Optional[datetime],
    ) -> list[ValidationIssue]:
        """Stage 2: fields agree with the data the form was built from."""
        issues = []

        if categories is not None and category not in categories:
            issues.append(ValidationIssue(
                field="category",
                issue_type="unknown_category",
                message=f"Category '{category}' is not one of the available categories",
                severity="error",
                suggested_fix="Reload the page to refresh the category list",
            ))

        if date_range is not None and not (
            date_range.start.date() <= entry_date.date() <= date_range.end.date()
        ):
            issues.append(ValidationIssue(
                field="entry_date",
                issue_type="out_of_range",
                message=(
                    f"Date {entry_date.date().isoformat()} is outside "
                    f"{date_range.start.date().isoformat()} - {date_range.end.date().isoformat()}"
                ),
                severity="error",
            ))

        if now is not None and entry_date.date() > now.astimezone(entry_date.tzinfo).date():
            issues.append(ValidationIssue(
                field="entry_date",
                issue_type="future_date",
                message=f"Date ({entry_date.date().isoformat()}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        max_value = Decimal(str(self._settings.max_entry_value))
        if value > max_value:
            issues.append(ValidationIssue(
                field="value",
                issue_type="suspicious_value",
                message=f"Amount ({value:,.2f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        return issues

    def validate(
        self,
        category: Optional[str],
        description: Optional[str],
        value: Optional[Decimal],
        entry_date: Optional[datetime],
        categories: Optional[list[str]] = None,
        date_range: Optional[DateRange] = None,
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        """
        Run both validation stages.

        Args:
            category: Chosen category
            description: Free-text description
            value: Parsed amount
            entry_date: Date emitted by the date selector (None if unresolved)
            categories: Categories offered to the user (skip check if None)
            date_range: Range the date selector was bounded by (skip if None)
            now: Current instant for the future-date warning (skip if None)

        Returns:
            ValidationResult with all issues found
        """
        issues = self._validate_required(category, description, value, entry_date)

        if not issues:
            issues.extend(self._validate_consistency(
                category=category.strip(),
                value=value,
                entry_date=entry_date,
                categories=categories,
                date_range=date_range,
                now=now,
            ))

        warnings = [issue.message for issue in issues if issue.severity == "warning"]
        is_valid = not any(issue.severity == "error" for issue in issues)

        return ValidationResult(
            is_valid=is_valid,
            issues=issues,
            warnings=warnings,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a user-friendly summary of validation results.

        This is what the entry page shows under the form.
        """
        if result.is_valid and not result.warnings:
            return "✅ All checks passed."

        lines = []

        if result.has_errors:
            lines.append("❌ Please fix the following:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
