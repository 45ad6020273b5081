"""
Main Orchestrator for Ledger Form

This module ties together all the components and defines the
end-to-end flows for:
1. New entry (categories → date selection → validate → submit)
2. Login (credentials → backend → result)

DESIGN DECISION: The orchestrator enforces the boundaries:
- No entry is built without passing validation
- The date on an entry is exactly what the date selector emitted
- Every step is audited

"Now" is always passed in by the caller. Nothing here reads the clock,
so every flow can be replayed in tests.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import ValidationError

from ledger_form.audit import AuditLogger, create_correlation_id
from ledger_form.calendar import CascadingDateSelect
from ledger_form.calendar.controller import DateChangeCallback
from ledger_form.config import AppSettings, Settings, default_date_range, get_settings
from ledger_form.formatting import parse_monetary
from ledger_form.models.dates import DateRange
from ledger_form.models.entry import LoginCredentials, NewEntry, ValidationResult
from ledger_form.services.backend import (
    BackendInterface,
    HttpBackend,
    RequestResult,
    RequestStatus,
    StaticBackend,
)
from ledger_form.validation import EntryValidator


class EntryFlow:
    """
    Orchestrates the new-entry form.

    Flow:
    1. Load categories → backend, fall back to configured list on failure
    2. Build date selector → bounded range around "now"
    3. Validate → two-stage validation
    4. Submit → build NewEntry (only if valid)
    """

    def __init__(
        self,
        backend: BackendInterface,
        validator: Optional[EntryValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
        fallback_categories: Optional[list[str]] = None,
    ):
        self._backend = backend
        self._settings = settings or get_settings().app
        self._validator = validator or EntryValidator(self._settings)
        self._audit_logger = audit_logger
        if fallback_categories is None:
            fallback_categories = get_settings().backend.fallback_categories_list
        self._fallback_categories = list(fallback_categories)

    async def load_categories(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[list[str], bool, str]:
        """
        Load the category list.

        Returns:
            (categories, from_backend, message)

        If from_backend is False the configured fallback list was used
        and message explains why.
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            result = await self._backend.get_categories()
        except Exception as e:
            # Any backend failure falls through to the fallback list
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"operation": "get_categories"},
                    correlation_id=correlation_id,
                )
            result = RequestResult.error(f"Unexpected error: {e}")

        if result.ok and result.value:
            if self._audit_logger:
                self._audit_logger.log_categories_loaded(len(result.value), correlation_id)
            return list(result.value), True, ""

        if result.ok:
            reason = "Backend returned no categories"
        else:
            reason = result.message or result.status.value

        if self._audit_logger:
            if result.status == RequestStatus.UNREACHABLE:
                self._audit_logger.log_external_service_error(
                    service="backend",
                    error_message=reason,
                    correlation_id=correlation_id,
                )
            self._audit_logger.log_categories_fallback(
                reason, len(self._fallback_categories), correlation_id
            )

        return list(self._fallback_categories), False, reason

    def date_range(self, now: datetime) -> DateRange:
        """Selectable range for entry dates around now."""
        return default_date_range(now, self._settings)

    def create_date_select(
        self,
        now: datetime,
        on_date_change: Optional[DateChangeCallback] = None,
        correlation_id: Optional[UUID] = None,
    ) -> CascadingDateSelect:
        """
        Build the date selector for one form session.

        The selector is bounded by date_range(now) and preselects now in
        the configured offset. Every emitted date is audited before it is
        passed on to on_date_change.
        """
        preselect = now.astimezone(self._settings.tzinfo)

        def emit(selected: Optional[datetime]) -> None:
            if self._audit_logger:
                self._audit_logger.log_date_selected(selected, correlation_id)
            if on_date_change is not None:
                on_date_change(selected)

        return CascadingDateSelect(self.date_range(now), preselect, on_date_change=emit)

    def validate_entry(
        self,
        category: Optional[str],
        description: Optional[str],
        value: Optional[Decimal],
        entry_date: Optional[datetime],
        categories: Optional[list[str]] = None,
        date_range: Optional[DateRange] = None,
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[ValidationResult, str]:
        """
        Validate a filled-in form.

        Returns:
            (validation_result, user_message)
        """
        result = self._validator.validate(
            category=category,
            description=description,
            value=value,
            entry_date=entry_date,
            categories=categories,
            date_range=date_range,
            now=now,
        )
        message = self._validator.get_user_friendly_summary(result)

        if self._audit_logger:
            issues = [
                {"field": i.field, "type": i.issue_type, "message": i.message}
                for i in result.issues
            ]
            self._audit_logger.log_validation(
                result.is_valid, issues, result.warnings, correlation_id
            )

        return result, message

    def submit_entry(
        self,
        category: Optional[str],
        description: Optional[str],
        value_text: str,
        entry_date: Optional[datetime],
        categories: Optional[list[str]] = None,
        date_range: Optional[DateRange] = None,
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[NewEntry], ValidationResult, str]:
        """
        Validate and, if valid, build the entry.

        CRITICAL: The entry is only built when validation has no errors.

        Args:
            value_text: Amount as shown in the monetary input (e.g. "1,234.50")

        Returns:
            (entry_or_none, validation_result, user_message)
        """
        correlation_id = correlation_id or create_correlation_id()
        value = parse_monetary(value_text)

        result, message = self.validate_entry(
            category=category,
            description=description,
            value=value,
            entry_date=entry_date,
            categories=categories,
            date_range=date_range,
            now=now,
            correlation_id=correlation_id,
        )

        if not result.is_valid:
            return None, result, message

        entry = NewEntry(
            category=category,
            description=description,
            value=value,
            entry_date=entry_date,
        )

        if self._audit_logger:
            self._audit_logger.log_entry_submitted(
                entry_id=entry.entry_id,
                category=entry.category,
                value=str(entry.value),
                correlation_id=correlation_id,
            )

        return entry, result, message

    def reject_entry(
        self,
        reason: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Record that the user discarded the form."""
        if self._audit_logger:
            self._audit_logger.log_entry_rejected(reason, correlation_id)


class LoginFlow:
    """
    Orchestrates the login form.

    Credentials are checked locally for presence before the backend is asked.
    The password is never logged.
    """

    def __init__(
        self,
        backend: BackendInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._backend = backend
        self._audit_logger = audit_logger

    async def login(
        self,
        username: str,
        password: str,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[bool, str]:
        """
        Attempt to log in.

        Returns:
            (succeeded, user_message)
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            credentials = LoginCredentials(username=username, password=password)
        except ValidationError:
            return False, "Please enter both username and password"

        if not credentials.password.get_secret_value():
            return False, "Please enter both username and password"

        if self._audit_logger:
            self._audit_logger.log_login_attempted(credentials.username, correlation_id)

        try:
            result = await self._backend.post_login(
                credentials.username,
                credentials.password.get_secret_value(),
            )
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"operation": "post_login"},
                    correlation_id=correlation_id,
                )
            result = RequestResult.error("Login failed due to an unexpected error")

        if result.status == RequestStatus.OK:
            message = f"Welcome, {credentials.username}!"
        elif result.status == RequestStatus.UNREACHABLE:
            message = "The server could not be reached. Please try again later."
        else:
            message = result.message or "Login failed"

        if self._audit_logger:
            self._audit_logger.log_login_result(
                credentials.username, result.ok, result.message, correlation_id
            )

        return result.ok, message


def create_app_components(
    settings: Optional[Settings] = None,
) -> tuple[EntryFlow, LoginFlow, BackendInterface]:
    """
    Factory function to create all application components.

    Uses the HTTP backend when BACKEND_URL is configured and the static
    backend otherwise.

    Returns:
        (entry_flow, login_flow, backend)
    """
    settings = settings or get_settings()
    backend_settings = settings.backend
    audit_logger = AuditLogger()

    if backend_settings.url:
        backend: BackendInterface = HttpBackend(backend_settings)
    else:
        backend = StaticBackend(backend_settings.fallback_categories_list)

    entry_flow = EntryFlow(
        backend=backend,
        audit_logger=audit_logger,
        settings=settings.app,
        fallback_categories=backend_settings.fallback_categories_list,
    )
    login_flow = LoginFlow(
        backend=backend,
        audit_logger=audit_logger,
    )

    return entry_flow, login_flow, backend
