"""Entry form validation package."""

from ledger_form.validation.validator import EntryValidator

__all__ = ["EntryValidator"]
