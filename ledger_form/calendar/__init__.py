"""Bounded cascading date selection: range engine and selection controller."""

from ledger_form.calendar.controller import (
    CascadingDateSelect,
    MonthOfYear,
    SelectDay,
    SelectionState,
    SelectMonth,
    SelectYear,
    compose,
    initial_state,
    parse_month,
    reduce,
)
from ledger_form.calendar.engine import (
    day_or_fallback,
    list_days_for_year_and_month,
    list_months_for_year,
    list_years,
    month_or_fallback,
    year_or_fallback,
)

__all__ = [
    # Engine
    "day_or_fallback",
    "list_days_for_year_and_month",
    "list_months_for_year",
    "list_years",
    "month_or_fallback",
    "year_or_fallback",
    # Controller
    "CascadingDateSelect",
    "MonthOfYear",
    "SelectDay",
    "SelectionState",
    "SelectMonth",
    "SelectYear",
    "compose",
    "initial_state",
    "parse_month",
    "reduce",
]
