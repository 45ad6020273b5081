"""
Cascading Selection Controller

Holds the Year -> Month -> Day selection for one date widget and keeps
every level consistent with the levels above it and with the range.

DESIGN DECISION: The cascade is an explicit, ordered pipeline:

    reduce(range, previous_state, action) -> next_state

instead of three independently triggered watchers. Within one settle
the year is fully resolved before the month is recomputed, and the
month before the day. Recomputing a day against a stale month is the
one bug this module exists to prevent.

Month and day are recomputed from the current upstream values on every
settle. They are cheap pure functions, so there is no staleness
detection; MonthOfYear only records which year a month was resolved
against.

IMPORTANT: No operation in this module raises for bad input. Inverted
ranges, unparsable raw values and missing upstream values all become
"no value" and the caller receives None.
"""

from datetime import datetime
from typing import Callable, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field

from ledger_form.calendar.engine import (
    day_or_fallback,
    list_days_for_year_and_month,
    list_months_for_year,
    list_years,
    month_or_fallback,
    year_or_fallback,
)
from ledger_form.models.dates import DateRange, Day, Month, Year
from ledger_form.models.select import SelectOption


logger = structlog.get_logger(__name__)

DateChangeCallback = Callable[[Optional[datetime]], None]
RawValue = Union[str, int, None]


# =============================================================================
# STATE
# =============================================================================

class MonthOfYear(BaseModel):
    """A month together with the year it was last validated against."""
    model_config = ConfigDict(frozen=True)

    month: Optional[Month] = None
    year: Optional[Year] = None


class SelectionState(BaseModel):
    """Current value of each level of the date widget."""
    model_config = ConfigDict(frozen=True)

    year: Optional[Year] = None
    month: MonthOfYear = Field(default_factory=MonthOfYear)
    day: Optional[Day] = None

    @property
    def is_resolved(self) -> bool:
        """True when all three levels hold a concrete value."""
        return (
            self.year is not None
            and self.month.month is not None
            and self.month.year == self.year
            and self.day is not None
        )


# =============================================================================
# ACTIONS
# =============================================================================

class SelectYear(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: Optional[Year] = None


class SelectMonth(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: Optional[Month] = None


class SelectDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: Optional[Day] = None


Action = Union[SelectYear, SelectMonth, SelectDay]


# =============================================================================
# PURE TRANSITIONS
# =============================================================================

def initial_state(date_range: DateRange, preselect: datetime) -> SelectionState:
    """Seed every level from the preselected instant, falling back per level."""
    year = year_or_fallback(date_range, preselect.year)
    month = month_or_fallback(date_range, Month.from_int(preselect.month), year)
    day = day_or_fallback(date_range, preselect.day, month, year)
    return SelectionState(
        year=year,
        month=MonthOfYear(month=month, year=year),
        day=day,
    )


def _cascade(
    date_range: DateRange,
    year: Optional[Year],
    preferred_month: Optional[Month],
    preferred_day: Optional[Day],
) -> SelectionState:
    """Resolve month against year, then day against month and year. In that order."""
    month = month_or_fallback(date_range, preferred_month, year)
    day = day_or_fallback(date_range, preferred_day, month, year)
    return SelectionState(
        year=year,
        month=MonthOfYear(month=month, year=year),
        day=day,
    )


def reduce(date_range: DateRange, state: SelectionState, action: Action) -> SelectionState:
    """
    Apply one user action and return the settled state.

    - SelectYear: set year, then recompute month, then day
    - SelectMonth: set month (year untouched), then recompute day
    - SelectDay: set day only; a day outside the current options is "no value"
    """
    if isinstance(action, SelectYear):
        return _cascade(date_range, action.year, state.month.month, state.day)

    if isinstance(action, SelectMonth):
        # The chosen month is taken as-is; if it is not selectable the day
        # list is empty and the state resolves to "no date".
        day = day_or_fallback(date_range, state.day, action.month, state.year)
        return SelectionState(
            year=state.year,
            month=MonthOfYear(month=action.month, year=state.year),
            day=day,
        )

    if isinstance(action, SelectDay):
        days = list_days_for_year_and_month(date_range, state.year, state.month.month)
        day = action.day if action.day in days else None
        return state.model_copy(update={"day": day})

    return state


def compose(state: SelectionState, template: datetime) -> Optional[datetime]:
    """
    Build the selected instant from the template.

    Year, month and day come from the state; time of day and offset
    come from the template. Returns None unless every level is resolved.
    """
    if not state.is_resolved:
        return None
    try:
        return template.replace(
            year=state.year,
            month=int(state.month.month),
            day=state.day,
        )
    except ValueError:
        return None


# =============================================================================
# RAW VALUE PARSING
# =============================================================================

def _parse_int(raw: RawValue) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def parse_month(raw: RawValue) -> Optional[Month]:
    """
    Parse a month option value.

    Unlike Month.from_int this does not wrap: option values are 1-12,
    anything else is treated as no selection.
    """
    if isinstance(raw, Month):
        return raw
    number = _parse_int(raw)
    if number is None or not 1 <= number <= 12:
        return None
    return Month(number)


# =============================================================================
# STATEFUL CONTROLLER
# =============================================================================

class CascadingDateSelect:
    """
    Controller behind the three-select date widget.

    The range and preselect instant are fixed for the controller's
    lifetime; a different range means building a new controller.

    The change callback is invoked on EVERY settle (construction
    included), even when the composed date did not change. Deduplication
    is the caller's job.

    Usage:
        select = CascadingDateSelect(date_range, now, on_date_change=print)
        select.select_year("1999")
        for options, on_select in select.levels():
            ...
    """

    def __init__(
        self,
        date_range: DateRange,
        preselect: datetime,
        on_date_change: Optional[DateChangeCallback] = None,
    ):
        """
        Initialize and settle once.

        Args:
            date_range: Bounds of selectable dates
            preselect: Preferred initial date; also the template for
                       time of day and offset of every emitted date
            on_date_change: Called with the composed date (or None)
        """
        self._range = date_range
        self._preselect = preselect
        self._on_date_change = on_date_change
        self._state = initial_state(date_range, preselect)
        self._selected_date: Optional[datetime] = None
        self._settle("mount")

    @property
    def date_range(self) -> DateRange:
        return self._range

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def selected_date(self) -> Optional[datetime]:
        """Date emitted by the most recent settle."""
        return self._selected_date

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def dispatch(self, action: Action) -> Optional[datetime]:
        """Apply an action, settle, and return the emitted date."""
        self._state = reduce(self._range, self._state, action)
        return self._settle(type(action).__name__)

    def select_year(self, raw: RawValue) -> Optional[datetime]:
        return self.dispatch(SelectYear(year=_parse_int(raw)))

    def select_month(self, raw: RawValue) -> Optional[datetime]:
        return self.dispatch(SelectMonth(month=parse_month(raw)))

    def select_day(self, raw: RawValue) -> Optional[datetime]:
        return self.dispatch(SelectDay(day=_parse_int(raw)))

    def _settle(self, trigger: str) -> Optional[datetime]:
        self._selected_date = compose(self._state, self._preselect)
        logger.debug(
            "date_select_settled",
            trigger=trigger,
            year=self._state.year,
            month=int(self._state.month.month) if self._state.month.month else None,
            day=self._state.day,
            selected_date=self._selected_date.isoformat() if self._selected_date else None,
        )
        if self._on_date_change is not None:
            self._on_date_change(self._selected_date)
        return self._selected_date

    # -------------------------------------------------------------------------
    # Option lists
    # -------------------------------------------------------------------------

    def year_options(self) -> list[SelectOption]:
        return [
            SelectOption.from_year(year).with_selected(year == self._state.year)
            for year in list_years(self._range)
        ]

    def month_options(self) -> list[SelectOption]:
        selected = self._state.month.month
        return [
            SelectOption.from_month(month).with_selected(month == selected)
            for month in list_months_for_year(self._range, self._state.year)
        ]

    def day_options(self) -> list[SelectOption]:
        days = list_days_for_year_and_month(
            self._range, self._state.year, self._state.month.month
        )
        return [
            SelectOption.from_day(day).with_selected(day == self._state.day)
            for day in days
        ]

    def levels(self) -> list[tuple[list[SelectOption], Callable[[RawValue], Optional[datetime]]]]:
        """(options, on_select) for year, month and day, in that order."""
        return [
            (self.year_options(), self.select_year),
            (self.month_options(), self.select_month),
            (self.day_options(), self.select_day),
        ]
