"""
Range Calendar Engine

Pure functions over an immutable DateRange that answer three questions:
1. Which years can be picked?
2. Which months can be picked in a given year?
3. Which days can be picked in a given year and month?

For each level there is also a "preferred or fallback" resolver.

DESIGN DECISION: All three resolvers share ONE fallback rule:
    preferred value if it is valid,
    else the LAST valid value (anchor towards the most recent date),
    else nothing.
The rule lives in a single helper so the levels cannot drift apart.

IMPORTANT: Nothing here raises for unsatisfiable input. Inverted ranges,
out-of-range years/months and missing upstream values all produce an
empty list or None.
"""

from datetime import MAXYEAR, date, timedelta
from typing import Optional, Sequence, TypeVar

from ledger_form.models.dates import DateRange, Day, Month, Year


T = TypeVar("T")


def _first_match_or_last(candidates: Sequence[T], preferred: Optional[T]) -> Optional[T]:
    """First match wins; else last element; else nothing."""
    if preferred is not None and preferred in candidates:
        return preferred
    if candidates:
        return candidates[-1]
    return None


def _last_day_of_month(year: Year, month: Month) -> Day:
    """
    Last day of a month, computed as the day before the first day of
    the following month. Leap years fall out of the date arithmetic.
    """
    next_month = Month.from_int(month + 1)
    next_year = year + 1 if next_month is Month.JANUARY else year
    if next_year > MAXYEAR:
        # December of the last representable year ends on date.max
        return date.max.day
    first_of_next_month = date(next_year, next_month, 1)
    return (first_of_next_month - timedelta(days=1)).day


# =============================================================================
# YEARS
# =============================================================================

def list_years(date_range: DateRange) -> list[Year]:
    """All years from start.year to end.year inclusive, or [] if inverted."""
    if date_range.start > date_range.end:
        return []
    return list(range(date_range.start.year, date_range.end.year + 1))


def year_or_fallback(date_range: DateRange, preferred: Optional[Year]) -> Optional[Year]:
    """Preferred year if selectable, else the last selectable year."""
    return _first_match_or_last(list_years(date_range), preferred)


# =============================================================================
# MONTHS
# =============================================================================

def list_months_for_year(date_range: DateRange, year: Optional[Year]) -> list[Month]:
    """
    Months selectable in the given year.

    - year strictly inside the range: January..December
    - start year only: start.month..December
    - end year only: January..end.month
    - single-year range: start.month..end.month
    """
    if year is None or year not in list_years(date_range):
        return []

    start, end = date_range.start, date_range.end
    is_start_year = year == start.year
    is_end_year = year == end.year

    first = start.month if is_start_year else 1
    last = end.month if is_end_year else 12

    # An inverted month span yields an empty range, not an error
    return [Month(number) for number in range(first, last + 1)]


def month_or_fallback(
    date_range: DateRange,
    preferred: Optional[Month],
    year: Optional[Year],
) -> Optional[Month]:
    """Preferred month if selectable in year, else the last selectable month."""
    if year is None:
        return None
    return _first_match_or_last(list_months_for_year(date_range, year), preferred)


# =============================================================================
# DAYS
# =============================================================================

def list_days_for_year_and_month(
    date_range: DateRange,
    year: Optional[Year],
    month: Optional[Month],
) -> list[Day]:
    """
    Days selectable in the given year and month.

    Boundary days only apply when BOTH year and month match the
    corresponding end of the range.
    """
    if month is None or month not in list_months_for_year(date_range, year):
        return []

    start, end = date_range.start, date_range.end
    is_start_month = year == start.year and month == start.month
    is_end_month = year == end.year and month == end.month

    first = start.day if is_start_month else 1
    last = end.day if is_end_month else _last_day_of_month(year, month)

    return list(range(first, last + 1))


def day_or_fallback(
    date_range: DateRange,
    preferred: Optional[Day],
    month: Optional[Month],
    year: Optional[Year],
) -> Optional[Day]:
    """Preferred day if selectable in year/month, else the last selectable day."""
    if year is None or month is None:
        return None
    return _first_match_or_last(
        list_days_for_year_and_month(date_range, year, month),
        preferred,
    )
