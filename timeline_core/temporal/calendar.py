"""
Calendar Date Builder
=====================

Turns parsed date components into an absolute instant.

INSTANT REPRESENTATION:
- numpy.datetime64 with millisecond unit, proleptic Gregorian calendar
- Astronomical year numbering, so negative (BCE-style) years are valid
- NaT is the not-a-number instant and is never returned to callers

TWO CONSTRUCTION STRATEGIES:
============================
Direct construction is correct for negative years and for years after
1900. For 0 <= year <= 1900 the host construction routine silently
reinterprets small years as a different epoch (year 1 becoming 1901,
and so on), so that range is routed through an explicit zero-padded
"YYYY-MM-DD-HH" token read back by a calendar-formatting routine.
The choice is a pure year-range predicate (uses_token_route).
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional
import math

import numpy as np

from ..contracts.dates import ParsedDateComponents
from ..observability import DiagnosticLog, verbose


MS_PER_HOUR = 60 * 60 * 1000
MS_PER_DAY = 24 * MS_PER_HOUR
MS_PER_YEAR = 365 * MS_PER_DAY

# +/- 100,000,000 days around the epoch, the host calendar's valid range.
MAX_INSTANT_MS = 100_000_000 * MS_PER_DAY

TOKEN_ROUTE_MAX_YEAR = 1900

# Well past the instant range; keeps month and day counts inside int64.
MAX_CALENDAR_YEAR = 1_000_000

NOT_A_TIME = np.datetime64('NaT', 'ms')


# =============================================================================
# PROLEPTIC CALENDAR DAYS
# =============================================================================

def civil_day(year: int, month: int, day: int) -> np.datetime64:
    """
    Proleptic Gregorian day from a 0-indexed month.

    Month and day offsets are added as calendar units, so an overflowing
    day rolls into the following month.
    """
    if abs(year) > MAX_CALENDAR_YEAR:
        raise OverflowError(f"year {year} is outside the calendar range")
    month_start = np.datetime64(year - 1970, 'Y').astype('datetime64[M]') + np.timedelta64(month, 'M')
    return month_start.astype('datetime64[D]') + np.timedelta64(day - 1, 'D')


def civil_day_number(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 (0-indexed month)."""
    return int(civil_day(year, month, day).astype(np.int64))


def from_epoch_ms(ms: float) -> np.datetime64:
    if not math.isfinite(ms) or abs(ms) > MAX_INSTANT_MS:
        return NOT_A_TIME
    return np.datetime64(int(round(ms)), 'ms')


def to_epoch_ms(value: Any) -> float:
    """
    Milliseconds since the epoch, or NaN when value is not a usable instant.

    Accepts datetime64 (NaT -> NaN), datetime (naive means UTC),
    plain numbers (already milliseconds) and None.
    """
    if value is None or isinstance(value, (bool, np.bool_)):
        return math.nan

    try:
        if isinstance(value, np.datetime64):
            if np.isnat(value):
                return math.nan
            ms = float(value.astype('datetime64[ms]').astype(np.int64))
        elif isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc).replace(tzinfo=None)
            ms = float(np.datetime64(value, 'ms').astype(np.int64))
        elif isinstance(value, (int, float, np.integer, np.floating)):
            ms = float(value)
        else:
            return math.nan
    except (OverflowError, ValueError):
        return math.nan

    if not math.isfinite(ms) or abs(ms) > MAX_INSTANT_MS:
        return math.nan
    return ms


def is_finite_instant(value: Any) -> bool:
    return not math.isnan(to_epoch_ms(value))


def instant_year(instant: np.datetime64) -> int:
    """Calendar year of an instant (astronomical numbering)."""
    return int(instant.astype('datetime64[Y]').astype(np.int64)) + 1970


def instant_from_year(year: int) -> np.datetime64:
    """January 1st of year, built directly with no parsing involved."""
    return DIRECT_STRATEGY.construct(year, 0, 1, 0)


# =============================================================================
# CONSTRUCTION STRATEGIES
# =============================================================================

class CalendarStrategy:
    """Builds an instant from already range-checked components."""

    name: str = "abstract"

    def construct(self, year: int, month: int, day: int, hour: int) -> np.datetime64:
        raise NotImplementedError


class DirectCalendarStrategy(CalendarStrategy):
    """
    Arithmetic construction on the proleptic calendar.

    Day overflow rolls into the next month, so day 30 of February
    becomes early March rather than failing.
    """

    name = "direct"

    def construct(self, year: int, month: int, day: int, hour: int) -> np.datetime64:
        days = civil_day_number(year, month, day)
        return from_epoch_ms(days * MS_PER_DAY + hour * MS_PER_HOUR)


class TokenCalendarStrategy(CalendarStrategy):
    """Construction through an explicit zero-padded calendar token."""

    name = "token"

    def construct(self, year: int, month: int, day: int, hour: int) -> np.datetime64:
        return interpret_calendar_token(calendar_token(year, month, day, hour))


def calendar_token(year: int, month: int, day: int, hour: int) -> str:
    """Zero-padded YYYY-MM-DD-HH token; month is 0-indexed on input."""
    return f"{year:04d}-{month + 1:02d}-{day:02d}-{hour:02d}"


def interpret_calendar_token(token: str) -> np.datetime64:
    """
    Read a y-M-d-H token back as an instant.

    Returns NaT when the token is not a real calendar date
    (e.g. 1800-02-30).
    """
    try:
        year, month, day, hour = (int(part) for part in token.split('-'))
        return np.datetime64(f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:00", 'ms')
    except ValueError:
        return NOT_A_TIME


DIRECT_STRATEGY = DirectCalendarStrategy()
TOKEN_STRATEGY = TokenCalendarStrategy()


def uses_token_route(year: int) -> bool:
    return 0 <= year <= TOKEN_ROUTE_MAX_YEAR


def select_strategy(year: int) -> CalendarStrategy:
    return TOKEN_STRATEGY if uses_token_route(year) else DIRECT_STRATEGY


# =============================================================================
# BUILDER
# =============================================================================

def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def build_date(
    components: Optional[ParsedDateComponents],
    diagnostics: Optional[DiagnosticLog] = None
) -> Optional[np.datetime64]:
    """
    Build an absolute instant from parsed components.

    Range checks are bounds-only: days-per-month is not validated here.
    Returns None for any invalid field or a not-a-number result.
    """
    if components is None:
        return None

    year, month, day, hour = (
        components.year, components.month, components.day, components.hour
    )

    if not _is_int(year) or year == 0:
        verbose(diagnostics, 'calendar', 'invalid year', year=year)
        return None

    if not _is_int(month) or not 0 <= month <= 11:
        verbose(diagnostics, 'calendar', 'invalid month', month=month)
        return None

    if not _is_int(day) or not 1 <= day <= 31:
        verbose(diagnostics, 'calendar', 'invalid day', day=day)
        return None

    if not _is_int(hour) or not 0 <= hour <= 23:
        verbose(diagnostics, 'calendar', 'invalid hour', hour=hour)
        return None

    strategy = select_strategy(year)
    try:
        instant = strategy.construct(int(year), int(month), int(day), int(hour))
    except OverflowError:
        instant = NOT_A_TIME

    if np.isnat(instant):
        verbose(
            diagnostics, 'calendar', 'constructed an invalid instant',
            strategy=strategy.name, original=components.original_date_string
        )
        return None

    verbose(
        diagnostics, 'calendar', 'built instant',
        strategy=strategy.name, instant=instant
    )
    return instant
