"""
Temporal Layer
==============

Date strings -> components -> absolute instants.

Modules:
- parsing: character-positional parser, end-date inference, type validator
- calendar: calendar date builder with its two construction strategies
- formatting: display formatting and ordering of normalized date strings
- clock: injectable source of the current time
"""

from .calendar import (
    build_date,
    instant_from_year,
    instant_year,
    to_epoch_ms,
    from_epoch_ms,
    is_finite_instant,
    MS_PER_YEAR,
)
from .clock import LogicalClock
from .formatting import format_date, sort_timeline_dates
from .parsing import parse_date, validate_type

__all__ = [
    'build_date',
    'instant_from_year',
    'instant_year',
    'to_epoch_ms',
    'from_epoch_ms',
    'is_finite_instant',
    'MS_PER_YEAR',
    'LogicalClock',
    'format_date',
    'sort_timeline_dates',
    'parse_date',
    'validate_type',
]
