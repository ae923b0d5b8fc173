"""
Date Contracts

Types exchanged between the character-positional parser and the
calendar date builder.

CONTRACT:
=========
- DateParsingConfig is immutable for the lifetime of a session
- ParsedDateComponents are produced transiently, never mutated
- Months are 0-indexed in components, 1-indexed in string forms
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class DateParsingConfig:
    """
    Field widths used to slice a digit string into date components.

    Consumed in order year -> month -> day -> hour -> minute.
    """
    year_length: int = 4
    month_length: int = 2
    day_length: int = 2
    hour_length: int = 2
    minute_length: int = 2

    def __post_init__(self):
        for name in ('year_length', 'month_length', 'day_length',
                     'hour_length', 'minute_length'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    @property
    def widths(self) -> tuple:
        return (
            self.year_length,
            self.month_length,
            self.day_length,
            self.hour_length,
            self.minute_length,
        )

    @staticmethod
    def from_dict(data: dict) -> DateParsingConfig:
        """Build from persisted settings (camelCase or snake_case keys)."""
        defaults = DateParsingConfig()
        values = {}
        for snake, camel in (
            ('year_length', 'yearLength'),
            ('month_length', 'monthLength'),
            ('day_length', 'dayLength'),
            ('hour_length', 'hourLength'),
            ('minute_length', 'minuteLength'),
        ):
            if snake in data:
                values[snake] = data[snake]
            elif camel in data:
                values[snake] = data[camel]
            else:
                values[snake] = getattr(defaults, snake)
        return DateParsingConfig(**values)

    def to_dict(self) -> dict:
        return {
            'yearLength': self.year_length,
            'monthLength': self.month_length,
            'dayLength': self.day_length,
            'hourLength': self.hour_length,
            'minuteLength': self.minute_length,
        }


DEFAULT_DATE_PARSING_CONFIG = DateParsingConfig()


@dataclass(frozen=True)
class ParsedDateComponents:
    """
    Typed date components parsed from a raw date string.

    NO VALIDATION HERE:
    ===================
    The parser can emit out-of-range fields (e.g. month 12 from "13");
    rejecting them is the calendar builder's job.
    """
    year: int
    month: int              # 0-indexed
    day: int
    hour: int
    original_date_string: str
    normalized_date_string: str   # YYYY-MM-DD-HH, 1-indexed month
    readable_date_string: str     # trailing default units omitted

    @property
    def cleaned_date_string(self) -> str:
        return self.normalized_date_string
