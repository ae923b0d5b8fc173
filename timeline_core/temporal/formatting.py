"""
Date Display Formatting
=======================

Display-side helpers over normalized date strings (YYYY[-MM[-DD[-HH]]]).

FORMAT TOKENS:
- YYYY year, YY last two digits of the year
- MM month number, M abbreviated month name, MMM full month name
- DD day number, D ordinal day ("1st"), DDD / DDDD weekday abbr / full
- HH hour number, H hour as "H:00"

A missing unit removes every finer unit: a string without a month
renders neither day nor hour tokens.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence
import re

from .calendar import civil_day_number


_DATE_STRING = re.compile(r'^(-?\d+)(?:-(-?\d+)(?:-(-?\d+)(?:-(-?\d+))?)?)?$')
_TOKEN = re.compile(r'\b(H{1,2}|D{1,4}|M{1,3}|Y{2,4})\b')

MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)
WEEKDAY_NAMES = (
    'Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday',
)


def month_name(month: str, abbreviate: bool = False) -> str:
    """Name for a 1-indexed month string; unknown values pass through."""
    try:
        index = int(month)
    except ValueError:
        return month
    if not 1 <= index <= 12:
        return month
    name = MONTH_NAMES[index - 1]
    return name[:3] if abbreviate else name


def ordinal_day(day: str) -> str:
    number = int(day)
    if number in (1, 21, 31):
        suffix = 'st'
    elif number in (2, 22):
        suffix = 'nd'
    elif number in (3, 23):
        suffix = 'rd'
    else:
        suffix = 'th'
    return f"{number}{suffix}"


def weekday_name(year: str, month: str, day: str, abbreviate: bool = False) -> str:
    try:
        days = civil_day_number(int(year), int(month) - 1, int(day))
    except OverflowError:
        return ''
    name = WEEKDAY_NAMES[(days + 4) % 7]  # 1970-01-01 was a Thursday
    return name[:3] if abbreviate else name


def _cascade_missing(parts: Dict[str, Optional[str]]) -> None:
    if not parts['MM']:
        drop = ('MM', 'M', 'MMM', 'DD', 'D', 'DDD', 'DDDD', 'HH', 'H')
    elif not parts['DD']:
        drop = ('DD', 'D', 'DDD', 'DDDD', 'HH', 'H')
    elif not parts['HH']:
        drop = ('HH', 'H')
    else:
        drop = ()
    for key in drop:
        parts[key] = None


def format_date(date_string: str, format_string: str) -> str:
    """
    Render a normalized date string with a token format string.

    Raises ValueError when date_string is not YYYY[-MM[-DD[-HH]]].
    """
    match = _DATE_STRING.match(date_string)
    if not match:
        raise ValueError(
            'Invalid date format. Expected format: '
            'YYYY or YYYY-MM or YYYY-MM-DD or YYYY-MM-DD-HH'
        )

    year, month, day, hour = match.groups()
    parts: Dict[str, Optional[str]] = {
        'YYYY': year,
        'MM': month,
        'DD': day,
        'HH': hour,
        'YY': year[-2:],
        'M': month_name(month, abbreviate=True) if month else None,
        'MMM': month_name(month) if month else None,
        'D': ordinal_day(day) if day else None,
        'DDD': weekday_name(year, month, day, abbreviate=True) if day and month else None,
        'DDDD': weekday_name(year, month, day) if day and month else None,
        'H': f"{hour}:00" if hour else None,
    }
    _cascade_missing(parts)

    cleaned = format_string
    if not parts['H'] and not parts['HH']:
        cleaned = re.sub(r'\s*H{1,2}\s*', '', cleaned)
    if not any(parts[k] for k in ('D', 'DD', 'DDD', 'DDDD')):
        cleaned = re.sub(r'\s*D{1,4}\s*', '', cleaned)
    if not any(parts[k] for k in ('M', 'MM', 'MMM')):
        cleaned = re.sub(r'\s*M{1,3}\s*', '', cleaned)
    cleaned = re.sub(r'\s+', ' ', cleaned).strip()

    return _TOKEN.sub(lambda m: parts.get(m.group(0)) or '', cleaned)


def sort_timeline_dates(dates: Sequence[str], ascending: bool = True) -> List[str]:
    """
    Order normalized date strings, placing negative (BCE) dates correctly.

    Plain string sorting would put "-0100" after "-0050"; negative dates
    are sorted on their magnitude and reversed instead.
    """
    negatives = sorted((d[1:] for d in dates if d.startswith('-')), reverse=True)
    positives = sorted(d for d in dates if not d.startswith('-'))

    if ascending:
        return [f"-{d}" for d in negatives] + positives
    return list(reversed(positives)) + [f"-{d}" for d in reversed(negatives)]
