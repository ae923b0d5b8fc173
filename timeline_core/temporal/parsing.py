"""
Character-Positional Date Parser
================================

Turns loosely formatted date strings into typed date components.

PARSING RULES:
- Every non-digit character is discarded first ("2025-07-25",
  "2025.07.25" and "2025 07 25" are the same input)
- The remaining digits are consumed in fixed-width slices,
  year -> month -> day -> hour -> minute, per DateParsingConfig
- A slice past the end of the string is empty
- Missing month/day default to 1, missing hour/minute default to 0

END-DATE INFERENCE:
- An end date made of a bare year (no finer slice present at all)
  means "start of the following year", unless the event is a point
- Any finer slice present disables inference
"""

from __future__ import annotations
from typing import Any, Optional, Union
import re

from ..contracts.dates import DateParsingConfig, ParsedDateComponents
from ..contracts.items import ItemType
from ..observability import DiagnosticLog, verbose


_NON_DIGITS = re.compile(r'\D')
_VENDOR_PREFIX = re.compile(r'^vis-')


def parse_date(
    raw: Any,
    config: DateParsingConfig,
    is_end_date: bool = False,
    event_type: Union[str, ItemType, None] = 'box',
    diagnostics: Optional[DiagnosticLog] = None
) -> Optional[ParsedDateComponents]:
    """
    Parse a raw date string into components.

    Returns None when raw is not a non-empty string, when no year digits
    are present, or when the year is 0.
    """
    if not raw or not isinstance(raw, str):
        verbose(diagnostics, 'parser', 'invalid input', raw=raw)
        return None

    digits = _NON_DIGITS.sub('', raw)

    slices = []
    position = 0
    for width in config.widths:
        slices.append(digits[position:position + width])
        position += width
    year_str, month_str, day_str, hour_str, minute_str = slices

    if not year_str:
        verbose(diagnostics, 'parser', 'no year found', raw=raw)
        return None

    year = int(year_str)
    month = int(month_str) if month_str else 0
    day = int(day_str) if day_str else 0
    hour = int(hour_str) if hour_str else 0
    minute = int(minute_str) if minute_str else 0

    if year == 0:
        verbose(diagnostics, 'parser', 'invalid year', raw=raw, year_str=year_str)
        return None

    if isinstance(event_type, ItemType):
        event_type = event_type.value

    has_finer_component = bool(month_str or day_str or hour_str or minute_str)
    if is_end_date and event_type != ItemType.POINT.value and not has_finer_component:
        verbose(diagnostics, 'parser', 'inferring end date as next year', raw=raw)
        return _create_components(year + 1, 1, 1, 0, 0, raw)

    if not month:
        month = 1
    if not day:
        day = 1

    components = _create_components(year, month, day, hour, minute, raw)
    verbose(
        diagnostics, 'parser', 'parsed',
        raw=raw, normalized=components.normalized_date_string
    )
    return components


def _create_components(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    original: str
) -> ParsedDateComponents:
    """Build components from 1-indexed values; minutes only affect the readable form."""
    normalized = f"{year:04d}-{month:02d}-{day:02d}-{hour:02d}"

    readable_parts = [str(year)]
    if month > 1 or day > 1 or hour > 0 or minute > 0:
        readable_parts.append(f"{month:02d}")
    if day > 1 or hour > 0 or minute > 0:
        readable_parts.append(f"{day:02d}")
    if hour > 0 or minute > 0:
        readable_parts.append(f"{hour:02d}")

    return ParsedDateComponents(
        year=year,
        month=month - 1,
        day=day,
        hour=hour,
        original_date_string=original,
        normalized_date_string=normalized,
        readable_date_string='-'.join(readable_parts),
    )


def validate_type(
    raw: Any,
    diagnostics: Optional[DiagnosticLog] = None
) -> ItemType:
    """Normalize an arbitrary type value into ItemType, defaulting to BOX."""
    if isinstance(raw, ItemType):
        return raw

    if not raw or not isinstance(raw, str):
        verbose(diagnostics, 'types', 'invalid type, defaulting to box', raw=raw)
        return ItemType.BOX

    normalized = _VENDOR_PREFIX.sub('', raw)
    for item_type in ItemType:
        if item_type.value == normalized:
            return item_type

    verbose(diagnostics, 'types', 'unknown type, defaulting to box', raw=raw)
    return ItemType.BOX
