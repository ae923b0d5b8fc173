"""
Default Argument Builder

Produces the static fallback arguments for a render pass and applies
caller-supplied overrides on top of them.

DEFAULT WINDOW:
===============
- visible:   [max(1900, year - 50), year + 50]
- pannable:  [max(1800, year - 100), year + 100]

The ranges are deliberately modest: an astronomically wide span defeats
the render boundary's zoom-step computation. Every bound goes through
the same parser and calendar builder as event dates, and falls back to
direct calendar construction if that pipeline fails, so no default is
ever missing.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, List, Mapping, Optional, Tuple
import re

import numpy as np

from .config import TimelineSettings
from .contracts.dates import DateParsingConfig
from .contracts.viewport import (
    TagConfig, TimelineArgs, ViewportWindow,
    DEFAULT_ZOOM_IN_LIMIT, DEFAULT_ARGS_ZOOM_OUT_LIMIT,
)
from .observability import DiagnosticLog, verbose, warning
from .temporal.calendar import build_date, instant_from_year
from .temporal.clock import LogicalClock, resolve_clock
from .temporal.parsing import parse_date


# =============================================================================
# DEFAULT WINDOW
# =============================================================================

def default_window_years(current_year: int) -> Tuple[int, int, int, int]:
    """(start, end, min, max) years of the default window."""
    return (
        max(1900, current_year - 50),
        current_year + 50,
        max(1800, current_year - 100),
        current_year + 100,
    )


def _default_bound(
    year: int,
    config: DateParsingConfig,
    diagnostics: Optional[DiagnosticLog]
) -> np.datetime64:
    instant = build_date(parse_date(str(year), config, False, 'box', diagnostics), diagnostics)
    if instant is None:
        warning(diagnostics, 'arguments', 'default bound fell back to direct construction', year=year)
        instant = instant_from_year(year)
    return instant


def build_defaults(
    settings: TimelineSettings,
    clock: Optional[LogicalClock] = None,
    diagnostics: Optional[DiagnosticLog] = None
) -> TimelineArgs:
    """Static fallback arguments (viewport + tag config) for the current year."""
    current_year = resolve_clock(clock).current_year()
    start_year, end_year, min_year, max_year = default_window_years(current_year)
    config = settings.date_parsing_config

    viewport = ViewportWindow(
        start=_default_bound(start_year, config, diagnostics),
        end=_default_bound(end_year, config, diagnostics),
        min=_default_bound(min_year, config, diagnostics),
        max=_default_bound(max_year, config, diagnostics),
        zoom_in_limit=DEFAULT_ZOOM_IN_LIMIT,
        zoom_out_limit=DEFAULT_ARGS_ZOOM_OUT_LIMIT,
    )
    verbose(
        diagnostics, 'arguments', 'built default window',
        start=viewport.start, end=viewport.end, min=viewport.min, max=viewport.max
    )

    return TimelineArgs(
        viewport=viewport,
        tag_config=TagConfig(),
        date_format=settings.vertical_date_display_format,
        div_height=400,
        type=None,
        explicit_window=False,
    )


# =============================================================================
# TAGS
# =============================================================================

def parse_tag(tag: str) -> List[str]:
    """
    A tag and all of its parents.

    "#hello/i/am" yields ["#hello/i/am", "#hello/i", "#hello"].
    """
    tag = tag.strip()
    if not tag:
        return []

    expanded = [tag]
    while '/' in tag:
        tag = tag[:tag.rindex('/')]
        expanded.append(tag)
    return expanded


def create_tag_list(tag_string: str, timeline_tag: str) -> TagConfig:
    """
    Split a tag argument into required and optional tags.

    ";" separates required tags, "|" separates alternatives (optional
    tags). The timeline tag itself is always required.
    """
    tag_list: List[str] = []
    optional_tags: List[str] = []

    for tag in tag_string.split(';'):
        if '|' in tag:
            for alternative in tag.split('|'):
                optional_tags.extend(parse_tag(alternative))
        else:
            tag_list.extend(parse_tag(tag))
    tag_list.append(timeline_tag)

    return TagConfig(tag_list=tuple(tag_list), optional_tags=tuple(optional_tags))


# =============================================================================
# ZOOM TIMEFRAMES
# =============================================================================

NAMED_TIMEFRAMES_MS = {
    'day': 1000 * 60 * 60 * 24,                 # shows hours
    'week': 1000 * 60 * 60 * 24 * 7,            # shows days
    'month-detail': 1000 * 60 * 60 * 24 * 31,   # shows days, a month at a time
    'month-vague': 1000 * 60 * 60 * 24 * 32,    # shows months, a month at a time
    'year': 1000 * 60 * 60 * 24 * 31 * 12,      # shows months, a year at a time
}

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def convert_entry_to_milliseconds(
    timeframe: str,
    diagnostics: Optional[DiagnosticLog] = None
) -> int:
    """Zoom limit in milliseconds from a number or a named timeframe."""
    match = _LEADING_INT.match(str(timeframe))
    if match:
        return int(match.group(1))

    if timeframe in NAMED_TIMEFRAMES_MS:
        return NAMED_TIMEFRAMES_MS[timeframe]

    warning(diagnostics, 'arguments', 'invalid timeframe', timeframe=timeframe)
    return DEFAULT_ZOOM_IN_LIMIT


# =============================================================================
# OVERRIDES
# =============================================================================

_OVERRIDE_ALIASES = {
    'startDate': 'start', 'start_date': 'start', 'start': 'start',
    'endDate': 'end', 'end_date': 'end', 'end': 'end',
    'minDate': 'min', 'min_date': 'min', 'min': 'min',
    'maxDate': 'max', 'max_date': 'max', 'max': 'max',
    'zoomInLimit': 'zoom_in_limit', 'zoom_in_limit': 'zoom_in_limit',
    'zoomOutLimit': 'zoom_out_limit', 'zoom_out_limit': 'zoom_out_limit',
    'divHeight': 'div_height', 'div_height': 'div_height',
    'dateFormat': 'date_format', 'date_format': 'date_format',
    'tags': 'tags', 'type': 'type',
}


def apply_overrides(
    defaults: TimelineArgs,
    overrides: Mapping[str, Any],
    settings: TimelineSettings,
    diagnostics: Optional[DiagnosticLog] = None
) -> TimelineArgs:
    """
    Apply caller-supplied arguments on top of the defaults.

    Date values go through the parser and calendar builder; a value that
    fails to build keeps the default. explicit_window becomes True when a
    start or end date was actually applied, and is otherwise carried over.
    """
    bounds = {}
    viewport_changes = {}
    args_changes = {}

    for key, value in overrides.items():
        name = _OVERRIDE_ALIASES.get(key)
        if name is None:
            verbose(diagnostics, 'arguments', 'ignoring unknown argument', key=key)
            continue

        if name in ('start', 'end', 'min', 'max'):
            instant = build_date(
                parse_date(str(value), settings.date_parsing_config, False, 'box', diagnostics),
                diagnostics
            )
            if instant is None:
                warning(diagnostics, 'arguments', 'unusable date argument, keeping default',
                        key=key, value=value)
                continue
            bounds[name] = instant
        elif name in ('zoom_in_limit', 'zoom_out_limit'):
            viewport_changes[name] = convert_entry_to_milliseconds(str(value), diagnostics)
        elif name == 'div_height':
            try:
                args_changes['div_height'] = int(value)
            except (TypeError, ValueError):
                warning(diagnostics, 'arguments', 'invalid height, keeping default', value=value)
        elif name == 'tags':
            args_changes['tag_config'] = create_tag_list(str(value), settings.timeline_tag)
        else:
            args_changes[name] = value

    explicit = True if ('start' in bounds or 'end' in bounds) else defaults.explicit_window
    viewport = defaults.viewport.with_bounds(**bounds, **viewport_changes)
    return replace(defaults, viewport=viewport, explicit_window=explicit, **args_changes)
