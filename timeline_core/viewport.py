"""
Smart Viewport Calculator and Viewport Sanitizer

RESPONSIBILITY: Choose the display window and make it safe to render
ALLOWED INPUTS: Timeline arguments, assembled items
OUTPUTS: A ViewportWindow that satisfies the render boundary contract

SANITIZER ORDER:
================
1. Finiteness      non-finite start/min -> 2000-01-01, end/max -> 2030-01-01
2. Extreme years   any bound outside [1900, 2100] -> same fallbacks
3. Ordering        start >= end -> end = start + 1y; min >= max -> min = max - 10y
4. Span            max - min < 1y -> min = max - 10y; > 100y -> min = max - 50y
5. Zoom            non-finite or <= 0 -> defaults; in >= out -> out = in * 1000
6. Containment     start/end clamped into [min, max]; a collapsed window
                   becomes the whole pannable bound

One pass can push a bound back out of range (end = start + 1y past 2100,
for instance), so passes repeat until nothing changes. A window that
does not settle within MAX_SANITIZE_PASSES is replaced by SAFE_WINDOW,
which is itself a fixed point.
"""

from __future__ import annotations
from dataclasses import dataclass, astuple
from typing import Any, List, Optional, Sequence
import math

import numpy as np

from .contracts.base import ErrorCode
from .contracts.items import TimelineItem
from .contracts.viewport import (
    TimelineArgs, ViewportWindow,
    DEFAULT_ZOOM_IN_LIMIT, DEFAULT_ZOOM_OUT_LIMIT,
)
from .observability import DiagnosticLog, verbose
from .temporal.calendar import (
    MS_PER_YEAR, from_epoch_ms, instant_from_year, instant_year, to_epoch_ms,
)
from .temporal.clock import LogicalClock, resolve_clock


# =============================================================================
# CONSTANTS
# =============================================================================

VISIBLE_PADDING = 0.2
PANNABLE_PADDING = 0.5

EXTREME_MIN_YEAR = 1900
EXTREME_MAX_YEAR = 2100

MIN_SPAN_MS = MS_PER_YEAR
MAX_SPAN_MS = 100 * MS_PER_YEAR

MAX_SANITIZE_PASSES = 8


def _year_ms(year: int) -> int:
    return int(to_epoch_ms(instant_from_year(year)))


FALLBACK_START_MS = _year_ms(2000)
FALLBACK_END_MS = _year_ms(2030)

SAFE_WINDOW = ViewportWindow(
    start=instant_from_year(2020),
    end=instant_from_year(2025),
    min=instant_from_year(2000),
    max=instant_from_year(2030),
    zoom_in_limit=DEFAULT_ZOOM_IN_LIMIT,
    zoom_out_limit=DEFAULT_ZOOM_OUT_LIMIT,
)


# =============================================================================
# SMART VIEWPORT
# =============================================================================

def compute_smart_viewport(
    items: Sequence[TimelineItem],
    zoom_in_limit: float = DEFAULT_ZOOM_IN_LIMIT,
    zoom_out_limit: float = DEFAULT_ZOOM_OUT_LIMIT,
    diagnostics: Optional[DiagnosticLog] = None
) -> Optional[ViewportWindow]:
    """
    Fit the window to the items with 20% padding on each side.

    The pannable bound gets 50% padding. Returns None for an empty item
    set or a zero (or non-finite) span.
    """
    if not items:
        return None

    starts = np.array([to_epoch_ms(item.start) for item in items], dtype=np.float64)
    latests = np.array([to_epoch_ms(item.latest) for item in items], dtype=np.float64)
    starts = starts[np.isfinite(starts)]
    latests = latests[np.isfinite(latests)]
    if starts.size == 0 or latests.size == 0:
        return None

    earliest = float(starts.min())
    latest = float(latests.max())
    span = latest - earliest
    if not math.isfinite(span) or span <= 0:
        verbose(diagnostics, 'viewport', 'smart viewport unavailable', span=span)
        return None

    window = ViewportWindow(
        start=from_epoch_ms(earliest - span * VISIBLE_PADDING),
        end=from_epoch_ms(latest + span * VISIBLE_PADDING),
        min=from_epoch_ms(earliest - span * PANNABLE_PADDING),
        max=from_epoch_ms(latest + span * PANNABLE_PADDING),
        zoom_in_limit=zoom_in_limit,
        zoom_out_limit=zoom_out_limit,
    )
    verbose(
        diagnostics, 'viewport', 'computed smart viewport',
        item_count=len(items), start=window.start, end=window.end
    )
    return window


# =============================================================================
# WINDOW SELECTION
# =============================================================================

def _year_or_none(value: Any) -> Optional[int]:
    ms = to_epoch_ms(value)
    if math.isnan(ms):
        return None
    return instant_year(from_epoch_ms(ms))


def is_default_window(viewport: ViewportWindow, current_year: int) -> bool:
    """
    Value heuristic: start year within [cy-60, cy-40] and end year within
    [cy+40, cy+60] means the window is the built-in default.
    """
    start_year = _year_or_none(viewport.start)
    end_year = _year_or_none(viewport.end)
    if start_year is None or end_year is None:
        return False
    return (
        current_year - 60 <= start_year <= current_year - 40
        and current_year + 40 <= end_year <= current_year + 60
    )


def should_use_smart_viewport(args: TimelineArgs, current_year: int) -> bool:
    """True when the caller did not supply an explicit window."""
    if args.explicit_window is not None:
        return not args.explicit_window
    return is_default_window(args.viewport, current_year)


def resolve_viewport(
    args: TimelineArgs,
    items: Sequence[TimelineItem],
    clock: Optional[LogicalClock] = None,
    diagnostics: Optional[DiagnosticLog] = None
) -> ViewportWindow:
    """Select the smart or the argument window, then sanitize it."""
    window = args.viewport
    current_year = resolve_clock(clock).current_year()

    if should_use_smart_viewport(args, current_year):
        smart = compute_smart_viewport(
            items, window.zoom_in_limit, window.zoom_out_limit, diagnostics
        )
        if smart is not None:
            window = smart
        else:
            verbose(diagnostics, 'viewport', 'smart viewport failed, using default window')
    else:
        verbose(diagnostics, 'viewport', 'explicit window supplied')

    return sanitize_viewport(window, diagnostics)


# =============================================================================
# SANITIZER
# =============================================================================

@dataclass(frozen=True)
class _NumericWindow:
    """Window with bounds as integer milliseconds."""
    start: int
    end: int
    min: int
    max: int
    zoom_in: float
    zoom_out: float


def _as_number(value: Any) -> float:
    if value is None or isinstance(value, (bool, np.bool_)):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def _degenerate(diagnostics: Optional[DiagnosticLog], message: str, **context) -> None:
    verbose(diagnostics, 'viewport', message, code=ErrorCode.DEGENERATE_VIEWPORT.name, **context)


def _bound(value: Any, fallback: int, name: str, diagnostics: Optional[DiagnosticLog]) -> int:
    """Steps 1 and 2 for one bound."""
    ms = to_epoch_ms(value)
    if math.isnan(ms):
        _degenerate(diagnostics, 'non-finite bound replaced', bound=name)
        return fallback

    ms = int(round(ms))
    year = instant_year(from_epoch_ms(ms))
    if not EXTREME_MIN_YEAR <= year <= EXTREME_MAX_YEAR:
        _degenerate(diagnostics, 'extreme year replaced', bound=name, year=year)
        return fallback
    return ms


def _sanitize_pass(
    start: Any, end: Any, min_: Any, max_: Any,
    zoom_in: Any, zoom_out: Any,
    diagnostics: Optional[DiagnosticLog]
) -> _NumericWindow:
    start = _bound(start, FALLBACK_START_MS, 'start', diagnostics)
    end = _bound(end, FALLBACK_END_MS, 'end', diagnostics)
    min_ = _bound(min_, FALLBACK_START_MS, 'min', diagnostics)
    max_ = _bound(max_, FALLBACK_END_MS, 'max', diagnostics)

    if start >= end:
        _degenerate(diagnostics, 'start not before end, extending end by one year')
        end = start + MS_PER_YEAR
    if min_ >= max_:
        _degenerate(diagnostics, 'min not before max, moving min ten years back')
        min_ = max_ - 10 * MS_PER_YEAR

    span = max_ - min_
    if span < MIN_SPAN_MS:
        _degenerate(diagnostics, 'pannable span under one year', span=span)
        min_ = max_ - 10 * MS_PER_YEAR
    elif span > MAX_SPAN_MS:
        _degenerate(diagnostics, 'pannable span over one hundred years', span=span)
        min_ = max_ - 50 * MS_PER_YEAR

    zoom_in = _as_number(zoom_in)
    zoom_out = _as_number(zoom_out)
    if not math.isfinite(zoom_out) or zoom_out <= 0:
        _degenerate(diagnostics, 'invalid zoom out limit, using default')
        zoom_out = float(DEFAULT_ZOOM_OUT_LIMIT)
    if not math.isfinite(zoom_in) or zoom_in <= 0:
        _degenerate(diagnostics, 'invalid zoom in limit, using default')
        zoom_in = float(DEFAULT_ZOOM_IN_LIMIT)
    if zoom_in >= zoom_out:
        _degenerate(diagnostics, 'zoom in limit not below zoom out limit')
        zoom_out = zoom_in * 1000
        if not math.isfinite(zoom_out):
            zoom_in = float(DEFAULT_ZOOM_IN_LIMIT)
            zoom_out = float(DEFAULT_ZOOM_OUT_LIMIT)

    clamped_start = min(max(start, min_), max_)
    clamped_end = min(max(end, min_), max_)
    if (clamped_start, clamped_end) != (start, end):
        _degenerate(diagnostics, 'visible window clamped into pannable bound')
    start, end = clamped_start, clamped_end
    if start >= end:
        start, end = min_, max_

    return _NumericWindow(start, end, min_, max_, zoom_in, zoom_out)


def _to_window(numeric: _NumericWindow) -> ViewportWindow:
    return ViewportWindow(
        start=from_epoch_ms(numeric.start),
        end=from_epoch_ms(numeric.end),
        min=from_epoch_ms(numeric.min),
        max=from_epoch_ms(numeric.max),
        zoom_in_limit=numeric.zoom_in,
        zoom_out_limit=numeric.zoom_out,
    )


def sanitize_viewport(
    window: ViewportWindow,
    diagnostics: Optional[DiagnosticLog] = None
) -> ViewportWindow:
    """
    Make any window safe for the render boundary.

    Total: never raises and never returns None. Idempotent.
    """
    current = _sanitize_pass(
        window.start, window.end, window.min, window.max,
        window.zoom_in_limit, window.zoom_out_limit, diagnostics
    )
    for _ in range(MAX_SANITIZE_PASSES):
        following = _sanitize_pass(*astuple(current), diagnostics)
        if following == current:
            return _to_window(current)
        current = following

    _degenerate(diagnostics, 'window did not settle, using safe window')
    return SAFE_WINDOW


# =============================================================================
# INVARIANT CHECK
# =============================================================================

def check_viewport_invariants(window: ViewportWindow) -> List[str]:
    """Every way window breaks the render boundary contract (empty if none)."""
    start, end = to_epoch_ms(window.start), to_epoch_ms(window.end)
    min_, max_ = to_epoch_ms(window.min), to_epoch_ms(window.max)
    zoom_in = _as_number(window.zoom_in_limit)
    zoom_out = _as_number(window.zoom_out_limit)

    named = (('start', start), ('end', end), ('min', min_), ('max', max_),
             ('zoom_in_limit', zoom_in), ('zoom_out_limit', zoom_out))
    issues = [f"{name} is not finite" for name, value in named if not math.isfinite(value)]
    if issues:
        return issues

    if not start < end:
        issues.append("start is not before end")
    if not min_ <= start:
        issues.append("start is before min")
    if not max_ >= end:
        issues.append("end is after max")
    if not min_ < max_:
        issues.append("min is not before max")
    elif not MIN_SPAN_MS <= max_ - min_ <= MAX_SPAN_MS:
        issues.append("pannable span outside [1 year, 100 years]")
    if not zoom_in < zoom_out:
        issues.append("zoom in limit is not below zoom out limit")
    return issues
