"""
Viewport Contracts

The display window handed across the render boundary, and the argument
bundle a render pass starts from.

RENDER BOUNDARY CONTRACT:
=========================
The render boundary redraws forever when given a non-finite, inverted,
or degenerate-span window. A ViewportWindow may hold anything before
sanitization; after sanitization it satisfies:
- start < end, min <= start, max >= end, min < max
- 1 year <= (max - min) <= 100 years
- zoom_in_limit < zoom_out_limit, all fields finite
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple


# Zoom limits are window widths in milliseconds.
DEFAULT_ZOOM_IN_LIMIT = 10
DEFAULT_ZOOM_OUT_LIMIT = 315360000000000
# The render boundary compares with a strict inequality, so the default
# pannable bound needs one unit of headroom above the nominal ceiling.
DEFAULT_ARGS_ZOOM_OUT_LIMIT = DEFAULT_ZOOM_OUT_LIMIT + 1


@dataclass(frozen=True)
class ViewportWindow:
    """
    Visible window (start/end), pannable bound (min/max) and zoom limits.

    Fields are typed loosely on purpose: callers may hand in NaT, NaN,
    None or raw millisecond numbers, and only the sanitizer output is
    guaranteed to be well formed.
    """
    start: Any
    end: Any
    min: Any
    max: Any
    zoom_in_limit: float = DEFAULT_ZOOM_IN_LIMIT
    zoom_out_limit: float = DEFAULT_ZOOM_OUT_LIMIT

    def with_bounds(self, **changes) -> ViewportWindow:
        return replace(self, **changes)


@dataclass(frozen=True)
class TagConfig:
    """Required and optional tags selecting the events of a timeline."""
    tag_list: Tuple[str, ...] = field(default_factory=tuple)
    optional_tags: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TimelineArgs:
    """
    Arguments for one render pass.

    EXPLICIT WINDOW FLAG:
    =====================
    explicit_window is True when the caller supplied start/end, False when
    the window is the built-in default, and None when unknown (the
    viewport selector then falls back to comparing values against the
    default window).
    """
    viewport: ViewportWindow
    tag_config: TagConfig = field(default_factory=TagConfig)
    date_format: str = ""
    div_height: int = 400
    type: Optional[str] = None
    explicit_window: Optional[bool] = None
