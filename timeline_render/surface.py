"""
Render Boundary

The interactive timeline widget sits behind RenderSurface. The core never
talks to a widget directly; it hands over items and a sanitized window
and reads back what was drawn.

RENDER BOUNDARY CONTRACT:
=========================
A surface may raise on render. It must never be handed a window that
fails check_viewport_invariants.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from timeline_core.contracts.items import TimelineItem
from timeline_core.contracts.viewport import ViewportWindow
from timeline_core.viewport import check_viewport_invariants


class RenderBoundaryError(Exception):
    """Raised by a surface that cannot draw what it was given."""
    pass


@dataclass(frozen=True)
class RenderedTimeline:
    """What a surface currently shows."""
    items: Tuple[TimelineItem, ...]
    viewport: ViewportWindow
    min_height: int


class RenderSurface:
    """Interface to the widget that draws the timeline."""

    def render(
        self,
        items: Sequence[TimelineItem],
        viewport: ViewportWindow,
        min_height: int
    ) -> None:
        raise NotImplementedError

    def snapshot(self) -> Optional[RenderedTimeline]:
        """Current contents, or None if nothing has been drawn."""
        raise NotImplementedError

    def show_notice(self, text: str) -> None:
        raise NotImplementedError


class RecordingSurface(RenderSurface):
    """
    In-memory surface.

    Behaves like the widget at the boundary: a window that breaks the
    contract is refused with RenderBoundaryError instead of redrawing
    forever. Useful for headless passes and tests.
    """

    def __init__(self):
        self._current: Optional[RenderedTimeline] = None
        self._notices: List[str] = []
        self._render_count: int = 0

    def render(
        self,
        items: Sequence[TimelineItem],
        viewport: ViewportWindow,
        min_height: int
    ) -> None:
        issues = check_viewport_invariants(viewport)
        if issues:
            raise RenderBoundaryError("; ".join(issues))

        self._render_count += 1
        self._current = RenderedTimeline(
            items=tuple(items),
            viewport=viewport,
            min_height=min_height,
        )

    def snapshot(self) -> Optional[RenderedTimeline]:
        return self._current

    def show_notice(self, text: str) -> None:
        self._notices.append(text)

    @property
    def notices(self) -> List[str]:
        return list(self._notices)

    @property
    def render_count(self) -> int:
        return self._render_count
