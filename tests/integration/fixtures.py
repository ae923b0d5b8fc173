"""
Render pass fixtures.
"""

from typing import Optional

from timeline_core.config import TimelineSettings
from timeline_core.contracts.items import RawEvent
from timeline_render.surface import RecordingSurface, RenderBoundaryError, RenderedTimeline


SETTINGS = TimelineSettings()

EVENTS = (
    RawEvent(1, '1961-08-13', '1989-11-09', 'range', title='Berlin Wall'),
    RawEvent(2, '1973-10-06', '1973-10-25', 'range', title='Yom Kippur War'),
    RawEvent(3, '1969-07-20', title='Moon landing'),
    RawEvent(4, 'not a date', title='Broken'),
    RawEvent(5, '1990', '1989', title='Inverted'),
)


class FailingSurface(RecordingSurface):
    """Refuses the first `failures` renders."""

    def __init__(self, failures: int = 1):
        super().__init__()
        self._failures = failures

    def render(self, items, viewport, min_height):
        if self._failures > 0:
            self._failures -= 1
            raise RenderBoundaryError("widget construction failed")
        super().render(items, viewport, min_height)


class BrokenSnapshotSurface(RecordingSurface):
    def snapshot(self) -> Optional[RenderedTimeline]:
        raise RuntimeError("surface detached")


class FixedSnapshotSurface(RecordingSurface):
    """Reports a fixed rendered state, whatever was drawn."""

    def __init__(self, rendered: RenderedTimeline):
        super().__init__()
        self._rendered = rendered

    def snapshot(self) -> Optional[RenderedTimeline]:
        return self._rendered


class NoNoticeSurface(FailingSurface):
    """Fails to render, and its notice area is gone as well."""

    def show_notice(self, text: str) -> None:
        raise RuntimeError("notice area detached")
