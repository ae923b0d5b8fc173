"""
Render Pass Tests

AXIOM UNDER TEST:
=================
Nothing in a render pass is fatal to the host, and the render surface
only ever sees sanitized windows.
"""

import numpy as np
import pytest

from timeline_core.arguments import apply_overrides, build_defaults
from timeline_core.config import TimelineSettings
from timeline_core.contracts.base import ErrorCode
from timeline_core.contracts.items import ItemType, TimelineItem
from timeline_core.contracts.viewport import TimelineArgs, ViewportWindow
from timeline_core.observability import DiagnosticLevel, DiagnosticLog
from timeline_core.temporal.calendar import instant_from_year
from timeline_core.temporal.clock import LogicalClock
from timeline_core.viewport import SAFE_WINDOW, check_viewport_invariants
from timeline_render import (
    FAILURE_NOTICE, FALLBACK_NOTICE, RecordingSurface, RenderConfig, RenderProbe,
    RenderedTimeline, build_horizontal_timeline,
)

from .fixtures import (
    EVENTS, SETTINGS, BrokenSnapshotSurface, FailingSurface, FixedSnapshotSurface,
    NoNoticeSurface,
)


CLOCK = LogicalClock.for_year(2025)


def default_args() -> TimelineArgs:
    return build_defaults(SETTINGS, CLOCK)


# =============================================================================
# SUCCESSFUL PASS
# =============================================================================

class TestRenderPass:

    def test_items_and_smart_window(self):
        surface = RecordingSurface()
        result = build_horizontal_timeline(
            EVENTS, default_args(), SETTINGS, surface, clock=CLOCK, schedule_probe=False
        )

        assert not result.is_fallback
        assert [item.item_id for item in result.items] == [1, 2, 3, 5]
        assert result.rejected_count == 1
        assert result.demoted_count == 1

        rendered = surface.snapshot()
        assert rendered.items == result.items
        assert rendered.min_height == 400
        assert check_viewport_invariants(rendered.viewport) == []
        assert rendered.viewport.start < instant_from_year(1961)
        assert surface.notices == []

    def test_explicit_window_is_kept(self):
        args = apply_overrides(default_args(), {'startDate': '1930', 'endDate': '1950', 'minDate': '1920', 'maxDate': '2000'}, SETTINGS)
        surface = RecordingSurface()
        build_horizontal_timeline(EVENTS, args, SETTINGS, surface, clock=CLOCK, schedule_probe=False)
        assert surface.snapshot().viewport.start == instant_from_year(1930)

    def test_no_events_uses_argument_window(self):
        surface = RecordingSurface()
        result = build_horizontal_timeline((), default_args(), SETTINGS, surface, clock=CLOCK, schedule_probe=False)
        assert result.items == ()
        assert check_viewport_invariants(surface.snapshot().viewport) == []

    def test_degenerate_arguments_are_sanitized(self):
        broken = TimelineArgs(
            viewport=ViewportWindow(start=np.datetime64('NaT'), end=None, min=float('inf'), max='x',
                                    zoom_in_limit=-1, zoom_out_limit=None),
            explicit_window=True,
        )
        surface = RecordingSurface()
        result = build_horizontal_timeline(EVENTS, broken, SETTINGS, surface, clock=CLOCK, schedule_probe=False)
        assert not result.is_fallback
        assert surface.render_count == 1


# =============================================================================
# FALLBACK
# =============================================================================

class TestFallback:

    def test_surface_failure_renders_safe_window(self):
        log = DiagnosticLog(DiagnosticLevel.WARNING)
        surface = FailingSurface(failures=1)
        result = build_horizontal_timeline(
            EVENTS, default_args(), SETTINGS, surface, clock=CLOCK, diagnostics=log
        )

        assert result.is_fallback
        assert result.error.code == ErrorCode.RENDER_CONSTRUCTION_FAILURE
        assert result.probe is None
        assert surface.snapshot().items == ()
        assert surface.snapshot().viewport == SAFE_WINDOW
        assert surface.snapshot().min_height == 200
        assert surface.notices == [FALLBACK_NOTICE]
        assert log.get_entries(component='render')

    def test_fallback_failure_shows_failure_notice(self):
        surface = FailingSurface(failures=2)
        result = build_horizontal_timeline(EVENTS, default_args(), SETTINGS, surface, clock=CLOCK)
        assert result.is_fallback
        assert surface.snapshot() is None
        assert surface.notices == [FAILURE_NOTICE]

    @pytest.mark.parametrize('failures', [1, 2])
    def test_notice_failure_is_contained(self, failures):
        """A broken notice area still ends in a fallback result."""
        log = DiagnosticLog(DiagnosticLevel.WARNING)
        surface = NoNoticeSurface(failures=failures)
        result = build_horizontal_timeline(
            EVENTS, default_args(), SETTINGS, surface, clock=CLOCK, diagnostics=log
        )
        assert result.is_fallback
        assert result.error.code == ErrorCode.RENDER_CONSTRUCTION_FAILURE
        messages = [entry.message for entry in log.get_entries(component='render')]
        assert 'notice could not be shown' in messages

    def test_custom_notice(self):
        surface = FailingSurface(failures=1)
        config = RenderConfig(fallback_notice='nope')
        build_horizontal_timeline(EVENTS, default_args(), SETTINGS, surface, clock=CLOCK, render_config=config)
        assert surface.notices == ['nope']

    def test_render_config_validation(self):
        with pytest.raises(ValueError):
            RenderConfig(probe_delay_seconds=-1)


# =============================================================================
# PROBE
# =============================================================================

class TestRenderProbe:

    def test_healthy_after_render(self):
        surface = RecordingSurface()
        result = build_horizontal_timeline(
            EVENTS, default_args(), SETTINGS, surface, clock=CLOCK, schedule_probe=False
        )
        report = result.probe.run()
        assert report.healthy
        assert report.item_count == 4

    def test_scheduled_probe_runs(self):
        surface = RecordingSurface()
        result = build_horizontal_timeline(
            EVENTS, default_args(), SETTINGS, surface, clock=CLOCK,
            render_config=RenderConfig(probe_delay_seconds=0.01), schedule_probe=False
        )
        timer = result.probe.schedule()
        timer.join(timeout=5)
        assert result.probe.report is not None
        assert result.probe.report.healthy

    def test_nothing_rendered(self):
        report = RenderProbe(RecordingSurface()).run()
        assert report.issues == ('surface has not rendered',)

    def test_reports_bad_window(self):
        log = DiagnosticLog(DiagnosticLevel.WARNING)
        bad = ViewportWindow(
            start=instant_from_year(2010), end=instant_from_year(2000),
            min=instant_from_year(1990), max=instant_from_year(2020),
        )
        item = TimelineItem(item_id=1, start=instant_from_year(2005), end=None, type=ItemType.POINT)
        surface = FixedSnapshotSurface(RenderedTimeline(items=(item,), viewport=bad, min_height=400))

        report = RenderProbe(surface, log).run()
        assert 'window: start is not before end' in report.issues
        assert not report.healthy
        assert log.get_entries(component='probe')

    def test_probe_failure_is_contained(self):
        log = DiagnosticLog(DiagnosticLevel.WARNING)
        report = RenderProbe(BrokenSnapshotSurface(), log).run()
        assert report.failed
        assert log.get_entries(component='probe')[0].context_dict()['code'] == 'PROBE_FAILURE'

    def test_probe_does_not_render(self):
        surface = RecordingSurface()
        build_horizontal_timeline(EVENTS, default_args(), SETTINGS, surface, clock=CLOCK, schedule_probe=False)
        RenderProbe(surface).run()
        assert surface.render_count == 1


# =============================================================================
# DIAGNOSTICS
# =============================================================================

class TestPassDiagnostics:

    def test_log_follows_settings_level(self):
        settings = TimelineSettings(diagnostic_level=DiagnosticLevel.VERBOSE)
        result = build_horizontal_timeline(
            EVENTS, default_args(), settings, RecordingSurface(), clock=CLOCK, schedule_probe=False
        )
        assert result.diagnostics.level == DiagnosticLevel.VERBOSE
        assert result.diagnostics.get_entries(component='assembler')

    def test_quiet_by_default(self):
        result = build_horizontal_timeline(
            EVENTS, default_args(), SETTINGS, RecordingSurface(), clock=CLOCK, schedule_probe=False
        )
        assert result.diagnostics.entry_count == 0
