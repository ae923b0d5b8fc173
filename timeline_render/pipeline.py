"""
Horizontal Timeline Render Pass

One synchronous pass: raw events -> items -> sanitized window -> surface.

FAILURE HANDLING:
=================
1. Bad events are rejected or demoted by the assembler, never raised
2. A surface failure (RENDER_CONSTRUCTION_FAILURE) is caught and the
   pass renders an empty timeline in the safe window with a notice
3. If even that fails, only the failure notice is shown
Nothing here is fatal to the host. No state survives the pass.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from timeline_core.assembly import evaluate_items
from timeline_core.config import TimelineSettings
from timeline_core.contracts.base import Error, ErrorCode
from timeline_core.contracts.items import AssemblyOutcome, AssemblyStatus, RawEvent, TimelineItem
from timeline_core.contracts.viewport import TimelineArgs, ViewportWindow
from timeline_core.observability import DiagnosticLog, verbose, warning
from timeline_core.temporal.clock import LogicalClock
from timeline_core.viewport import resolve_viewport

from .config import RenderConfig, DEFAULT_RENDER_CONFIG
from .probe import RenderProbe
from .surface import RenderSurface


@dataclass(frozen=True)
class RenderPassResult:
    """Everything one render pass decided."""
    outcomes: Tuple[AssemblyOutcome, ...]
    items: Tuple[TimelineItem, ...]
    viewport: ViewportWindow
    is_fallback: bool = False
    error: Optional[Error] = None
    probe: Optional[RenderProbe] = None
    diagnostics: Optional[DiagnosticLog] = None

    def count(self, status: AssemblyStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def rejected_count(self) -> int:
        return self.count(AssemblyStatus.REJECTED)

    @property
    def demoted_count(self) -> int:
        return self.count(AssemblyStatus.DEMOTED)


def _show_notice(
    surface: RenderSurface,
    text: str,
    diagnostics: Optional[DiagnosticLog]
) -> None:
    try:
        surface.show_notice(text)
    except Exception as e:
        warning(diagnostics, 'render', 'notice could not be shown', error=repr(e))


def _render_fallback(
    surface: RenderSurface,
    config: RenderConfig,
    diagnostics: Optional[DiagnosticLog]
) -> bool:
    """Empty timeline in the safe window. False if the surface refused that too."""
    try:
        surface.render((), config.fallback_window, config.fallback_min_height)
    except Exception as e:
        warning(diagnostics, 'render', 'fallback timeline failed', error=repr(e))
        _show_notice(surface, config.failure_notice, diagnostics)
        return False

    verbose(diagnostics, 'render', 'created safe fallback timeline')
    _show_notice(surface, config.fallback_notice, diagnostics)
    return True


def build_horizontal_timeline(
    events: Iterable[RawEvent],
    args: TimelineArgs,
    settings: TimelineSettings,
    surface: RenderSurface,
    clock: Optional[LogicalClock] = None,
    diagnostics: Optional[DiagnosticLog] = None,
    render_config: Optional[RenderConfig] = None,
    schedule_probe: bool = True
) -> RenderPassResult:
    """
    Assemble events, choose and sanitize the window, and draw.

    Without an explicit log, one is created at the settings level.
    The probe is scheduled only after a successful render of the real
    items; pass schedule_probe=False to run it by hand.
    """
    config = render_config or DEFAULT_RENDER_CONFIG
    if diagnostics is None:
        diagnostics = settings.create_diagnostics()

    outcomes = tuple(evaluate_items(events, settings.date_parsing_config, clock, diagnostics))
    items = tuple(outcome.item for outcome in outcomes if not outcome.is_rejected)
    verbose(
        diagnostics, 'render', 'assembled items',
        accepted=len(items), rejected=len(outcomes) - len(items)
    )

    viewport = resolve_viewport(args, items, clock, diagnostics)

    try:
        surface.render(items, viewport, args.div_height)
    except Exception as e:
        error = Error(
            code=ErrorCode.RENDER_CONSTRUCTION_FAILURE,
            message=str(e),
        ).with_context('item_count', str(len(items)))
        warning(diagnostics, 'render', 'error creating timeline', error=repr(e))
        _render_fallback(surface, config, diagnostics)
        return RenderPassResult(
            outcomes=outcomes,
            items=(),
            viewport=config.fallback_window,
            is_fallback=True,
            error=error,
            diagnostics=diagnostics,
        )

    verbose(diagnostics, 'render', 'timeline created', item_count=len(items))

    probe = RenderProbe(surface, diagnostics, config.probe_delay_seconds)
    if schedule_probe:
        probe.schedule()

    return RenderPassResult(
        outcomes=outcomes, items=items, viewport=viewport, probe=probe, diagnostics=diagnostics
    )
