"""
Post-Render Probe

Fire-and-forget inspection of the surface a fixed delay after render.
Reads only. Anomalies go to the diagnostic log; a failure of the probe
itself is recorded as PROBE_FAILURE and never reaches the caller.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import threading

import numpy as np

from timeline_core.contracts.base import ErrorCode
from timeline_core.observability import DiagnosticLog, warning
from timeline_core.viewport import check_viewport_invariants

from .surface import RenderSurface


@dataclass(frozen=True)
class ProbeReport:
    item_count: int
    issues: Tuple[str, ...] = field(default_factory=tuple)
    failed: bool = False

    @property
    def healthy(self) -> bool:
        return not self.failed and not self.issues


class RenderProbe:
    """Delayed, read-only health check of a render surface."""

    def __init__(
        self,
        surface: RenderSurface,
        diagnostics: Optional[DiagnosticLog] = None,
        delay_seconds: float = 0.5
    ):
        self._surface = surface
        self._diagnostics = diagnostics
        self._delay = delay_seconds
        self._report: Optional[ProbeReport] = None

    @property
    def report(self) -> Optional[ProbeReport]:
        """Result of the last run, None until the probe has run."""
        return self._report

    def schedule(self) -> threading.Timer:
        timer = threading.Timer(self._delay, self.run)
        timer.daemon = True
        timer.start()
        return timer

    def run(self) -> ProbeReport:
        try:
            report = self._inspect()
        except Exception as e:
            warning(
                self._diagnostics, 'probe', 'probe failed',
                code=ErrorCode.PROBE_FAILURE.name, error=repr(e)
            )
            report = ProbeReport(item_count=0, failed=True)

        for issue in report.issues:
            warning(self._diagnostics, 'probe', issue)
        self._report = report
        return report

    def _inspect(self) -> ProbeReport:
        rendered = self._surface.snapshot()
        if rendered is None:
            return ProbeReport(item_count=0, issues=("surface has not rendered",))

        issues: List[str] = []
        for item in rendered.items:
            if item.start is None or np.isnat(item.start):
                issues.append(f"item {item.item_id} has an invalid start")
            if item.end is not None:
                if np.isnat(item.end):
                    issues.append(f"item {item.item_id} has an invalid end")
                elif item.end <= item.start:
                    issues.append(f"item {item.item_id} ends before it starts")

        issues.extend(f"window: {issue}" for issue in check_viewport_invariants(rendered.viewport))
        return ProbeReport(item_count=len(rendered.items), issues=tuple(issues))
