"""
Logical Clock
=============

Injectable source of "now" for the parts of the core that depend on the
current year (default windows, the explicit-window heuristic and the
assembler's extreme-year bound).

GUARANTEES:
- Never reads system time outside LIVE mode
- Same pinned instant = identical default windows and item decisions
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


@dataclass
class LogicalClock:
    """
    Injectable clock.

    MODES:
    ======
    1. LIVE: system time, every read recorded
    2. FIXED: one pinned instant (tests, reproducible passes)
    """
    _ticks: List[datetime] = field(default_factory=list)
    _reads: int = 0
    _fixed: Optional[datetime] = None

    def now(self) -> datetime:
        """The pinned instant, or system time (recorded)."""
        self._reads += 1
        if self._fixed is not None:
            return self._fixed

        current = datetime.now(timezone.utc)
        self._ticks.append(current)
        return current

    def current_year(self) -> int:
        return self.now().year

    def tick_count(self) -> int:
        """Reads so far."""
        return self._reads

    def is_live(self) -> bool:
        return self._fixed is None

    @classmethod
    def live(cls) -> LogicalClock:
        return cls()

    @classmethod
    def fixed(cls, moment: datetime) -> LogicalClock:
        """Create clock pinned to a single instant."""
        return cls(_fixed=moment)

    @classmethod
    def for_year(cls, year: int) -> LogicalClock:
        return cls.fixed(datetime(year, 6, 1, tzinfo=timezone.utc))

    def __repr__(self) -> str:
        mode = "LIVE" if self.is_live() else "FIXED"
        return f"LogicalClock({mode}, reads={self._reads})"


def resolve_clock(clock: Optional[LogicalClock]) -> LogicalClock:
    """Use the supplied clock, or a live one."""
    return clock if clock is not None else LogicalClock.live()
