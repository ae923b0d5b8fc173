"""
Diagnostics Layer

RESPONSIBILITY: Record what the core decided and why
ALLOWED INPUTS: Diagnostic entries from any module
OUTPUTS: Append-only, level-filtered diagnostic log

WHAT THIS LAYER MUST NOT DO:
============================
- Modify system behavior
- Make decisions based on logged data
- Raise into the caller

EXPLICIT VERBOSITY:
===================
There is no process-wide debug switch. Every function that can record
diagnostics takes an optional DiagnosticLog, and that log carries its
own DiagnosticLevel. Passing None records nothing.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum


class DiagnosticLevel(Enum):
    """Verbosity of a diagnostic log, ordered QUIET < WARNING < VERBOSE."""
    QUIET = 0
    WARNING = 1
    VERBOSE = 2

    def allows(self, level: DiagnosticLevel) -> bool:
        return level != DiagnosticLevel.QUIET and level.value <= self.value


@dataclass(frozen=True)
class DiagnosticEntry:
    """Immutable diagnostic record."""
    sequence: int
    level: DiagnosticLevel
    component: str
    message: str
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def context_dict(self) -> Dict[str, str]:
        return dict(self.context)


class DiagnosticLog:
    """
    Append-only diagnostic collector.

    Entries more verbose than the configured level are dropped at
    record time. Context values are stringified so entries never hold
    references into live data.
    """

    def __init__(self, level: DiagnosticLevel = DiagnosticLevel.QUIET):
        self._level = level
        self._entries: List[DiagnosticEntry] = []
        self._sequence: int = 0

    @property
    def level(self) -> DiagnosticLevel:
        return self._level

    def record(
        self,
        level: DiagnosticLevel,
        component: str,
        message: str,
        **context
    ) -> Optional[DiagnosticEntry]:
        """Record an entry if the configured level allows it."""
        if not self._level.allows(level):
            return None

        self._sequence += 1
        entry = DiagnosticEntry(
            sequence=self._sequence,
            level=level,
            component=component,
            message=message,
            context=tuple(sorted((k, str(v)) for k, v in context.items()))
        )
        self._entries.append(entry)
        return entry

    def verbose(self, component: str, message: str, **context) -> Optional[DiagnosticEntry]:
        return self.record(DiagnosticLevel.VERBOSE, component, message, **context)

    def warning(self, component: str, message: str, **context) -> Optional[DiagnosticEntry]:
        return self.record(DiagnosticLevel.WARNING, component, message, **context)

    def get_entries(
        self,
        level: Optional[DiagnosticLevel] = None,
        component: Optional[str] = None
    ) -> List[DiagnosticEntry]:
        """Get entries, optionally filtered."""
        entries = self._entries

        if level:
            entries = [e for e in entries if e.level == level]

        if component:
            entries = [e for e in entries if e.component == component]

        return list(entries)

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    def summary(self) -> Dict[str, int]:
        by_component: Dict[str, int] = {}
        for entry in self._entries:
            by_component[entry.component] = by_component.get(entry.component, 0) + 1
        return by_component


def verbose(log: Optional[DiagnosticLog], component: str, message: str, **context) -> None:
    """Record at VERBOSE level when a log was supplied."""
    if log is not None:
        log.verbose(component, message, **context)


def warning(log: Optional[DiagnosticLog], component: str, message: str, **context) -> None:
    """Record at WARNING level when a log was supplied."""
    if log is not None:
        log.warning(component, message, **context)


__all__ = [
    'DiagnosticLevel',
    'DiagnosticEntry',
    'DiagnosticLog',
    'verbose',
    'warning',
]
