"""
Base Contracts and Shared Types

Foundational types shared by every part of the timeline core.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all modules
- Failures are enumerated here, never invented ad hoc at call sites
- All types are frozen dataclasses for immutability guarantee
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple
from enum import Enum, auto


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for the date and viewport pipeline.

    Every way an event or a viewport can go wrong is enumerated here.
    None of them is fatal to the host: each one degrades to
    "fewer items" or "a safe default viewport".
    """
    # Date parsing / construction
    PARSE_FAILURE = auto()
    CALENDAR_CONSTRUCTION_FAILURE = auto()

    # Item assembly
    ORDERING_VIOLATION = auto()
    INVALID_END_INSTANT = auto()
    EXTREME_YEAR = auto()

    # Viewport
    DEGENERATE_VIEWPORT = auto()

    # Render boundary
    RENDER_CONSTRUCTION_FAILURE = auto()
    PROBE_FAILURE = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with full context.
    Errors are data, not exceptions - they can be stored and inspected.
    """
    code: ErrorCode
    message: str
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            context=self.context + ((key, value),)
        )

    def context_value(self, key: str) -> str:
        for k, v in self.context:
            if k == key:
                return v
        return ""
