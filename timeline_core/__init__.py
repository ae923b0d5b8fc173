"""
Timeline Core

Date parsing, calendar construction and viewport sanitization for an
interactive timeline. Loosely formatted date strings become validated
instants, and the display window handed to the render boundary is
guaranteed to be well formed.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Immutable data: parsing config, date components, items, windows, errors

2. TEMPORAL LAYER (temporal/)
   - Responsibility: date string -> components -> instant, display formatting
   - MUST NOT: Know about items or viewports

3. ARGUMENTS (arguments.py)
   - Responsibility: default window, caller overrides, tag lists

4. ITEM ASSEMBLER (assembly.py)
   - Responsibility: raw event -> ACCEPTED | DEMOTED | REJECTED item
   - MUST NOT: Raise for bad event data

5. VIEWPORT (viewport.py)
   - Responsibility: smart window selection, sanitization
   - MUST NOT: Return a window that breaks the render boundary contract

6. DIAGNOSTICS (observability/)
   - Responsibility: Level-filtered record of decisions
   - MUST NOT: Modify system behavior

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: All contract types are frozen dataclasses
- Deterministic: Inject a LogicalClock for a fixed "current year"
- Nothing fatal: every failure degrades to fewer items or a safe window
"""

from .arguments import (
    build_defaults,
    apply_overrides,
    create_tag_list,
    parse_tag,
    convert_entry_to_milliseconds,
)
from .assembly import assemble_item, assemble_items, evaluate_item, evaluate_items
from .config import TimelineSettings, DEFAULT_SETTINGS
from .contracts import (
    DateParsingConfig,
    ParsedDateComponents,
    ItemType,
    RawEvent,
    TimelineItem,
    AssemblyStatus,
    AssemblyOutcome,
    ViewportWindow,
    TagConfig,
    TimelineArgs,
    Error,
    ErrorCode,
)
from .observability import DiagnosticLevel, DiagnosticLog
from .temporal import (
    build_date,
    parse_date,
    validate_type,
    format_date,
    sort_timeline_dates,
    LogicalClock,
)
from .viewport import (
    compute_smart_viewport,
    sanitize_viewport,
    resolve_viewport,
    check_viewport_invariants,
    SAFE_WINDOW,
)

__all__ = [
    'build_defaults',
    'apply_overrides',
    'create_tag_list',
    'parse_tag',
    'convert_entry_to_milliseconds',
    'assemble_item',
    'assemble_items',
    'evaluate_item',
    'evaluate_items',
    'TimelineSettings',
    'DEFAULT_SETTINGS',
    'DateParsingConfig',
    'ParsedDateComponents',
    'ItemType',
    'RawEvent',
    'TimelineItem',
    'AssemblyStatus',
    'AssemblyOutcome',
    'ViewportWindow',
    'TagConfig',
    'TimelineArgs',
    'Error',
    'ErrorCode',
    'DiagnosticLevel',
    'DiagnosticLog',
    'build_date',
    'parse_date',
    'validate_type',
    'format_date',
    'sort_timeline_dates',
    'LogicalClock',
    'compute_smart_viewport',
    'sanitize_viewport',
    'resolve_viewport',
    'check_viewport_invariants',
    'SAFE_WINDOW',
]
