"""
Item Assembler

Combines parsing, calendar construction and ordering validation into a
render-ready item, or drops the event.

ASSEMBLY STEPS:
===============
1. Start: parse + build. No start instant -> REJECTED (PARSE_FAILURE)
2. End: parsed with end-date inference unless the type is point.
   No end -> the item renders as POINT
3. End instant present but not a real instant -> REJECTED
4. end <= start -> DEMOTED (ORDERING_VIOLATION): end dropped, POINT
5. Start year outside [1, current year + 1000] -> REJECTED (EXTREME_YEAR)
6. End year outside the same bound -> DEMOTED (EXTREME_YEAR)

Nothing here raises for bad event data.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .contracts.base import Error, ErrorCode
from .contracts.dates import DateParsingConfig
from .contracts.items import AssemblyOutcome, ItemType, RawEvent, TimelineItem
from .observability import DiagnosticLog, verbose
from .temporal.calendar import build_date, instant_year
from .temporal.clock import LogicalClock, resolve_clock
from .temporal.parsing import parse_date, validate_type


MIN_ITEM_YEAR = 1
MAX_YEARS_AHEAD = 1000


def _error(code: ErrorCode, message: str, event: RawEvent) -> Error:
    return Error(code=code, message=message).with_context('event_id', str(event.event_id))


def _year_in_bounds(instant: np.datetime64, current_year: int) -> bool:
    return MIN_ITEM_YEAR <= instant_year(instant) <= current_year + MAX_YEARS_AHEAD


def _build_end(
    event: RawEvent,
    item_type: ItemType,
    config: DateParsingConfig,
    diagnostics: Optional[DiagnosticLog]
) -> Tuple[Optional[np.datetime64], ItemType]:
    """End instant and the (possibly overridden) type."""
    if item_type == ItemType.POINT:
        return None, item_type

    end = None
    if event.end_date:
        end = build_date(parse_date(event.end_date, config, True, item_type, diagnostics), diagnostics)

    if end is None:
        verbose(diagnostics, 'assembler', 'no end date, rendering as point', event_id=event.event_id)
        return None, ItemType.POINT
    return end, item_type


def _make_item(
    event: RawEvent,
    start: np.datetime64,
    end: Optional[np.datetime64],
    item_type: ItemType
) -> TimelineItem:
    return TimelineItem(
        item_id=event.event_id,
        start=start,
        end=end,
        type=item_type,
        content=event.title or "",
        class_name=f"nid-{event.event_id} {event.class_name}".strip(),
        group=event.group,
        path=event.path,
    )


def evaluate_item(
    event: RawEvent,
    config: DateParsingConfig,
    clock: Optional[LogicalClock] = None,
    diagnostics: Optional[DiagnosticLog] = None,
    current_year: Optional[int] = None
) -> AssemblyOutcome:
    """Assemble one event into a tagged ACCEPTED/DEMOTED/REJECTED outcome."""
    if current_year is None:
        current_year = resolve_clock(clock).current_year()

    item_type = validate_type(event.type, diagnostics)

    start = build_date(parse_date(event.start_date, config, False, item_type, diagnostics), diagnostics)
    if start is None:
        verbose(diagnostics, 'assembler', 'invalid start date, skipping', event_id=event.event_id)
        return AssemblyOutcome.rejected(
            _error(ErrorCode.PARSE_FAILURE, "start date could not be built", event)
            .with_context('start_date', str(event.start_date))
        )

    end, item_type = _build_end(event, item_type, config, diagnostics)

    if end is not None and np.isnat(end):
        verbose(diagnostics, 'assembler', 'invalid end instant, skipping', event_id=event.event_id)
        return AssemblyOutcome.rejected(
            _error(ErrorCode.INVALID_END_INSTANT, "end date is not a valid instant", event)
        )

    demotion: Optional[Error] = None
    if end is not None and end <= start:
        verbose(diagnostics, 'assembler', 'end not after start, removing end', event_id=event.event_id)
        demotion = _error(ErrorCode.ORDERING_VIOLATION, "end date is not after start date", event)
        end = None

    if not _year_in_bounds(start, current_year):
        verbose(
            diagnostics, 'assembler', 'extreme start year, skipping',
            event_id=event.event_id, year=instant_year(start)
        )
        return AssemblyOutcome.rejected(
            _error(ErrorCode.EXTREME_YEAR, "start year is out of range", event)
            .with_context('year', str(instant_year(start)))
        )

    if end is not None and not _year_in_bounds(end, current_year):
        verbose(
            diagnostics, 'assembler', 'extreme end year, removing end',
            event_id=event.event_id, year=instant_year(end)
        )
        demotion = _error(ErrorCode.EXTREME_YEAR, "end year is out of range", event)
        end = None

    if demotion is not None:
        return AssemblyOutcome.demoted(_make_item(event, start, None, ItemType.POINT), demotion)

    item = _make_item(event, start, end, item_type)
    verbose(
        diagnostics, 'assembler', 'accepted item',
        event_id=event.event_id, start=start, end=end, type=item_type.value
    )
    return AssemblyOutcome.accepted(item)


def assemble_item(
    event: RawEvent,
    config: DateParsingConfig,
    clock: Optional[LogicalClock] = None,
    diagnostics: Optional[DiagnosticLog] = None
) -> Optional[TimelineItem]:
    """Render-ready item for event, or None if it was rejected."""
    return evaluate_item(event, config, clock, diagnostics).item


def evaluate_items(
    events: Iterable[RawEvent],
    config: DateParsingConfig,
    clock: Optional[LogicalClock] = None,
    diagnostics: Optional[DiagnosticLog] = None
) -> List[AssemblyOutcome]:
    # One current year for the whole pass.
    current_year = resolve_clock(clock).current_year()
    return [evaluate_item(event, config, None, diagnostics, current_year) for event in events]


def assemble_items(
    events: Iterable[RawEvent],
    config: DateParsingConfig,
    clock: Optional[LogicalClock] = None,
    diagnostics: Optional[DiagnosticLog] = None
) -> List[TimelineItem]:
    """Items for every event that was not rejected, in input order."""
    outcomes = evaluate_items(events, config, clock, diagnostics)
    return [outcome.item for outcome in outcomes if not outcome.is_rejected]
