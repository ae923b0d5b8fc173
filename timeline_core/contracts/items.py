"""
Item Contracts

Raw event records (input from the extraction collaborator) and
render-ready timeline items (output of the item assembler).

INVARIANTS:
===========
- A TimelineItem with an end always has end > start
- Point items never carry an inferred end
- Assembly results are tagged: ACCEPTED | DEMOTED | REJECTED
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union
from enum import Enum

import numpy as np

from .base import Error


class ItemType(Enum):
    """Closed set of item types understood by the render boundary."""
    BOX = "box"
    POINT = "point"
    RANGE = "range"
    BACKGROUND = "background"


@dataclass(frozen=True)
class RawEvent:
    """
    An event as handed over by the extraction collaborator.

    Dates are raw strings; nothing here has been validated.
    """
    event_id: Union[int, str]
    start_date: Optional[str]
    end_date: Optional[str] = None
    type: Optional[str] = None
    title: str = ""
    group: Optional[str] = None
    path: str = ""
    class_name: str = ""


@dataclass(frozen=True)
class TimelineItem:
    """A validated, render-ready item."""
    item_id: Union[int, str]
    start: np.datetime64
    end: Optional[np.datetime64]
    type: ItemType
    content: str = ""
    class_name: str = ""
    group: Optional[str] = None
    path: str = ""

    def __post_init__(self):
        if np.isnat(self.start):
            raise ValueError("TimelineItem start must be a valid instant")
        if self.end is not None and not self.end > self.start:
            raise ValueError("TimelineItem end must be after start")

    @property
    def latest(self) -> np.datetime64:
        """End if present, otherwise start."""
        return self.end if self.end is not None else self.start


class AssemblyStatus(Enum):
    """Outcome of assembling one candidate event."""
    ACCEPTED = "accepted"
    DEMOTED = "demoted"      # end dropped, rendered as a point
    REJECTED = "rejected"    # dropped from the render set


@dataclass(frozen=True)
class AssemblyOutcome:
    """
    Tagged result of the item assembler.

    Either REJECTED with an error, or carrying an item.
    A DEMOTED outcome carries both the degraded item and the reason.
    """
    status: AssemblyStatus
    item: Optional[TimelineItem] = None
    error: Optional[Error] = None

    def __post_init__(self):
        if self.status == AssemblyStatus.REJECTED and self.item is not None:
            raise ValueError("Rejected outcome cannot carry an item")
        if self.status != AssemblyStatus.REJECTED and self.item is None:
            raise ValueError(f"{self.status.value} outcome requires an item")

    @property
    def is_rejected(self) -> bool:
        return self.status == AssemblyStatus.REJECTED

    @property
    def degraded(self) -> bool:
        return self.status == AssemblyStatus.DEMOTED

    @staticmethod
    def accepted(item: TimelineItem) -> AssemblyOutcome:
        return AssemblyOutcome(status=AssemblyStatus.ACCEPTED, item=item)

    @staticmethod
    def demoted(item: TimelineItem, error: Error) -> AssemblyOutcome:
        return AssemblyOutcome(status=AssemblyStatus.DEMOTED, item=item, error=error)

    @staticmethod
    def rejected(error: Error) -> AssemblyOutcome:
        return AssemblyOutcome(status=AssemblyStatus.REJECTED, error=error)
