"""
Contracts Module

Explicit data types exchanged between the parser, the calendar builder,
the item assembler, the viewport calculator and the render boundary.

DESIGN PRINCIPLES:
==================
1. All contract types are immutable (frozen dataclasses)
2. All failure states are enumerated in ErrorCode
3. Instants are numpy datetime64 values (millisecond unit)
"""

from .base import ErrorCode, Error
from .dates import DateParsingConfig, ParsedDateComponents, DEFAULT_DATE_PARSING_CONFIG
from .items import ItemType, RawEvent, TimelineItem, AssemblyStatus, AssemblyOutcome
from .viewport import (
    ViewportWindow, TagConfig, TimelineArgs,
    DEFAULT_ZOOM_IN_LIMIT, DEFAULT_ZOOM_OUT_LIMIT, DEFAULT_ARGS_ZOOM_OUT_LIMIT,
)

__all__ = [
    'ErrorCode',
    'Error',
    'DateParsingConfig',
    'ParsedDateComponents',
    'DEFAULT_DATE_PARSING_CONFIG',
    'ItemType',
    'RawEvent',
    'TimelineItem',
    'AssemblyStatus',
    'AssemblyOutcome',
    'ViewportWindow',
    'TagConfig',
    'TimelineArgs',
    'DEFAULT_ZOOM_IN_LIMIT',
    'DEFAULT_ZOOM_OUT_LIMIT',
    'DEFAULT_ARGS_ZOOM_OUT_LIMIT',
]
