"""
Settings

Configuration consumed by the timeline core, loaded from the host's
settings storage. Persisted data uses camelCase keys; both camelCase and
snake_case are accepted on load.

MIGRATION:
==========
Older settings carried a regex-based date parser (dateParsingRegex /
dateParsingFormat). Those keys are dropped on load and replaced by the
default character-positional DateParsingConfig.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .contracts.dates import DateParsingConfig
from .observability import DiagnosticLevel, DiagnosticLog


LEGACY_PARSER_KEYS = ('dateParsingRegex', 'dateParsingFormat')

_KEY_ALIASES = {
    'timelineTag': 'timeline_tag',
    'sortDirection': 'sort_direction',
    'verticalTimelineDateDisplayFormat': 'vertical_date_display_format',
    'notePreviewOnHover': 'note_preview_on_hover',
    'showEventCounter': 'show_event_counter',
    'maxDigits': 'max_digits',
    'dateParsingConfig': 'date_parsing_config',
    'diagnosticLevel': 'diagnostic_level',
}


@dataclass
class TimelineSettings:
    """User settings relevant to date parsing and argument defaults."""
    date_parsing_config: DateParsingConfig = field(default_factory=DateParsingConfig)
    timeline_tag: str = "timeline"
    sort_direction: bool = True
    vertical_date_display_format: str = ""
    note_preview_on_hover: bool = True
    show_event_counter: bool = False
    max_digits: str = "5"
    diagnostic_level: DiagnosticLevel = DiagnosticLevel.QUIET
    migrated: bool = False

    def __post_init__(self):
        if isinstance(self.date_parsing_config, Mapping):
            self.date_parsing_config = DateParsingConfig.from_dict(self.date_parsing_config)
        if isinstance(self.diagnostic_level, str):
            self.diagnostic_level = DiagnosticLevel[self.diagnostic_level.upper()]

    @staticmethod
    def from_dict(loaded: Optional[Mapping[str, Any]]) -> TimelineSettings:
        """
        Merge persisted settings over defaults.

        Unknown keys are ignored. Legacy regex parser settings are
        migrated to the default DateParsingConfig unless a config is
        already present.
        """
        loaded = dict(loaded or {})
        migrated = False

        if any(key in loaded for key in LEGACY_PARSER_KEYS):
            for key in LEGACY_PARSER_KEYS:
                loaded.pop(key, None)
            if 'dateParsingConfig' not in loaded and 'date_parsing_config' not in loaded:
                loaded['date_parsing_config'] = DateParsingConfig()
                migrated = True

        values: Dict[str, Any] = {}
        for key, value in loaded.items():
            name = _KEY_ALIASES.get(key, key)
            if name in TimelineSettings.__dataclass_fields__ and name != 'migrated':
                values[name] = value

        return TimelineSettings(migrated=migrated, **values)

    def create_diagnostics(self) -> DiagnosticLog:
        """A fresh log at the configured level, one per render pass."""
        return DiagnosticLog(self.diagnostic_level)

    def to_dict(self) -> Dict[str, Any]:
        """Persistable form (camelCase keys)."""
        return {
            'dateParsingConfig': self.date_parsing_config.to_dict(),
            'timelineTag': self.timeline_tag,
            'sortDirection': self.sort_direction,
            'verticalTimelineDateDisplayFormat': self.vertical_date_display_format,
            'notePreviewOnHover': self.note_preview_on_hover,
            'showEventCounter': self.show_event_counter,
            'maxDigits': self.max_digits,
            'diagnosticLevel': self.diagnostic_level.name,
        }


DEFAULT_SETTINGS = TimelineSettings()
