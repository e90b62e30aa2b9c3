"""Core data models for source context filtering."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

SOURCE_CONTEXT_PROPERTY = "SourceContext"


class LogEventLevel(IntEnum):
    """Ordered severity levels; a minimum level lets through itself and everything above."""

    VERBOSE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5

    @property
    def display_name(self) -> str:
        """Return the configuration spelling (e.g. ``Information``)."""
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> LogEventLevel:
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            valid = ", ".join(level.display_name for level in cls)
            raise ValueError(f"Unknown log event level {name!r}. Valid values: {valid}") from exc


@dataclass(frozen=True, slots=True)
class ScalarValue:
    """Boxed scalar property value (string, number, bool or None)."""

    value: Any

    def __str__(self) -> str:
        return "" if self.value is None else str(self.value)


@dataclass(frozen=True, slots=True)
class LogEvent:
    """Log event as seen by filters: a level plus named property values."""

    level: LogEventLevel
    properties: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def for_source_context(cls, source_context: str, level: LogEventLevel) -> LogEvent:
        """Build an event carrying ``source_context`` as a boxed ``SourceContext`` property."""
        return cls(level=level, properties={SOURCE_CONTEXT_PROPERTY: ScalarValue(source_context)})
