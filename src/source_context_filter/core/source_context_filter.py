"""Minimum-level filtering by hierarchical source context.

Rules map a category prefix such as ``Company.Module`` to a minimum level.
The most specific rule matching an event's ``SourceContext`` decides; events
without a source context, or matching no rule, use the default level.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .models import SOURCE_CONTEXT_PROPERTY, LogEvent, LogEventLevel, ScalarValue


def extract_source_context(event: LogEvent) -> str | None:
    """Return the event's source context as a plain string, or None."""
    value = event.properties.get(SOURCE_CONTEXT_PROPERTY)
    if isinstance(value, ScalarValue):
        if value.value is None:
            return None
        value = str(value.value)
    if not isinstance(value, str) or not value:
        return None
    return value


def _matches(source_context: str, source_context_filter: str) -> bool:
    # A prefix only counts when it ends on a dot boundary: "A" must not match "AAA".
    return source_context == source_context_filter or source_context.startswith(
        f"{source_context_filter}."
    )


class SourceContextFilter:
    """Decide whether a log event passes, based on its source context and level."""

    __slots__ = ("_rules", "_default_level", "_keys_in_order")

    def __init__(
        self,
        source_context_filters: Mapping[str, LogEventLevel],
        default_level: LogEventLevel = LogEventLevel.VERBOSE,
    ) -> None:
        if source_context_filters is None:
            raise TypeError("source_context_filters must not be None")

        self._rules: Mapping[str, LogEventLevel] = MappingProxyType(dict(source_context_filters))
        # Longer (more specific) prefixes sort after the prefixes they extend,
        # so checking in descending order sees them first.
        self._keys_in_order: tuple[str, ...] = tuple(sorted(self._rules, reverse=True))
        self._default_level = default_level

    @property
    def rules(self) -> Mapping[str, LogEventLevel]:
        return self._rules

    @property
    def default_level(self) -> LogEventLevel:
        return self._default_level

    @property
    def ordered_keys(self) -> tuple[str, ...]:
        """Rule keys in the order they are tried against a source context."""
        return self._keys_in_order

    def minimum_level_for(self, source_context: str | None) -> tuple[str | None, LogEventLevel]:
        """Return the matching rule key (None for the default) and its minimum level."""
        if self._rules and source_context:
            for key in self._keys_in_order:
                if _matches(source_context, key):
                    return key, self._rules[key]
        return None, self._default_level

    def is_enabled(self, event: LogEvent) -> bool:
        """Return True when ``event`` should be emitted."""
        source_context = extract_source_context(event) if self._rules else None
        _, minimum_level = self.minimum_level_for(source_context)
        return event.level >= minimum_level

    def __repr__(self) -> str:
        return (
            f"SourceContextFilter(rules={dict(self._rules)!r}, "
            f"default_level={self._default_level.display_name})"
        )
