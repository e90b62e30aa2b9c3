"""Build SourceContextFilter instances from ``LogLevel`` configuration sections.

Global rules live under ``Logging:LogLevel``; a sink can override them with
its own ``Logging:{sink}:LogLevel`` section. The special ``Default`` key sets
the default level and is not itself a rule. Keys are case-insensitive.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from .configuration import SECTION_DELIMITER, get_section, merge_keys
from .models import LogEventLevel
from .source_context_filter import SourceContextFilter

logger = logging.getLogger(__name__)

GLOBAL_LOG_LEVEL_SECTION = "Logging:LogLevel"
DEFAULT_KEY = "Default"

_LEVEL_NUMBER_RE = re.compile(r"[+-]?[0-9]+")


def sink_log_level_section(sink_name: str) -> str:
    """Return the section path holding the log levels of ``sink_name``."""
    if not sink_name or not sink_name.strip():
        raise ValueError("sink_name must be a non-empty string")
    return SECTION_DELIMITER.join(("Logging", sink_name, "LogLevel"))


def parse_log_event_level(value: Any) -> LogEventLevel:
    """Parse a configured level: a LogEventLevel, a level name or a level number."""
    if isinstance(value, LogEventLevel):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid log event level: {value!r}")
    if isinstance(value, int):
        try:
            return LogEventLevel(value)
        except ValueError as exc:
            raise ValueError(f"Invalid log event level number: {value}") from exc
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and _LEVEL_NUMBER_RE.fullmatch(text):
            return parse_log_event_level(int(text))
        return LogEventLevel.from_name(text)
    raise ValueError(f"Invalid log event level: {value!r}")


def _get_log_event_level(section: Mapping[str, Any], key: str) -> LogEventLevel:
    value = section.get(key)
    if value is None:
        return LogEventLevel.VERBOSE
    try:
        return parse_log_event_level(value)
    except ValueError as exc:
        logger.warning("Ignoring log level for %r, using Verbose: %s", key, exc)
        return LogEventLevel.VERBOSE


def _is_default_key(key: str) -> bool:
    return key.casefold() == DEFAULT_KEY.casefold()


def create_source_context_filter(section: Mapping[str, Any]) -> SourceContextFilter:
    """Build a filter from the children of a ``LogLevel`` section."""
    section = merge_keys(section)
    source_context_filters: dict[str, LogEventLevel] = {}
    default_level = LogEventLevel.VERBOSE
    for key in section:
        if _is_default_key(key):
            default_level = _get_log_event_level(section, key)
            continue
        source_context_filters[key] = _get_log_event_level(section, key)

    logger.debug(
        "Built source context filter with %d rule(s), default level %s",
        len(source_context_filters),
        default_level.display_name,
    )
    return SourceContextFilter(source_context_filters, default_level)


def from_global_configuration(config: Mapping[str, Any]) -> SourceContextFilter:
    """Create a filter from the ``Logging:LogLevel`` section."""
    return create_source_context_filter(get_section(config, GLOBAL_LOG_LEVEL_SECTION))


def from_sink_configuration(config: Mapping[str, Any], sink_name: str) -> SourceContextFilter:
    """Create a filter from the ``Logging:{sink_name}:LogLevel`` section."""
    return create_source_context_filter(get_section(config, sink_log_level_section(sink_name)))


def from_configuration(config: Mapping[str, Any], sink_name: str | None = None) -> SourceContextFilter:
    """Use the sink section when ``sink_name`` is given, else the global one."""
    if sink_name is not None:
        return from_sink_configuration(config, sink_name)
    return from_global_configuration(config)
