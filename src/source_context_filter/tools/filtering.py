"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from typing import Any

from source_context_filter.core.configuration import (
    apply_environment_overrides,
    load_configuration_async,
    resolve_env_prefix,
)
from source_context_filter.core.decision import FilterDecision, FilterDescription, describe, explain
from source_context_filter.core.factory import from_configuration
from source_context_filter.core.models import LogEvent, LogEventLevel
from source_context_filter.core.source_context_filter import SourceContextFilter

DEFAULT_LEVEL = "Information"


def _parse_level(level: str | None) -> LogEventLevel:
    """Parse a user-supplied level name into a LogEventLevel."""
    if level is None or not level.strip():
        level = DEFAULT_LEVEL
    try:
        return LogEventLevel.from_name(level)
    except ValueError as e:
        raise ValueError(f"{e}. Tip: level is case-insensitive (e.g., 'warning', 'Error').") from e


async def load_filter(config_path: str, *, sink: str | None = None) -> SourceContextFilter:
    """Load a configuration file (plus environment overrides) and build its filter."""
    config = await load_configuration_async(config_path)
    config = apply_environment_overrides(config, prefix=resolve_env_prefix())
    return from_configuration(config, sink)


def _decision_to_dict(decision: FilterDecision) -> dict[str, Any]:
    """Convert a FilterDecision into a JSON-serializable dict."""
    d = decision.model_dump(mode="json")
    d["level"] = decision.level.display_name
    d["minimum_level"] = decision.minimum_level.display_name
    return d


def _description_to_dict(description: FilterDescription) -> dict[str, Any]:
    return {
        "default_level": description.default_level.display_name,
        "rules": [
            {"source_context": r.source_context, "minimum_level": r.minimum_level.display_name}
            for r in description.rules
        ],
    }


async def check_log_event_impl(
    *,
    config_path: str,
    source_context: str | None = None,
    level: str | None = None,
    sink: str | None = None,
) -> dict[str, Any]:
    """Implementation for the `check_log_event` MCP tool."""
    lvl = _parse_level(level)
    source_context_filter = await load_filter(config_path, sink=sink)
    if source_context:
        event = LogEvent.for_source_context(source_context, lvl)
    else:
        event = LogEvent(level=lvl)
    return _decision_to_dict(explain(source_context_filter, event))


async def describe_log_levels_impl(
    *,
    config_path: str,
    sink: str | None = None,
) -> dict[str, Any]:
    """Implementation for the `describe_log_levels` MCP tool."""
    source_context_filter = await load_filter(config_path, sink=sink)
    out = _description_to_dict(describe(source_context_filter))
    out["sink"] = sink
    return out
