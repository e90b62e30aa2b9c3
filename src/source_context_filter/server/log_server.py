"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: evaluate a log event against a configuration, describe its rules
- Resources: level names, schemas and an example configuration
- Prompts: a guided review of a LogLevel configuration

Run locally (stdio):
    python -m source_context_filter.server.log_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from source_context_filter.prompts.registry import register_prompts
from source_context_filter.resources.registry import register_resources
from source_context_filter.tools.filtering import check_log_event_impl, describe_log_levels_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("SOURCE_CONTEXT_FILTER_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("source-context-filter", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
async def check_log_event(
    config_path: str,
    source_context: str | None = None,
    level: str = "Information",
    sink: str | None = None,
) -> dict[str, Any]:
    """Decide whether a log event would be emitted under a configuration.

    Parameters
    ----------
    config_path:
        Path to a JSON configuration file with a ``Logging`` section.
    source_context:
        Dot-separated category of the event (e.g., MyApp.Billing.Invoices).
        Omit to evaluate an event without a source context.
    level:
        Event level: Verbose, Debug, Information, Warning, Error or Fatal. Case-insensitive.
    sink:
        Sink name; uses Logging:{sink}:LogLevel instead of Logging:LogLevel.

    Returns
    -------
    dict:
        {"source_context", "level", "enabled", "matched_rule", "minimum_level"}
    """
    return await check_log_event_impl(
        config_path=config_path,
        source_context=source_context,
        level=level,
        sink=sink,
    )


@mcp.tool()
async def describe_log_levels(config_path: str, sink: str | None = None) -> dict[str, Any]:
    """List the default level and per-category rules, in the order they are matched."""
    return await describe_log_levels_impl(config_path=config_path, sink=sink)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
