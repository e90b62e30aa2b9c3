"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import aiofiles
from mcp.server.fastmcp import FastMCP

from source_context_filter.core.decision import FilterDecision
from source_context_filter.core.models import LogEventLevel

ALLOWED_FILE_SUFFIXES = {".json"}
BASE_DIR_ENV = "SOURCE_CONTEXT_FILTER_BASE_DIR"
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"

EXAMPLE_APPSETTINGS = """{
  "Logging": {
    "LogLevel": {
      "Default": "Information",
      "Microsoft": "Warning",
      "Microsoft.Hosting.Lifetime": "Information"
    },
    "Console": {
      "LogLevel": {
        "Default": "Warning",
        "MyApp.Billing": "Debug"
      }
    }
  }
}
"""


def _base_dir() -> Path:
    """Return the resolved base directory for file resources."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = _base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def _resolve_config_path(path: str) -> Path:
    """Resolve and validate a configuration file path."""
    resolved = _safe_resolve(path)
    if not resolved.is_file():
        raise FileNotFoundError(f"File not found: {resolved}")
    if resolved.suffix.lower() not in ALLOWED_FILE_SUFFIXES:
        allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
        raise ValueError(f"File type not allowed. Allowed: {allowed}.")
    return resolved


def level_names() -> list[str]:
    """Return the level names, lowest first."""
    return [level.display_name for level in LogEventLevel]


async def read_config_text(path: str) -> str:
    """Read a configuration file from within SOURCE_CONTEXT_FILTER_BASE_DIR."""
    p = _resolve_config_path(path)
    async with aiofiles.open(p, encoding=TEXT_ENCODING, errors=TEXT_ERRORS) as f:
        return await f.read()


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://source-context-filter/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        allowed = ", ".join(sorted(ALLOWED_FILE_SUFFIXES))
        base = _base_dir()
        return (
            "Resources:\n"
            "- app://source-context-filter/help\n"
            "- app://source-context-filter/levels\n"
            "- app://source-context-filter/schemas/filter-decision\n"
            "- app://source-context-filter/examples/appsettings\n"
            f"- config://{{path}} (restricted to {BASE_DIR_ENV}; allowed: {allowed})\n"
            f"\nBase directory: {base}\n"
        )

    @mcp.resource("app://source-context-filter/levels")
    def levels() -> list[str]:
        """Return the level names, lowest first."""
        return level_names()

    @mcp.resource("app://source-context-filter/schemas/filter-decision")
    def filter_decision_schema() -> dict[str, Any]:
        """Return the JSON schema for filter decisions."""
        return FilterDecision.model_json_schema()

    @mcp.resource("app://source-context-filter/examples/appsettings")
    def example_appsettings() -> str:
        """Return a sample configuration with global and per-sink levels."""
        return EXAMPLE_APPSETTINGS

    @mcp.resource("config://{path}")
    async def read_config(path: str) -> str:
        """Read a configuration file from within SOURCE_CONTEXT_FILTER_BASE_DIR."""
        return await read_config_text(path)
