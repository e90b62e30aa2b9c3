"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def build_review_log_levels(config_path: str, sink: str | None = None) -> list[dict[str, Any]]:
    """Build the messages for reviewing a LogLevel configuration."""
    call_lines = [f"- config_path: {config_path}"]
    if sink:
        call_lines.append(f"- sink: {sink}")
    call_block = "\n".join(call_lines)
    return [
        {
            "role": "system",
            "content": (
                "You are an observability engineer reviewing per-category log level "
                "configuration. Be concrete and do not invent categories that are not "
                "in the tool output."
            ),
        },
        {
            "role": "user",
            "content": (
                "Review the log level rules using describe_log_levels. Follow this workflow:\n"
                "- Call describe_log_levels first with the parameters below.\n"
                "- Rules match a source context exactly or as a dot-separated prefix; "
                "the most specific rule wins and everything else uses default_level.\n"
                "- Use check_log_event to confirm any claim about a specific category.\n\n"
                "Call describe_log_levels with:\n"
                f"{call_block}\n\n"
                "Return this structure:\n"
                "1) Effective default and notable overrides (2-5 bullets)\n"
                "2) Rules that are shadowed or have no visible effect\n"
                "3) Suggested changes (1-3 bullets; say 'None' if the setup looks fine)\n"
            ),
        },
    ]


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def review_log_levels(config_path: str, sink: str | None = None) -> list[dict[str, Any]]:
        """Build a prompt that reviews a LogLevel configuration for noise and gaps."""
        return build_review_log_levels(config_path, sink)
