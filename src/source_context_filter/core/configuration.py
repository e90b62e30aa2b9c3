"""Hierarchical configuration source.

Configuration is a nested JSON object addressed with ``:``-separated section
paths (``Logging:Console:LogLevel``). Keys are case-insensitive. Environment
variables override file values, using ``__`` as the section separator:

    SCF_Logging__LogLevel__Default=Warning
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import aiofiles

SECTION_DELIMITER = ":"
ENV_SECTION_DELIMITER = "__"
DEFAULT_ENV_PREFIX = "SCF_"
ENV_PREFIX_ENV = "SOURCE_CONTEXT_FILTER_ENV_PREFIX"
TEXT_ENCODING = "utf-8"


def _parse_json(text: str, path: Path) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in configuration file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a JSON object")
    return data


def _require_file(path: str | Path) -> Path:
    p = Path(path).expanduser()
    if not p.is_file():
        raise FileNotFoundError(f"Configuration file not found: {p}")
    return p


def load_configuration(path: str | Path) -> dict[str, Any]:
    """Read a JSON configuration file."""
    p = _require_file(path)
    return _parse_json(p.read_text(encoding=TEXT_ENCODING), p)


async def load_configuration_async(path: str | Path) -> dict[str, Any]:
    """Read a JSON configuration file without blocking the event loop."""
    p = _require_file(path)
    async with aiofiles.open(p, encoding=TEXT_ENCODING) as f:
        text = await f.read()
    return _parse_json(text, p)


def resolve_env_prefix() -> str:
    """Return the environment variable prefix used for overrides."""
    return os.getenv(ENV_PREFIX_ENV, DEFAULT_ENV_PREFIX)


def _find_key(section: Mapping[str, Any], key: str) -> str | None:
    """Return the stored spelling of ``key`` in ``section`` (case-insensitive)."""
    if key in section:
        return key
    folded = key.casefold()
    for existing in section:
        if existing.casefold() == folded:
            return existing
    return None


def _copy_tree(config: Mapping[str, Any]) -> dict[str, Any]:
    return {k: _copy_tree(v) if isinstance(v, Mapping) else v for k, v in config.items()}


def apply_environment_overrides(
    config: Mapping[str, Any],
    environ: Mapping[str, str] | None = None,
    *,
    prefix: str = "",
) -> dict[str, Any]:
    """Return a copy of ``config`` with matching environment variables layered on top."""
    if environ is None:
        environ = os.environ

    out = _copy_tree(config)
    for name, value in environ.items():
        if not name.startswith(prefix):
            continue
        parts = name[len(prefix) :].split(ENV_SECTION_DELIMITER)
        if any(not p for p in parts):
            continue

        node = out
        for part in parts[:-1]:
            existing = _find_key(node, part)
            child = node.get(existing) if existing is not None else None
            if not isinstance(child, dict):
                # A scalar in the way is replaced by a section.
                if existing is not None:
                    del node[existing]
                child = {}
                node[existing or part] = child
            node = child

        leaf = _find_key(node, parts[-1])
        if leaf is not None:
            del node[leaf]
        node[leaf or parts[-1]] = value
    return out


def merge_keys(section: Mapping[str, Any]) -> dict[str, Any]:
    """Collapse keys differing only in case; the first spelling is kept, the last value wins."""
    out: dict[str, Any] = {}
    for key, value in section.items():
        existing = _find_key(out, key)
        out[existing if existing is not None else key] = value
    return out


def get_section(config: Mapping[str, Any], path: str) -> dict[str, Any]:
    """Return the section at ``path`` with case-insensitively merged keys.

    Missing or scalar sections yield an empty dict.
    """
    node: Any = config
    for part in path.split(SECTION_DELIMITER):
        if not isinstance(node, Mapping):
            return {}
        key = _find_key(node, part)
        if key is None:
            return {}
        node = node[key]
    if not isinstance(node, Mapping):
        return {}
    return merge_keys(node)
