from __future__ import annotations

import json
from pathlib import Path

import pytest

from source_context_filter.core.factory import from_sink_configuration
from source_context_filter.core.models import LogEventLevel
from source_context_filter.prompts.registry import build_review_log_levels
from source_context_filter.resources.registry import (
    EXAMPLE_APPSETTINGS,
    _resolve_config_path,
    level_names,
    read_config_text,
)


@pytest.fixture(autouse=True)
def _base_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOURCE_CONTEXT_FILTER_BASE_DIR", str(tmp_path))


def test_resolve_config_path_relative(tmp_path: Path) -> None:
    (tmp_path / "appsettings.json").write_text("{}", encoding="utf-8")
    assert _resolve_config_path("appsettings.json") == (tmp_path / "appsettings.json").resolve()


def test_resolve_config_path_escapes_base_dir(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        _resolve_config_path("../outside.json")


def test_resolve_config_path_rejects_suffix(tmp_path: Path) -> None:
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    with pytest.raises(ValueError):
        _resolve_config_path("notes.txt")


def test_resolve_config_path_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _resolve_config_path("missing.json")


def test_level_names_lowest_first() -> None:
    assert level_names() == ["Verbose", "Debug", "Information", "Warning", "Error", "Fatal"]


@pytest.mark.asyncio
async def test_read_config_text_under_base_dir(tmp_path: Path) -> None:
    (tmp_path / "appsettings.json").write_text('{"Logging": {}}', encoding="utf-8")
    assert await read_config_text("appsettings.json") == '{"Logging": {}}'


@pytest.mark.asyncio
async def test_read_config_text_outside_base_dir(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        await read_config_text("../appsettings.json")


def test_example_appsettings_builds_filters() -> None:
    config = json.loads(EXAMPLE_APPSETTINGS)
    assert from_sink_configuration(config, "Console").rules == {"MyApp.Billing": LogEventLevel.DEBUG}


def test_review_log_levels_prompt_includes_call_parameters() -> None:
    messages = build_review_log_levels("appsettings.json", sink="Console")

    assert [m["role"] for m in messages] == ["system", "user"]
    assert "- config_path: appsettings.json" in messages[1]["content"]
    assert "- sink: Console" in messages[1]["content"]


def test_review_log_levels_prompt_without_sink() -> None:
    messages = build_review_log_levels("appsettings.json")
    assert "- sink:" not in messages[1]["content"]
