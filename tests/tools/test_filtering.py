from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from source_context_filter.tools.filtering import check_log_event_impl, describe_log_levels_impl


@pytest.fixture
def config_path(tmp_path: Path, write_config, appsettings: dict[str, Any]) -> str:
    path = tmp_path / "appsettings.json"
    write_config(path, appsettings)
    return str(path)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOURCE_CONTEXT_FILTER_ENV_PREFIX", "SCF_TEST_")


@pytest.mark.asyncio
async def test_check_log_event_suppressed_by_rule(config_path: str) -> None:
    out = await check_log_event_impl(
        config_path=config_path,
        source_context="Microsoft.AspNetCore",
        level="information",
    )

    assert out == {
        "source_context": "Microsoft.AspNetCore",
        "level": "Information",
        "enabled": False,
        "matched_rule": "Microsoft",
        "minimum_level": "Warning",
    }


@pytest.mark.asyncio
async def test_check_log_event_sink(config_path: str) -> None:
    out = await check_log_event_impl(
        config_path=config_path,
        source_context="MyApp.Billing.Invoices",
        level="Debug",
        sink="Console",
    )

    assert out["enabled"] is True
    assert out["matched_rule"] == "MyApp.Billing"


@pytest.mark.asyncio
async def test_check_log_event_without_source_context(config_path: str) -> None:
    out = await check_log_event_impl(config_path=config_path, level="Debug")

    assert out["source_context"] is None
    assert out["matched_rule"] is None
    assert out["minimum_level"] == "Information"
    assert out["enabled"] is False


@pytest.mark.asyncio
async def test_check_log_event_default_level_is_information(config_path: str) -> None:
    out = await check_log_event_impl(config_path=config_path, source_context="MyApp")
    assert out["level"] == "Information"
    assert out["enabled"] is True


@pytest.mark.asyncio
async def test_check_log_event_invalid_level(config_path: str) -> None:
    with pytest.raises(ValueError):
        await check_log_event_impl(config_path=config_path, source_context="A", level="loud")


@pytest.mark.asyncio
async def test_check_log_event_missing_config(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await check_log_event_impl(config_path=str(tmp_path / "missing.json"), source_context="A")


@pytest.mark.asyncio
async def test_check_log_event_environment_override(
    config_path: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("SCF_TEST_Logging__LogLevel__Microsoft", "Verbose")

    out = await check_log_event_impl(
        config_path=config_path,
        source_context="Microsoft.AspNetCore",
        level="Debug",
    )

    assert out["enabled"] is True
    assert out["minimum_level"] == "Verbose"


@pytest.mark.asyncio
async def test_describe_log_levels(config_path: str) -> None:
    out = await describe_log_levels_impl(config_path=config_path)

    assert out == {
        "default_level": "Information",
        "rules": [
            {"source_context": "Microsoft.Hosting.Lifetime", "minimum_level": "Information"},
            {"source_context": "Microsoft", "minimum_level": "Warning"},
        ],
        "sink": None,
    }


@pytest.mark.asyncio
async def test_describe_log_levels_sink(config_path: str) -> None:
    out = await describe_log_levels_impl(config_path=config_path, sink="Console")

    assert out["default_level"] == "Warning"
    assert out["sink"] == "Console"
    assert [r["source_context"] for r in out["rules"]] == ["MyApp.Billing"]
