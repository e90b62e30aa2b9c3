from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def appsettings() -> dict[str, Any]:
    return {
        "Logging": {
            "LogLevel": {
                "Default": "Information",
                "Microsoft": "Warning",
                "Microsoft.Hosting.Lifetime": "Information",
            },
            "Console": {
                "LogLevel": {
                    "Default": "Warning",
                    "MyApp.Billing": "Debug",
                }
            },
        }
    }


@pytest.fixture
def write_config() -> Callable[[Path, dict[str, Any]], None]:
    def _write(path: Path, config: dict[str, Any]) -> None:
        path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")

    return _write
