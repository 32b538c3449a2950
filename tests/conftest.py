"""Shared test fixtures for HabitFlow tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml

from habitflow.models import Habit, LogState


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with settings and a small log."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)

    settings = {
        "timezone": "UTC",
        "palette": ["pastel-red", "pastel-blue", "pastel-green"],
        "color_assignment": "round_robin",
    }
    (root / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    state = {
        "habits": [
            {"id": "a", "name": "Run", "color": "pastel-red"},
            {"id": "b", "name": "Read", "color": "pastel-blue"},
        ],
        "logs": {
            "2024-03-01": {"a": True, "b": False},
            "2024-03-02": {"a": True, "b": True},
        },
        "moods": {
            "2024-03-01": "Happy",
            "2024-03-02": "Stressed",
        },
    }
    (root / "state.json").write_text(json.dumps(state, indent=2), encoding="utf-8")

    # Set env var
    os.environ["HABITFLOW_ROOT"] = str(root)
    yield root
    # Cleanup
    if "HABITFLOW_ROOT" in os.environ:
        del os.environ["HABITFLOW_ROOT"]


@pytest.fixture
def two_habits() -> LogState:
    return LogState(habits=[Habit(id="A", name="A"), Habit(id="B", name="B")])
