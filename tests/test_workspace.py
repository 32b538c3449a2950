"""Tests for habitflow/workspace.py and habitflow/fileio.py."""

import json
from datetime import date

import pytest

from habitflow.fileio import read_json, read_yaml, write_json_atomic
from habitflow.models import Settings
from habitflow.workspace import (
    get_user_timezone,
    load_settings,
    settings_path,
    state_path,
    today_str,
    workspace_root,
)


def test_workspace_root_from_env(workspace):
    assert workspace_root() == workspace.resolve()
    assert state_path() == workspace.resolve() / "state.json"


def test_load_settings(workspace):
    settings = load_settings(workspace)
    assert settings.timezone == "UTC"
    assert settings.palette == ["pastel-red", "pastel-blue", "pastel-green"]


def test_missing_settings_use_defaults(tmp_path):
    assert load_settings(tmp_path) == Settings()


def test_unknown_timezone_falls_back_to_utc(tmp_path):
    settings_path(tmp_path).write_text("timezone: Not/AZone\n", encoding="utf-8")
    assert get_user_timezone(tmp_path).key == "UTC"


def test_today_str_is_iso(tmp_path):
    today = today_str(tmp_path)
    assert date.fromisoformat(today)


def test_read_yaml_tolerates_garbage(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(": : [unclosed", encoding="utf-8")
    assert read_yaml(path) == {}
    path.write_text("- just\n- a list\n", encoding="utf-8")
    assert read_yaml(path) == {}


def test_read_json_missing_and_invalid(tmp_path):
    assert read_json(tmp_path / "missing.json") == {}
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        read_json(bad)


def test_write_json_atomic_leaves_no_temp_files(tmp_path):
    target = tmp_path / "nested" / "out.json"
    write_json_atomic(target, {"k": [1, 2]})
    assert json.loads(target.read_text(encoding="utf-8")) == {"k": [1, 2]}
    assert [p.name for p in target.parent.iterdir()] == ["out.json"]
