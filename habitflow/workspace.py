"""Workspace root, settings, timezone, path helpers for HabitFlow."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from habitflow.fileio import read_yaml
from habitflow.models import Settings


def workspace_root() -> Path:
    """Get the workspace root directory (holds state.json and settings.yaml)."""
    return Path(
        os.environ.get("HABITFLOW_ROOT", str(Path.home() / ".habitflow"))
    ).expanduser().resolve()


def load_settings(root: Path | None = None) -> Settings:
    """Load settings.yaml, falling back to defaults for anything missing."""
    if root is None:
        root = workspace_root()
    return Settings.from_dict(read_yaml(settings_path(root)))


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get user's timezone from settings.yaml, defaulting to UTC."""
    try:
        return ZoneInfo(load_settings(root).timezone)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def today_str(root: Path | None = None) -> str:
    """Get today's date string (YYYY-MM-DD) in user's timezone."""
    tz = get_user_timezone(root)
    return datetime.now(tz).date().isoformat()


# ── Path helpers ──────────────────────────────────────────────

def state_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "state.json"


def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "settings.yaml"
