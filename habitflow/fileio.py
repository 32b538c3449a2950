"""JSON/YAML file I/O for HabitFlow: tolerant readers, atomic JSON writes."""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml


def _read_text(path: Path) -> str:
    """File contents as UTF-8, or "" when the file does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""


def read_json(path: Path) -> Any:
    """Decoded JSON, or {} for a missing or blank file.

    Parse errors propagate; the caller decides how to recover.
    """
    text = _read_text(path)
    return json.loads(text) if text.strip() else {}


def read_yaml(path: Path) -> dict[str, Any]:
    """settings-style YAML mapping; {} when missing, blank, unparsable or not a mapping."""
    text = _read_text(path)
    if not text.strip():
        return {}
    try:
        result = yaml.safe_load(text)
    except yaml.YAMLError:
        return {}
    return result if isinstance(result, dict) else {}


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json_atomic(path: Path, data: Any) -> None:
    """Replace path with the JSON encoding of data.

    The document goes to a locked sibling temp file first and is renamed
    over the target, so readers see either the old or the new file.
    """
    payload = dump_json(data)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
