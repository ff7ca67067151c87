"""File helpers shared by the writers."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class MergeOutcome:
    """Which entry names a single write touched. Reporting only."""

    path: Path
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)


def read_json(path: Path) -> dict[str, Any] | None:
    """Read a JSON object. Returns None if missing, unreadable or not an object."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug(f"Ignoring unreadable JSON in {path}: {e}")
        return None
    if not isinstance(data, dict):
        logger.debug(f"Ignoring non-object JSON in {path}")
        return None
    return data


def write_json(path: Path, data: dict[str, Any]) -> None:
    """Write with 2-space indentation and a trailing newline, creating parents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def remove_file(path: Path) -> bool:
    """Delete a file. Returns False if it was not there."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


def remove_dir_if_empty(path: Path) -> bool:
    if path.is_dir() and not any(path.iterdir()):
        path.rmdir()
        return True
    return False
