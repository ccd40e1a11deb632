"""
Persistent storage for the presentation schedule.

This module manages the file:

    data/schedule.json

The file holds one JSON array with every ScheduleEntry of the last
successful ingestion. There are no partial updates: an ingestion replaces
the whole file and a clear removes it.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Iterable

from schedulehub.model import ScheduleEntry

logger = logging.getLogger(__name__)

DATA_ENV_VAR = "SCHEDULEHUB_DATA"


def default_schedule_path() -> Path:
    """
    Return the path of schedule.json.

    SCHEDULEHUB_DATA wins over the package location so a user can keep the
    schedule outside of the installed package.
    """
    override = os.environ.get(DATA_ENV_VAR, "").strip()
    if override:
        return Path(override)
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "schedule.json"


def _resolve(path: str | Path | None) -> Path:
    return Path(path) if path is not None else default_schedule_path()


def load_schedule(path: str | Path | None = None) -> list[ScheduleEntry]:
    """
    Load all schedule entries from schedule.json.

    Returns an empty list if the file does not exist or is not a JSON array.
    A corrupted file is treated as "no data" and never crashes the caller.
    """
    schedule_path = _resolve(path)

    # First run: nothing ingested yet
    if not schedule_path.exists():
        return []

    try:
        data = json.loads(schedule_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug("Ignoring unreadable schedule file %s: %s", schedule_path, e)
        return []

    if not isinstance(data, list):
        logger.debug("Ignoring schedule file %s: not a JSON array", schedule_path)
        return []

    return [ScheduleEntry.from_dict(item) for item in data if isinstance(item, dict)]


def save_schedule(entries: Iterable[ScheduleEntry], path: str | Path | None = None) -> None:
    """
    Overwrite schedule.json with the given entries.

    Creates parent directories if needed.
    """
    schedule_path = _resolve(path)
    schedule_path.parent.mkdir(parents=True, exist_ok=True)

    payload = [e.to_dict() for e in entries]
    schedule_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Saved %d schedule entries to %s", len(payload), schedule_path)


def clear_schedule(path: str | Path | None = None) -> None:
    """
    Remove schedule.json. A missing file is not an error.
    """
    schedule_path = _resolve(path)
    try:
        schedule_path.unlink()
    except FileNotFoundError:
        return
    logger.info("Removed schedule file %s", schedule_path)
