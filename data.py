# data.py
# Local JSON persistence, backup export/import (no sample data)

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from config import STATE_FILE
from models import AppState

logger = logging.getLogger(__name__)


class ImportFailure(ValueError):
    """A backup file could not be parsed into application state."""


def _ensure_dir(path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)

def _write_json(path: Path, text: str):
    _ensure_dir(path)
    tmp = path.with_suffix(".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(text)
    tmp.replace(path)

def dump_state(state: AppState) -> Dict[str, Any]:
    """The stored blob: camelCase keys, ISO-8601 date strings."""
    return state.model_dump(mode="json", by_alias=True)

def parse_saved_data(raw: Dict[str, Any]) -> AppState:
    """Rehydrate a stored blob; missing keys fall back to empty lists and default budgets."""
    return AppState.model_validate(raw)

def export_state(state: AppState) -> str:
    return json.dumps(dump_state(state), ensure_ascii=False, indent=2)

def import_state(text: str) -> AppState:
    """
    Parse a backup file. Raises ImportFailure on malformed JSON or shape;
    callers keep their current state in that case.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Backup is not valid JSON: {e}")
        raise ImportFailure("The file is not valid JSON") from e
    if not isinstance(raw, dict):
        logger.error(f"Backup root is {type(raw).__name__}, expected an object")
        raise ImportFailure("The file does not contain a budget backup")
    try:
        return parse_saved_data(raw)
    except ValidationError as e:
        logger.error(f"Backup failed validation: {e}")
        raise ImportFailure("The backup contains invalid records") from e

def backup_filename(now: datetime) -> str:
    return f"budget_backup_{now:%Y-%m-%d}.json"

def load_state(path: Optional[Path] = None) -> AppState:
    target = path or STATE_FILE
    if not target.exists():
        return AppState()
    try:
        with open(target, "r", encoding="utf-8") as f:
            return import_state(f.read())
    except (ImportFailure, OSError) as e:
        logger.error(f"Failed to load saved data from {target}: {e}")
        return AppState()

def save_state(state: AppState, path: Optional[Path] = None) -> None:
    target = path or STATE_FILE
    _write_json(target, export_state(state))
    logger.debug(f"Saved state to {target}")
