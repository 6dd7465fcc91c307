"""
Per-user JSON files.

Each signed-in user gets a directory under the data root holding
``settings.json``, ``activity.json`` and ``progress.json``. Reads never
fail: missing or corrupt files come back as defaults. Writes are
fire-and-forget; an error is logged and the in-memory state stays as is.
"""
from __future__ import annotations
import json, logging, os, re
from typing import Any, Optional

from .activity import normalize_history
from .config import normalize_settings

log = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.expanduser("~"), ".sit_break")

SETTINGS_FILE = "settings.json"
ACTIVITY_FILE = "activity.json"
PROGRESS_FILE = "progress.json"


def _safe_name(user_id: str) -> str:
    name = re.sub(r"[^A-Za-z0-9_.-]", "_", str(user_id)).strip(".")
    return name or "_"


class ProfileStore:
    """Persisted state for one user."""

    def __init__(self, user_id: str, data_dir: Optional[str] = None):
        self.user_id = str(user_id)
        self.root = os.path.join(data_dir or DATA_DIR, _safe_name(user_id))

    def _path(self, name: str) -> str:
        return os.path.join(self.root, name)

    def _read(self, name: str) -> Any:
        path = self._path(name)
        if not os.path.exists(path):
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (ValueError, OSError) as e:   # bad JSON or bad UTF-8 are both ValueError
            log.warning("Could not read %s: %s. Using defaults.", path, e)
            return None

    def _write(self, name: str, data: Any) -> bool:
        path = self._path(name)
        try:
            os.makedirs(self.root, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            return True
        except (IOError, OSError) as e:
            log.warning("Could not write %s: %s", path, e)
            return False

    # ── settings ──
    def load_settings(self) -> dict[str, Any]:
        return normalize_settings(self._read(SETTINGS_FILE))

    def save_settings(self, settings: dict[str, Any]) -> dict[str, Any]:
        """Normalize, write, and return the effective settings."""
        effective = normalize_settings(settings)
        self._write(SETTINGS_FILE, effective)
        return effective

    # ── activity history ──
    def load_history(self) -> list[dict[str, Any]]:
        return normalize_history(self._read(ACTIVITY_FILE))

    def save_history(self, history: list[dict[str, Any]]) -> None:
        self._write(ACTIVITY_FILE, history)

    # ── today's part progress ──
    def load_progress(self) -> Any:
        data = self._read(PROGRESS_FILE)
        return data if isinstance(data, dict) else None

    def save_progress(self, record: dict[str, Any]) -> None:
        self._write(PROGRESS_FILE, record)
