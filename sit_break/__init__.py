"""Sit Break: sitting-limit alarm and body-part exercise nudges."""
from .config import BODY_PARTS, default_settings, normalize_settings
from .engine import ReminderEngine
from .schedule import Scheduler, is_work_window_open
from .store import ProfileStore

__version__ = "1.0.0"

__all__ = [
    "BODY_PARTS",
    "ProfileStore",
    "ReminderEngine",
    "Scheduler",
    "default_settings",
    "is_work_window_open",
    "normalize_settings",
]
