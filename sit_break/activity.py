"""Daily activity records: stand events, seconds sat, sedentary breaks taken."""
from __future__ import annotations
import datetime
from typing import Any, Optional

from .config import number_or

COUNTERS = ("standCount", "sitSeconds", "sedentaryBreaks")


def empty_day(day: Optional[datetime.date] = None) -> dict[str, Any]:
    day = day or datetime.date.today()
    return {"date": day.isoformat(), "standCount": 0, "sitSeconds": 0, "sedentaryBreaks": 0}


def _count(value: Any) -> int:
    return max(0, int(number_or(value, 0)))


def normalize_history(raw: Any) -> list[dict[str, Any]]:
    """Clean list of day records; entries without a date string are dropped."""
    if not isinstance(raw, list):
        return []
    history = []
    for entry in raw:
        if not isinstance(entry, dict) or not isinstance(entry.get("date"), str):
            continue
        rec = {"date": entry["date"]}
        for key in COUNTERS:
            rec[key] = _count(entry.get(key))
        history.append(rec)
    return history


def get_day(history: list[dict[str, Any]], day: Optional[datetime.date] = None) -> dict[str, Any]:
    day = day or datetime.date.today()
    iso = day.isoformat()
    for entry in history:
        if entry["date"] == iso:
            return dict(entry)
    return empty_day(day)


def upsert_day(history: list[dict[str, Any]], record: dict[str, Any]) -> list[dict[str, Any]]:
    """History with ``record`` replacing any entry for the same date (appended last)."""
    return [e for e in history if e["date"] != record["date"]] + [record]


def add_to_day(history: list[dict[str, Any]], day: Optional[datetime.date] = None,
               **deltas: int) -> list[dict[str, Any]]:
    """Bump today's counters, e.g. ``add_to_day(h, standCount=1)``."""
    rec = get_day(history, day)
    for key, delta in deltas.items():
        if key not in COUNTERS:
            raise KeyError(key)
        rec[key] = rec.get(key, 0) + max(0, int(delta))
    return upsert_day(history, rec)


def reset_day(history: list[dict[str, Any]], day: Optional[datetime.date] = None) -> list[dict[str, Any]]:
    return upsert_day(history, empty_day(day))


def recent_history(history: list[dict[str, Any]], days: int = 7) -> list[dict[str, Any]]:
    """Last ``days`` records in date order."""
    return sorted(history, key=lambda e: e["date"])[-days:]


def streak_days(history: list[dict[str, Any]], today: Optional[datetime.date] = None) -> int:
    """Consecutive active days (>=1 stand) ending today, or yesterday if today is still empty."""
    today = today or datetime.date.today()
    active = {e["date"] for e in history if e.get("standCount", 0) > 0}
    day = today if today.isoformat() in active else today - datetime.timedelta(days=1)
    streak = 0
    while day.isoformat() in active:
        streak += 1
        day -= datetime.timedelta(days=1)
    return streak
