"""
Per-part progress for the current day, and the "next priority" pick.

Progress is never stored: it is always derived from today's completed-rep
counters and the plan in force, so a plan change mid-day is picked up on
the next call.
"""
from __future__ import annotations
import datetime
from typing import Any, Optional

from .config import BODY_PARTS, number_or


def today_counts(record: Any, day: Optional[datetime.date] = None) -> dict[str, int]:
    """Counters from a persisted progress record; stale or broken records read as empty."""
    day = day or datetime.date.today()
    if not isinstance(record, dict) or record.get("date") != day.isoformat():
        return {}
    counts = record.get("counts")
    if not isinstance(counts, dict):
        return {}
    out = {}
    for part, n in counts.items():
        n = int(number_or(n, 0))
        if n > 0:
            out[part] = n
    return out


def record_exercise(record: Any, part: str, day: Optional[datetime.date] = None) -> dict[str, Any]:
    """New progress record with one more completed rep for ``part``."""
    day = day or datetime.date.today()
    counts = today_counts(record, day)
    counts[part] = counts.get(part, 0) + 1
    return {"date": day.isoformat(), "counts": counts}


def part_status(done: int, target: int) -> str:
    if done >= target:
        return "done"
    return "partial" if done > 0 else "todo"


def compute_part_progress(counts: dict[str, int], plan: dict[str, Any]) -> list[dict[str, Any]]:
    """One entry per body part, in display order."""
    rows = []
    for part in BODY_PARTS:
        done = max(0, int(counts.get(part, 0)))
        target = max(1, int(plan["targets"].get(part, 1)))
        rows.append({
            "part": part,
            "done": done,
            "target": target,
            "ratio": done / target,
            "remaining": max(target - done, 0),
            "status": part_status(done, target),
        })
    return rows


def select_next_priority(progress: list[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """Part with the most reps still owed; ties go to the least-started part.

    Returns the progress row (not just the name) so it can be fed straight to
    the nudge scorer. Equal rows keep their input order.
    """
    open_rows = [row for row in progress if row["remaining"] > 0]
    if not open_rows:
        return None
    return sorted(open_rows, key=lambda row: (-row["remaining"], row["ratio"]))[0]


def average_completion(progress: list[dict[str, Any]]) -> float:
    """Mean of per-part completion, each capped at 1."""
    if not progress:
        return 0.0
    return sum(min(row["done"] / row["target"], 1) for row in progress) / max(1, len(progress))
