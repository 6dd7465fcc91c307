"""
Reminder settings and per-weekday plans.

Settings live in a plain dict so they can be written straight to JSON.
Every load and every save goes through ``normalize_settings`` which clamps
each field into range; the result is the effective value.
"""
from __future__ import annotations
import copy, datetime
from typing import Any, Optional

# ─── Enumerations ─────────────────────────────────────────────
BODY_PARTS = ("neck", "shoulder", "lower-back", "core", "gluteal", "leg")
WEEKDAY_KEYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")
ALERT_LEVELS = ("normal", "high", "critical")
NUDGE_PROFILES = ("gentle", "balanced", "active")

# ─── Ranges ───────────────────────────────────────────────────
LIMIT_MIN_RANGE = (10, 180)
TARGET_RANGE = (1, 30)
REMINDER_MIN_RANGE = (1, 60)
SOFT_THRESHOLD_RANGE = (20, 95)
CONFIRM_THRESHOLD_MAX = 100
CONFIRM_GAP = 8                    # confirm threshold sits at least this far above soft
HOUR_RANGE = (0, 23)

DEFAULT_TARGETS = {
    "neck": 5,
    "shoulder": 3,
    "lower-back": 5,
    "core": 5,
    "gluteal": 3,
    "leg": 3,
}


def _build_daily_plans(limit_min: int, targets: dict[str, int]) -> dict[str, dict[str, Any]]:
    return {day: {"limitMin": limit_min, "targets": dict(targets)} for day in WEEKDAY_KEYS}


DEFAULT_SETTINGS = {
    "limitMin": 45,
    "partReminderMin": 4,
    "partNudgeProfile": "balanced",
    "partNudgeSoftThreshold": 52,
    "partNudgeConfirmThreshold": 78,
    "alertLevel": "high",
    "workStartHour": 9,
    "workEndHour": 18,
    "remindersInWorkOnly": True,
    "useDailyPlan": True,
    "targets": dict(DEFAULT_TARGETS),
    "dailyPlans": _build_daily_plans(45, DEFAULT_TARGETS),
}


def default_settings() -> dict[str, Any]:
    """Fresh deep copy of the defaults."""
    return copy.deepcopy(DEFAULT_SETTINGS)


# ─── Coercion helpers ─────────────────────────────────────────
def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def number_or(value: Any, fallback: float) -> float:
    """Numeric value of ``value``, or ``fallback`` if it is not a finite number."""
    if isinstance(value, bool):
        return fallback
    try:
        n = float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if n != n or n in (float("inf"), float("-inf")):
        return fallback
    return n


def clamp_int(value: Any, fallback: int, lo: int, hi: int) -> int:
    return int(round(clamp(number_or(value, fallback), lo, hi)))


def normalize_targets(raw: Any, fallback: dict[str, int]) -> dict[str, int]:
    raw = raw if isinstance(raw, dict) else {}
    return {part: clamp_int(raw.get(part), fallback[part], *TARGET_RANGE) for part in BODY_PARTS}


def normalize_settings(loaded: Any) -> dict[str, Any]:
    """Validate and clamp every field; unknown or broken input falls back to defaults."""
    loaded = loaded if isinstance(loaded, dict) else {}
    d = DEFAULT_SETTINGS

    base_targets = normalize_targets(loaded.get("targets"), d["targets"])
    base_limit = clamp_int(loaded.get("limitMin"), d["limitMin"], *LIMIT_MIN_RANGE)

    raw_plans = loaded.get("dailyPlans")
    raw_plans = raw_plans if isinstance(raw_plans, dict) else {}
    daily_plans = {}
    for day in WEEKDAY_KEYS:
        source = raw_plans.get(day)
        source = source if isinstance(source, dict) else {}
        daily_plans[day] = {
            "limitMin": clamp_int(source.get("limitMin"), base_limit, *LIMIT_MIN_RANGE),
            "targets": normalize_targets(source.get("targets"), base_targets),
        }

    soft = clamp_int(loaded.get("partNudgeSoftThreshold"), d["partNudgeSoftThreshold"], *SOFT_THRESHOLD_RANGE)
    confirm = clamp_int(loaded.get("partNudgeConfirmThreshold"), d["partNudgeConfirmThreshold"],
                        soft + CONFIRM_GAP, CONFIRM_THRESHOLD_MAX)

    def pick(key: str, allowed: tuple) -> str:
        v = loaded.get(key)
        return v if v in allowed else d[key]

    def flag(key: str) -> bool:
        v = loaded.get(key)
        return v if isinstance(v, bool) else d[key]

    return {
        "limitMin": base_limit,
        "partReminderMin": clamp_int(loaded.get("partReminderMin"), d["partReminderMin"], *REMINDER_MIN_RANGE),
        "partNudgeProfile": pick("partNudgeProfile", NUDGE_PROFILES),
        "partNudgeSoftThreshold": soft,
        "partNudgeConfirmThreshold": confirm,
        "alertLevel": pick("alertLevel", ALERT_LEVELS),
        "workStartHour": clamp_int(loaded.get("workStartHour"), d["workStartHour"], *HOUR_RANGE),
        "workEndHour": clamp_int(loaded.get("workEndHour"), d["workEndHour"], *HOUR_RANGE),
        "remindersInWorkOnly": flag("remindersInWorkOnly"),
        "useDailyPlan": flag("useDailyPlan"),
        "targets": base_targets,
        "dailyPlans": daily_plans,
    }


def apply_test_mode(settings: dict[str, Any]) -> dict[str, Any]:
    """Short intervals for manual testing (bypasses the normal lower bounds)."""
    s = copy.deepcopy(settings)
    s["limitMin"] = 1
    s["partReminderMin"] = 1
    for plan in s["dailyPlans"].values():
        plan["limitMin"] = 1
    return s


# ─── Plans ────────────────────────────────────────────────────
def weekday_key(day: Optional[datetime.date] = None) -> str:
    """'sun'..'sat' for a date (today by default)."""
    day = day or datetime.date.today()
    # date.weekday(): Monday == 0
    return WEEKDAY_KEYS[(day.weekday() + 1) % 7]


def active_plan(settings: dict[str, Any], day: Optional[datetime.date] = None) -> dict[str, Any]:
    """The plan in force for ``day``: that weekday's plan, or the global one."""
    if settings.get("useDailyPlan"):
        plan = settings["dailyPlans"][weekday_key(day)]
    else:
        plan = {"limitMin": settings["limitMin"], "targets": settings["targets"]}
    return {"limitMin": plan["limitMin"], "targets": dict(plan["targets"])}


def limit_seconds(plan: dict[str, Any]) -> int:
    return max(1, int(plan["limitMin"])) * 60


def apply_plan_to_all_days(settings: dict[str, Any], day: Optional[str] = None) -> dict[str, Any]:
    """Copy one weekday's plan (or the global plan when ``day`` is None) everywhere."""
    s = copy.deepcopy(settings)
    if day is not None and s.get("useDailyPlan"):
        source = s["dailyPlans"][day]
    else:
        source = {"limitMin": s["limitMin"], "targets": s["targets"]}
    s["limitMin"] = source["limitMin"]
    s["targets"] = dict(source["targets"])
    s["dailyPlans"] = _build_daily_plans(source["limitMin"], source["targets"])
    return s
