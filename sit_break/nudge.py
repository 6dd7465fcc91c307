"""
Opportunistic body-part nudges.

``evaluate`` scores the current candidate part and returns a nudge dict or
None. It never touches the ignore/complete counters; those only move when
the user answers a nudge (snooze, mute, finish an exercise).
"""
from __future__ import annotations
import datetime, math
from typing import Any, Optional

SNOOZE_MINUTES = 10

PROFILE_FACTORS = {
    "active": 1.20,
    "gentle": 0.88,
    "balanced": 1.00,
}

REMAINING_WEIGHT = 14
UNSTARTED_WEIGHT = 50
IGNORE_PENALTY, IGNORE_PENALTY_CAP = 12, 30
STREAK_BOOST, STREAK_BOOST_CAP = 3, 9


class NudgeState:
    """In-memory nudge bookkeeping for one foreground session."""

    def __init__(self):
        self.last_fired_at: Optional[datetime.datetime] = None
        self.snooze_until: Optional[datetime.datetime] = None
        self.mute_date: Optional[datetime.date] = None
        self.ignore_count = 0;  self.complete_count = 0
        self.current: Optional[dict[str, Any]] = None

    def reset(self) -> None:
        self.__init__()

    def is_muted(self, today: datetime.date) -> bool:
        return self.mute_date == today

    def is_snoozed(self, now: datetime.datetime) -> bool:
        return self.snooze_until is not None and now < self.snooze_until

    def interval_elapsed(self, now: datetime.datetime, interval_min: int) -> bool:
        if self.last_fired_at is None:
            return True
        return now - self.last_fired_at >= datetime.timedelta(minutes=max(1, interval_min))


# ─── Scoring ──────────────────────────────────────────────────
def urgency_for_hour(hour: int) -> int:
    if hour >= 17:
        return 20
    if hour >= 15:
        return 14
    if hour >= 12:
        return 8
    return 0


def score_candidate(candidate: dict[str, Any], hour: int, profile: str,
                    ignore_count: int = 0, complete_count: int = 0) -> int:
    factor = PROFILE_FACTORS.get(profile, 1.0)
    remaining = max(0, candidate["remaining"])
    base = (remaining * REMAINING_WEIGHT + max(0, 1 - candidate["ratio"]) * UNSTARTED_WEIGHT) * factor
    fatigue = min(ignore_count * IGNORE_PENALTY, IGNORE_PENALTY_CAP)
    streak = min(complete_count * STREAK_BOOST, STREAK_BOOST_CAP)
    # half-up rounding, not banker's
    return max(0, math.floor(base + urgency_for_hour(hour) - fatigue + streak + 0.5))


def nudge_reason(level: str, remaining: int) -> str:
    if level == "confirm":
        return f"{remaining} reps still owed for this part today. Do one now."
    return f"Light reminder: {remaining} reps left for this part, fit one in when you can."


def evaluate(candidate: Optional[dict[str, Any]], now: datetime.datetime,
             state: NudgeState, settings: dict[str, Any]) -> Optional[dict[str, Any]]:
    """Nudge for ``candidate`` at ``now``, or None when gated or scored too low."""
    if candidate is None:
        return None
    if state.is_snoozed(now):
        return None
    if state.is_muted(now.date()):
        return None

    score = score_candidate(candidate, now.hour, settings["partNudgeProfile"],
                            state.ignore_count, state.complete_count)
    if score < settings["partNudgeSoftThreshold"]:
        return None

    level = "confirm" if score >= settings["partNudgeConfirmThreshold"] else "soft"
    return {
        "part": candidate["part"],
        "score": score,
        "level": level,
        "reason": nudge_reason(level, candidate["remaining"]),
        "firedAt": now,
    }


# ─── User Responses ───────────────────────────────────────────
def snooze(state: NudgeState, now: datetime.datetime) -> None:
    state.snooze_until = now + datetime.timedelta(minutes=SNOOZE_MINUTES)
    state.ignore_count += 1
    state.current = None


def mute_today(state: NudgeState, today: datetime.date) -> None:
    state.mute_date = today
    state.ignore_count += 2
    state.current = None


def record_completion(state: NudgeState) -> None:
    """A part exercise was finished."""
    state.complete_count += 1
    state.ignore_count = max(0, state.ignore_count - 1)
    state.current = None
