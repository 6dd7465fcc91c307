"""Continuous-sitting counter and the stand-up alarm."""
from __future__ import annotations
from typing import Optional

# Alert pulse cadence while the alarm is up (ms); "normal" pulses once only.
PULSE_INTERVAL_MS = {
    "critical": 4500,
    "high": 10000,
    "normal": None,
}


def pulse_interval_ms(alert_level: str) -> Optional[int]:
    return PULSE_INTERVAL_MS.get(alert_level)


class SedentaryTimer:
    """Idle(elapsed < limit) -> Alarm(elapsed >= limit) -> Idle(elapsed = 0).

    Only explicit ticks count. Time the host spent suspended is not
    reconciled against the wall clock, so backgrounding understates sitting.
    """

    def __init__(self, limit_seconds: int):
        self.limit_seconds = max(1, int(limit_seconds))
        self.elapsed_seconds = 0
        self.alarm_active = False

    def set_limit(self, limit_seconds: int) -> None:
        """New threshold; an alarm already raised stays up until the break is taken."""
        self.limit_seconds = max(1, int(limit_seconds))

    def tick(self) -> bool:
        """Count one second; True exactly when this tick raised the alarm."""
        self.elapsed_seconds += 1
        if not self.alarm_active and self.elapsed_seconds >= self.limit_seconds:
            self.alarm_active = True
            return True
        return False

    def complete_break(self) -> int:
        """Reset to idle from any state; returns the seconds sat before the reset."""
        sat = self.elapsed_seconds
        self.elapsed_seconds = 0
        self.alarm_active = False
        return sat

    @property
    def remaining_seconds(self) -> int:
        return max(0, self.limit_seconds - self.elapsed_seconds)

    @property
    def fraction(self) -> float:
        return min(1.0, self.elapsed_seconds / self.limit_seconds)

    def snapshot(self) -> dict:
        return {"elapsedSeconds": self.elapsed_seconds, "alarmActive": self.alarm_active}
