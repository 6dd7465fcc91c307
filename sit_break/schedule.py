"""
Work-hours gate and the cooperative timer wheel that drives the engine.

Nothing here sleeps. A host (the tk loop, or a test) calls
``Scheduler.advance`` with the amount of time that passed, and due
callbacks run in order on the caller's thread.
"""
from __future__ import annotations
import datetime, itertools, logging
from typing import Any, Callable

log = logging.getLogger(__name__)


# ─── Work Window ──────────────────────────────────────────────
def is_work_window_open(now: datetime.datetime, settings: dict[str, Any]) -> bool:
    """True when part nudges may fire at ``now``."""
    if not settings.get("remindersInWorkOnly", True):
        return True
    h = now.hour
    s = max(0, min(23, int(settings.get("workStartHour", 9))))
    e = max(0, min(23, int(settings.get("workEndHour", 18))))
    if s == e:
        return True             # degenerate: whole day
    if s < e:
        return s <= h < e
    return h >= s or h < e      # wraps midnight


# ─── Scheduler ────────────────────────────────────────────────
class Scheduler:
    """Repeating timers on a virtual millisecond clock."""

    def __init__(self):
        self.elapsed_ms = 0
        self._timers: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def every(self, period_ms: int, callback: Callable[[], None]) -> int:
        if period_ms <= 0:
            raise ValueError("period_ms must be positive")
        timer_id = next(self._ids)
        self._timers[timer_id] = {
            "period": period_ms,
            "due": self.elapsed_ms + period_ms,
            "callback": callback,
        }
        return timer_id

    def cancel(self, timer_id: int) -> None:
        self._timers.pop(timer_id, None)

    def cancel_all(self) -> None:
        self._timers.clear()

    def active(self, timer_id: int) -> bool:
        return timer_id in self._timers

    def __len__(self) -> int:
        return len(self._timers)

    def advance(self, ms: int) -> None:
        """Move virtual time forward, firing every timer that comes due on the way.

        A repeating timer re-arms at its nominal period; late pumping is not
        compensated, each firing counts once.
        """
        target = self.elapsed_ms + max(0, int(ms))
        while True:
            due = [(t["due"], tid) for tid, t in self._timers.items() if t["due"] <= target]
            if not due:
                break
            when, timer_id = min(due)
            timer = self._timers[timer_id]
            self.elapsed_ms = when
            timer["due"] = when + timer["period"]
            timer["callback"]()
        self.elapsed_ms = target
