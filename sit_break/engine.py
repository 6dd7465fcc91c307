"""
The reminder engine for one signed-in user.

Two repeating timers drive it: a one-second sedentary tick and a slower nudge
poll. Both run on the scheduler's caller thread, as do the user-action
handlers, so no locking is needed. Build one engine per user session and
``close()`` it on logout.

Events (``engine.on(name, callback)``; the callback gets one dict):

    alarm_entered    {"routine": id, "title": ..., "elapsedSeconds": n}
    alert_pulse      {"level": "normal" | "high" | "critical"}
    nudge_available  the nudge dict
    nudge_cleared    {"part": ...}
    exercise_opened  {"part": ..., "exercise": id or None, "title": ...}
"""
from __future__ import annotations
import datetime, functools, logging, random
from typing import Any, Callable, Optional

from . import activity, nudge as nudges
from .config import active_plan, apply_test_mode, limit_seconds, normalize_settings
from .exercises import pick_exercise, pick_recovery_routine
from .insight import workspace_insight
from .progress import compute_part_progress, record_exercise, select_next_priority, today_counts
from .schedule import Scheduler, is_work_window_open
from .sedentary import SedentaryTimer, pulse_interval_ms
from .store import ProfileStore

log = logging.getLogger(__name__)

TICK_MS = 1000
NUDGE_POLL_MS = 15000

EVENTS = ("alarm_entered", "alert_pulse", "nudge_available", "nudge_cleared", "exercise_opened")


class ReminderEngine:

    def __init__(self, store: ProfileStore,
                 clock: Callable[[], datetime.datetime] = datetime.datetime.now,
                 choice: Callable = random.choice,
                 scheduler: Optional[Scheduler] = None,
                 test_mode: bool = False):
        self.clock = clock
        self.choice = choice
        self.scheduler = scheduler or Scheduler()
        self.test_mode = test_mode
        self._listeners: dict[str, list[Callable[[dict], None]]] = {e: [] for e in EVENTS}
        self._timer_ids: list[int] = []
        self._pulse_id: Optional[int] = None
        self._in_callback = False
        self._pending: list[Callable[[], None]] = []
        self._load(store)

    # ━━━ Lifecycle ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    def _load(self, store: ProfileStore) -> None:
        self.store = store
        self.settings = store.load_settings()
        if self.test_mode:
            self.settings = apply_test_mode(self.settings)
        self.history = store.load_history()
        self.progress_record = store.load_progress()
        self.today = self.clock().date()
        self.plan = active_plan(self.settings, self.today)
        self.session = SedentaryTimer(limit_seconds(self.plan))
        self.nudge_state = nudges.NudgeState()
        self.recovery_routine: Optional[dict] = None
        self.open_exercise: Optional[dict] = None

    def start(self) -> None:
        """Arm the sedentary tick and the nudge poll."""
        if self._timer_ids:
            return
        self._timer_ids = [
            self.scheduler.every(TICK_MS, self._guarded(self.tick)),
            self.scheduler.every(NUDGE_POLL_MS, self._guarded(self.poll)),
        ]

    def close(self) -> None:
        """Tear down every timer this engine owns."""
        for timer_id in self._timer_ids:
            self.scheduler.cancel(timer_id)
        self._timer_ids = []
        self._stop_pulses()

    @property
    def running(self) -> bool:
        return bool(self._timer_ids)

    def switch_user(self, store: ProfileStore) -> None:
        """Swap in another user's state; session and nudge state start over."""
        def swap():
            self._stop_pulses()
            self._load(store)
            log.info("Switched to user %s", store.user_id)
        self._between_ticks(swap)

    # ━━━ Events ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    def on(self, event: str, callback: Callable[[dict], None]) -> None:
        if event not in self._listeners:
            raise ValueError(f"Unknown event: {event}")
        self._listeners[event].append(callback)

    def _emit(self, event: str, payload: dict) -> None:
        for callback in list(self._listeners[event]):
            try:
                callback(payload)
            except Exception:
                log.exception("Listener for %s failed", event)

    # ━━━ Tick plumbing ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    def _guarded(self, fn: Callable[[], Any]) -> Callable[[], None]:
        """Timer callback wrapper; swaps requested meanwhile run once it returns."""
        @functools.wraps(fn)
        def run():
            self._in_callback = True
            try:
                fn()
            finally:
                self._in_callback = False
                pending, self._pending = self._pending, []
                for swap in pending:
                    swap()
        return run

    def _between_ticks(self, swap: Callable[[], None]) -> None:
        if self._in_callback:
            self._pending.append(swap)
        else:
            swap()

    def _check_rollover(self, now: datetime.datetime) -> None:
        if now.date() == self.today:
            return
        self.today = now.date()
        self._refresh_plan()
        log.info("Day rolled over to %s", self.today.isoformat())

    def _refresh_plan(self) -> None:
        self.plan = active_plan(self.settings, self.today)
        self.session.set_limit(limit_seconds(self.plan))

    # ━━━ Sedentary ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    def tick(self) -> None:
        """One second of sitting."""
        self._check_rollover(self.clock())
        if self.session.tick():
            self._enter_alarm()

    def _enter_alarm(self) -> None:
        routine = pick_recovery_routine(self.choice)
        self.recovery_routine = routine
        if self.nudge_state.current is not None:
            self._clear_current()
        log.info("Sitting limit reached after %ds", self.session.elapsed_seconds)
        self._emit("alarm_entered", {
            "routine": routine["id"],
            "title": routine["title"],
            "elapsedSeconds": self.session.elapsed_seconds,
        })
        self._pulse()
        interval = pulse_interval_ms(self.settings["alertLevel"])
        if interval:
            self._pulse_id = self.scheduler.every(interval, self._guarded(self._pulse))

    def _pulse(self) -> None:
        self._emit("alert_pulse", {"level": self.settings["alertLevel"]})

    def _stop_pulses(self) -> None:
        if self._pulse_id is not None:
            self.scheduler.cancel(self._pulse_id)
            self._pulse_id = None

    def complete_break(self) -> int:
        """User stood up. Resets the sitting counter and logs the break."""
        self._stop_pulses()
        sat = self.session.complete_break()
        self.recovery_routine = None
        self.history = activity.add_to_day(self.history, self.today,
                                           sitSeconds=sat, sedentaryBreaks=1, standCount=1)
        self.store.save_history(self.history)
        return sat

    # ━━━ Progress ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    @property
    def progress(self) -> list[dict[str, Any]]:
        return compute_part_progress(today_counts(self.progress_record, self.today), self.plan)

    @property
    def next_priority(self) -> Optional[dict[str, Any]]:
        return select_next_priority(self.progress)

    @property
    def today_activity(self) -> dict[str, Any]:
        return activity.get_day(self.history, self.today)

    def clear_today_progress(self) -> None:
        self.history = activity.reset_day(self.history, self.today)
        self.progress_record = {"date": self.today.isoformat(), "counts": {}}
        self.store.save_history(self.history)
        self.store.save_progress(self.progress_record)

    # ━━━ Nudges ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    def poll(self) -> Optional[dict[str, Any]]:
        """Nudge check; returns the nudge produced this round, if any."""
        now = self.clock()
        self._check_rollover(now)
        state = self.nudge_state

        if self.session.alarm_active:
            return None
        if not is_work_window_open(now, self.settings):
            return None
        if not state.interval_elapsed(now, self.settings["partReminderMin"]):
            return None

        result = nudges.evaluate(self.next_priority, now, state, self.settings)
        if result is None:
            return None

        state.last_fired_at = now
        if result["level"] == "confirm":
            if state.current is not None:
                self._clear_current()
            self._open_exercise(result["part"])
        else:
            state.current = result
            self._emit("nudge_available", result)
        return result

    def _clear_current(self) -> None:
        current = self.nudge_state.current
        self.nudge_state.current = None
        if current is not None:
            self._emit("nudge_cleared", {"part": current["part"]})

    def _open_exercise(self, part: str) -> dict[str, Any]:
        exercise = pick_exercise(part, self.choice)
        self.open_exercise = {
            "part": part,
            "exercise": exercise[0] if exercise else None,
            "title": exercise[1] if exercise else None,
        }
        self._emit("exercise_opened", dict(self.open_exercise))
        return self.open_exercise

    def accept_nudge(self) -> Optional[dict[str, Any]]:
        """Do it now: open the exercise flow for the nudged part (or the next priority)."""
        current = self.nudge_state.current
        if current is not None:
            part = current["part"]
        else:
            candidate = self.next_priority
            if candidate is None:
                return None
            part = candidate["part"]
        self._clear_current()
        return self._open_exercise(part)

    def complete_exercise(self, part: Optional[str] = None) -> None:
        """The opened exercise was finished."""
        part = part or (self.open_exercise or {}).get("part")
        if part is None:
            return
        self.progress_record = record_exercise(self.progress_record, part, self.today)
        self.history = activity.add_to_day(self.history, self.today, standCount=1)
        self._clear_current()
        nudges.record_completion(self.nudge_state)
        self.open_exercise = None
        self.store.save_progress(self.progress_record)
        self.store.save_history(self.history)

    def snooze_nudge(self) -> None:
        self._clear_current()
        nudges.snooze(self.nudge_state, self.clock())

    def mute_nudges_today(self) -> None:
        self._clear_current()
        nudges.mute_today(self.nudge_state, self.clock().date())

    # ━━━ Settings ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    def save_settings(self, new_settings: dict[str, Any]) -> dict[str, Any]:
        """Clamp, persist and apply; returns the effective settings.

        Applying restarts the sitting session and the nudge state.
        """
        effective = normalize_settings(new_settings)

        def swap():
            self.settings = self.store.save_settings(effective)
            if self.test_mode:
                self.settings = apply_test_mode(self.settings)
            self._stop_pulses()
            self.plan = active_plan(self.settings, self.today)
            self.session = SedentaryTimer(limit_seconds(self.plan))
            self.nudge_state.reset()
            self.recovery_routine = None
        self._between_ticks(swap)
        return effective

    # ━━━ Read-outs ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    def insight(self) -> dict[str, Any]:
        return workspace_insight(self.clock().hour, self.session.elapsed_seconds,
                                 self.session.limit_seconds,
                                 self.today_activity["sedentaryBreaks"], self.progress)

    def status(self) -> dict[str, Any]:
        nxt = self.next_priority
        return {
            "user": self.store.user_id,
            "elapsedSeconds": self.session.elapsed_seconds,
            "limitSeconds": self.session.limit_seconds,
            "alarmActive": self.session.alarm_active,
            "nextPart": nxt["part"] if nxt else None,
            "nudge": self.nudge_state.current,
            "workWindowOpen": is_work_window_open(self.clock(), self.settings),
        }
