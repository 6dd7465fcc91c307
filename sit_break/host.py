"""
Desktop host: pumps the engine's scheduler from the tk event loop and
mirrors its state in a system-tray icon.

All engine calls happen on the tk thread. The tray runs on its own thread,
so its menu handlers only post work back with ``root.after(0, ...)``.
"""
from __future__ import annotations
import logging, threading
from typing import Any, Optional

from .engine import ReminderEngine
from .icon import create_status_icon

log = logging.getLogger(__name__)

PUMP_MS = 500   # fine enough for the 4.5s critical pulse


def _load_pystray():
    try:
        import pystray
    except Exception as e:   # missing, or no usable backend on this desktop
        log.warning("System tray unavailable: %s", e)
        return None
    return pystray


class TkHost:

    def __init__(self, engine: ReminderEngine, root: Any, tray: bool = True):
        self.engine = engine
        self.root = root
        self.tray = None
        self._after_id: Optional[str] = None
        self._last_icon_key = None
        engine.on("alarm_entered", self._on_alarm)
        engine.on("alert_pulse", self._on_pulse)
        engine.on("nudge_available", self._on_nudge)
        engine.on("exercise_opened", self._on_exercise)
        if tray:
            self._pystray = _load_pystray()
            if self._pystray is not None:
                threading.Thread(target=self._run_tray, daemon=True).start()

    # ━━━ Loop ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    def start(self) -> None:
        self.engine.start()
        self._update_tray_icon()
        self._after_id = self.root.after(PUMP_MS, self._pump)

    def _pump(self) -> None:
        try:
            self.engine.scheduler.advance(PUMP_MS)
            self._update_tray_icon()
        except Exception:
            log.exception("Tick failed; still running")
        self._after_id = self.root.after(PUMP_MS, self._pump)

    def stop(self) -> None:
        if self._after_id is not None:
            try:
                self.root.after_cancel(self._after_id)
            except Exception as e:   # tk.TclError once the root is gone
                log.debug("after_cancel failed: %s", e)
            self._after_id = None
        self.engine.close()
        self._update_tray_icon()
        if self.tray is not None:
            self.tray.stop()

    # ━━━ Event handlers ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    def _notify(self, message: str, title: str = "Sit Break") -> None:
        log.info("%s: %s", title, message)
        if self.tray is not None:
            try:
                self.tray.notify(message, title)
            except Exception as e:   # backend without notifications
                log.debug("Tray notify failed: %s", e)

    def _on_alarm(self, event: dict) -> None:
        self._notify(f"Time to stand up. Try: {event['title']}", "Sitting limit reached")

    def _on_pulse(self, event: dict) -> None:
        try:
            self.root.bell()
        except Exception as e:
            log.debug("bell failed: %s", e)

    def _on_nudge(self, event: dict) -> None:
        self._notify(event["reason"], f"{event['part']} reminder")

    def _on_exercise(self, event: dict) -> None:
        self._notify(event["title"] or "Any exercise", f"{event['part']} exercise")

    # ━━━ System Tray ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    def _icon_key(self) -> tuple:
        s = self.engine.session
        return (int(s.fraction * 24), s.alarm_active, not self.engine.running)

    def _update_tray_icon(self) -> None:
        key = self._icon_key()
        if self.tray is None or key == self._last_icon_key:
            return
        self._last_icon_key = key
        s = self.engine.session
        try:
            self.tray.icon = create_status_icon(s.fraction, alarm=s.alarm_active,
                                                paused=not self.engine.running)
            self.tray.title = self._title()
        except Exception as e:
            log.debug("Tray update failed: %s", e)

    def _title(self) -> str:
        s = self.engine.session
        if not self.engine.running:
            return "Sit Break: paused"
        mm, ss = divmod(s.elapsed_seconds, 60)
        return f"Sit Break: {'STAND UP' if s.alarm_active else 'sitting'} {mm:02d}:{ss:02d}"

    def _later(self, fn):
        return lambda icon, item: self.root.after(0, fn)

    def _run_tray(self) -> None:
        pystray = self._pystray
        s = self.engine.session
        menu = pystray.Menu(
            pystray.MenuItem("I stood up", self._later(self.engine.complete_break), default=True),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Do a part exercise now", self._later(self.engine.accept_nudge)),
            pystray.MenuItem("Exercise done", self._later(self.engine.complete_exercise)),
            pystray.MenuItem("Snooze part reminders (10 min)", self._later(self.engine.snooze_nudge)),
            pystray.MenuItem("Mute part reminders today", self._later(self.engine.mute_nudges_today)),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Quit", self._later(self.quit)),
        )
        self.tray = pystray.Icon("sit_break", create_status_icon(s.fraction, paused=not self.engine.running),
                                 self._title(), menu)
        self.tray.run()

    def quit(self) -> None:
        self.stop()
        self.root.quit()
