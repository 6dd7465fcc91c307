"""
Sit Break: stand-up alarm and body-part exercise nudges in the system tray.

Usage:
    python -m sit_break
    python -m sit_break --test          (1-minute limits for testing)
    python -m sit_break --user alice    (separate settings and history)
"""
from __future__ import annotations
import argparse, getpass, logging, sys

from .config import active_plan
from .engine import ReminderEngine
from .store import ProfileStore


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sit-break", description="Sit Break sitting reminder")
    p.add_argument("--test", action="store_true", help="Use short intervals for testing")
    p.add_argument("--user", default=None, help="Profile to load (default: login name)")
    p.add_argument("--data-dir", default=None, help="Where profiles are stored")
    p.add_argument("--no-tray", action="store_true", help="Run without the system tray icon")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def print_schedule(engine: ReminderEngine) -> None:
    s = engine.settings
    plan = active_plan(s, engine.today)
    print(f"\n  Sit Break: {engine.store.user_id}")
    print(f"  Sitting limit today: {plan['limitMin']} min   alert: {s['alertLevel']}")
    if s["remindersInWorkOnly"]:
        print(f"  Part reminders: every {s['partReminderMin']} min, "
              f"{s['workStartHour']:02d}:00-{s['workEndHour']:02d}:00")
    else:
        print(f"  Part reminders: every {s['partReminderMin']} min, all day")
    targets = ", ".join(f"{k} {v}" for k, v in plan["targets"].items())
    print(f"  Targets: {targets}\n")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s - %(levelname)s - %(message)s")

    try:
        import tkinter as tk
    except ImportError:
        print("Error: tkinter is required.")
        print("  sudo apt install python3-tk  (or use the python.org installer)")
        return 1

    from .host import TkHost

    store = ProfileStore(args.user or getpass.getuser(), args.data_dir)
    engine = ReminderEngine(store, test_mode=args.test)
    if args.test:
        print("\n  [!] TEST MODE: 1-minute sitting limit and part reminder interval")
    print_schedule(engine)

    root = tk.Tk()
    root.withdraw()
    host = TkHost(engine, root, tray=not args.no_tray)
    host.start()
    try:
        root.mainloop()
    except KeyboardInterrupt:
        pass
    finally:
        host.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
