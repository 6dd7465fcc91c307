"""Short read-out of how the work day is going."""
from __future__ import annotations
from typing import Any

from .progress import average_completion


def day_segment(hour: int) -> str:
    if hour < 11:
        return "morning focus"
    if hour < 14:
        return "midday transition"
    if hour < 18:
        return "afternoon focus"
    return "evening recovery"


def workspace_insight(hour: int, elapsed_seconds: int, limit_seconds: int,
                      breaks_today: int, progress: list[dict[str, Any]]) -> dict[str, Any]:
    issues, suggestions = [], []

    if elapsed_seconds > limit_seconds * 0.8:
        issues.append("This sitting stretch is close to the limit; neck and lower back load is building.")
        suggestions.append("Stand for a minute now and do two rounds of ankle pumps.")
    if breaks_today < 2 and hour >= 15:
        issues.append("Few sitting breaks this afternoon; focus tends to drop.")
        suggestions.append("Shorten the part reminder interval to 3-4 minutes.")
    if average_completion(progress) < 0.4:
        issues.append("Part training is well behind plan and unevenly spread.")
        suggestions.append("Finish the next priority part first, then catch up on core and legs.")
    if not issues:
        issues.append("Pace looks steady, keep guarding against long sitting.")
        suggestions.append("Leave the seat at least once every 45-60 minutes.")

    return {"segment": day_segment(hour), "issues": issues, "suggestions": suggestions}
