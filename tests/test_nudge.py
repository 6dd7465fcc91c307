import datetime

import pytest

from sit_break.config import default_settings
from sit_break.nudge import (
    NudgeState, evaluate, mute_today, record_completion, score_candidate, snooze, urgency_for_hour,
)

AT_10 = datetime.datetime(2026, 10, 19, 10, 0, 0)


def candidate(remaining, ratio, part="neck"):
    return {"part": part, "remaining": remaining, "ratio": ratio}


@pytest.fixture
def settings():
    return default_settings()


def test_score_example_with_evening_urgency():
    # base 3*14 + 1*50 = 92, urgency 20
    assert score_candidate(candidate(3, 0), hour=18, profile="balanced") == 112


def test_evening_example_is_confirm_even_at_max_threshold(settings):
    settings["partNudgeSoftThreshold"] = 92
    settings["partNudgeConfirmThreshold"] = 100
    nudge = evaluate(candidate(3, 0), AT_10.replace(hour=18), NudgeState(), settings)
    assert nudge["level"] == "confirm"
    assert nudge["score"] == 112


def test_mid_score_is_soft(settings):
    state = NudgeState()
    state.ignore_count, state.complete_count = 2, 1
    # 4*14 + 0.5*50 = 81, -24 fatigue, +3 streak
    nudge = evaluate(candidate(4, 0.5), AT_10, state, settings)
    assert nudge["score"] == 60
    assert nudge["level"] == "soft"
    assert nudge["part"] == "neck"
    assert nudge["firedAt"] == AT_10
    assert "4" in nudge["reason"]


@pytest.mark.parametrize("profile, expected", [("balanced", 92), ("gentle", 81), ("active", 110)])
def test_profile_factor(profile, expected):
    assert score_candidate(candidate(3, 0), hour=9, profile=profile) == expected


@pytest.mark.parametrize("hour, urgency", [(0, 0), (11, 0), (12, 8), (14, 8), (15, 14), (16, 14), (17, 20), (23, 20)])
def test_urgency_by_hour(hour, urgency):
    assert urgency_for_hour(hour) == urgency


def test_fatigue_and_streak_are_capped():
    c = candidate(3, 0)
    assert score_candidate(c, 9, "balanced", ignore_count=10) == 92 - 30
    assert score_candidate(c, 9, "balanced", complete_count=10) == 92 + 9


def test_score_never_negative():
    assert score_candidate(candidate(0, 1), 9, "gentle", ignore_count=5) == 0


def test_score_is_monotonic_in_remaining_and_ratio():
    for hour in (9, 13, 18):
        scores = [score_candidate(candidate(r, 0.3), hour, "gentle") for r in range(0, 31)]
        assert scores == sorted(scores)
        ratios = [1.0, 0.8, 0.5, 0.25, 0.1, 0.0]
        scores = [score_candidate(candidate(2, q), hour, "active", 1, 1) for q in ratios]
        assert scores == sorted(scores)


def test_below_soft_threshold_gives_nothing(settings):
    # 1*14 + 0.5*50 = 39
    assert evaluate(candidate(1, 0.5), AT_10, NudgeState(), settings) is None


def test_no_candidate(settings):
    assert evaluate(None, AT_10, NudgeState(), settings) is None


def test_snooze_lasts_exactly_ten_minutes(settings):
    state = NudgeState()
    snooze(state, AT_10)
    assert state.ignore_count == 1
    strong = candidate(3, 0)
    expiry = AT_10 + datetime.timedelta(minutes=10)
    assert evaluate(strong, expiry - datetime.timedelta(seconds=1), state, settings) is None
    assert evaluate(strong, expiry + datetime.timedelta(seconds=1), state, settings) is not None


def test_mute_lifts_at_midnight(settings):
    state = NudgeState()
    mute_today(state, AT_10.date())
    assert state.ignore_count == 2
    strong = candidate(5, 0)
    assert evaluate(strong, AT_10.replace(hour=23, minute=59, second=59), state, settings) is None
    assert evaluate(strong, datetime.datetime(2026, 10, 20, 0, 0, 0), state, settings) is not None


def test_evaluate_leaves_counters_alone(settings):
    state = NudgeState()
    state.ignore_count, state.complete_count = 1, 2
    evaluate(candidate(5, 0), AT_10, state, settings)
    evaluate(candidate(0, 1), AT_10, state, settings)
    assert (state.ignore_count, state.complete_count) == (1, 2)
    assert state.current is None


def test_completion_offsets_ignores():
    state = NudgeState()
    state.current = {"part": "neck"}
    record_completion(state)
    assert (state.ignore_count, state.complete_count, state.current) == (0, 1, None)
    state.ignore_count = 3
    record_completion(state)
    assert (state.ignore_count, state.complete_count) == (2, 2)


def test_interval_gate():
    state = NudgeState()
    assert state.interval_elapsed(AT_10, 4)
    state.last_fired_at = AT_10
    assert not state.interval_elapsed(AT_10 + datetime.timedelta(minutes=3, seconds=59), 4)
    assert state.interval_elapsed(AT_10 + datetime.timedelta(minutes=4), 4)


def test_reset_clears_everything():
    state = NudgeState()
    snooze(state, AT_10)
    mute_today(state, AT_10.date())
    state.reset()
    assert state.snooze_until is None and state.mute_date is None
    assert state.ignore_count == 0
