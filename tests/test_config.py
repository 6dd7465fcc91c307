import datetime

import pytest

from sit_break.config import (
    BODY_PARTS, DEFAULT_SETTINGS, WEEKDAY_KEYS, active_plan, apply_plan_to_all_days,
    apply_test_mode, default_settings, limit_seconds, normalize_settings, weekday_key,
)


def test_defaults_survive_normalization():
    assert normalize_settings(None) == default_settings()
    assert normalize_settings({}) == DEFAULT_SETTINGS
    assert normalize_settings("garbage") == DEFAULT_SETTINGS


def test_default_settings_is_a_copy():
    s = default_settings()
    s["targets"]["neck"] = 30
    s["dailyPlans"]["mon"]["limitMin"] = 99
    assert DEFAULT_SETTINGS["targets"]["neck"] == 5
    assert DEFAULT_SETTINGS["dailyPlans"]["mon"]["limitMin"] == 45


@pytest.mark.parametrize("raw, expected", [
    (5, 10), (500, 180), (30.6, 31), ("60", 60), ("abc", 45), (None, 45), (True, 45),
    (10 ** 400, 45), (float("inf"), 45), (float("nan"), 45), ("1e999", 45),
])
def test_limit_is_clamped(raw, expected):
    assert normalize_settings({"limitMin": raw})["limitMin"] == expected


def test_targets_are_clamped_per_part():
    s = normalize_settings({"targets": {"neck": 0, "core": 99, "leg": "x"}})
    assert s["targets"]["neck"] == 1
    assert s["targets"]["core"] == 30
    assert s["targets"]["leg"] == 3
    assert set(s["targets"]) == set(BODY_PARTS)


def test_daily_plans_fall_back_to_global_plan():
    s = normalize_settings({
        "limitMin": 60,
        "targets": {"neck": 8},
        "dailyPlans": {"tue": {"limitMin": 20, "targets": {"neck": 2}}, "wed": "broken"},
    })
    assert set(s["dailyPlans"]) == set(WEEKDAY_KEYS)
    assert s["dailyPlans"]["tue"]["limitMin"] == 20
    assert s["dailyPlans"]["tue"]["targets"]["neck"] == 2
    assert s["dailyPlans"]["wed"]["limitMin"] == 60
    assert s["dailyPlans"]["wed"]["targets"]["neck"] == 8
    assert s["dailyPlans"]["mon"]["targets"]["shoulder"] == 3


@pytest.mark.parametrize("soft, confirm", [
    (20, 0), (52, 50), (52, 78), (90, 90), (95, 100), (10, 500), ("x", "y"), (70, None),
])
def test_confirm_always_clears_soft_by_the_gap(soft, confirm):
    s = normalize_settings({"partNudgeSoftThreshold": soft, "partNudgeConfirmThreshold": confirm})
    assert 20 <= s["partNudgeSoftThreshold"] <= 95
    assert s["partNudgeConfirmThreshold"] >= s["partNudgeSoftThreshold"] + 8


def test_confirm_is_raised_to_minimum():
    s = normalize_settings({"partNudgeSoftThreshold": 80, "partNudgeConfirmThreshold": 82})
    assert s["partNudgeConfirmThreshold"] == 88


def test_enums_and_flags_fall_back():
    s = normalize_settings({
        "alertLevel": "deafening",
        "partNudgeProfile": "lazy",
        "remindersInWorkOnly": "no",
        "useDailyPlan": False,
    })
    assert s["alertLevel"] == "high"
    assert s["partNudgeProfile"] == "balanced"
    assert s["remindersInWorkOnly"] is True
    assert s["useDailyPlan"] is False


def test_hours_and_interval_are_clamped():
    s = normalize_settings({"workStartHour": -3, "workEndHour": 30, "partReminderMin": 0})
    assert (s["workStartHour"], s["workEndHour"], s["partReminderMin"]) == (0, 23, 1)


def test_unknown_keys_are_dropped():
    assert "theme" not in normalize_settings({"theme": "nord"})


def test_weekday_key():
    assert weekday_key(datetime.date(2026, 10, 19)) == "mon"
    assert weekday_key(datetime.date(2026, 10, 18)) == "sun"
    assert weekday_key(datetime.date(2026, 10, 24)) == "sat"


def test_active_plan_uses_weekday_or_global():
    s = normalize_settings({"limitMin": 30, "dailyPlans": {"mon": {"limitMin": 90}}})
    monday = datetime.date(2026, 10, 19)
    assert active_plan(s, monday)["limitMin"] == 90
    assert active_plan(s, monday + datetime.timedelta(days=1))["limitMin"] == 30
    s["useDailyPlan"] = False
    assert active_plan(s, monday)["limitMin"] == 30


def test_limit_seconds():
    assert limit_seconds({"limitMin": 45}) == 2700
    assert limit_seconds({"limitMin": 0}) == 60


def test_apply_plan_to_all_days():
    s = normalize_settings({"dailyPlans": {"fri": {"limitMin": 25, "targets": {"leg": 9}}}})
    out = apply_plan_to_all_days(s, "fri")
    assert out["limitMin"] == 25
    assert all(p["limitMin"] == 25 and p["targets"]["leg"] == 9 for p in out["dailyPlans"].values())
    assert s["dailyPlans"]["mon"]["limitMin"] == 45


def test_test_mode_shortens_every_plan():
    s = apply_test_mode(default_settings())
    assert s["limitMin"] == 1 and s["partReminderMin"] == 1
    assert all(p["limitMin"] == 1 for p in s["dailyPlans"].values())


def test_out_of_range_numbers_fall_back_everywhere():
    s = normalize_settings({"partReminderMin": 10 ** 400, "workStartHour": float("-inf"),
                            "targets": {"neck": float("nan"), "core": -10 ** 400}})
    assert s["partReminderMin"] == DEFAULT_SETTINGS["partReminderMin"]
    assert s["workStartHour"] == DEFAULT_SETTINGS["workStartHour"]
    assert s["targets"]["neck"] == DEFAULT_SETTINGS["targets"]["neck"]
    assert s["targets"]["core"] == DEFAULT_SETTINGS["targets"]["core"]
