"""
Unit tests for routine tracking and completion aggregation.
"""
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from jobtrack.core.exceptions import InvalidRoutineError
from jobtrack.db.models.daily_routine import DailyRoutine
from jobtrack.services.routines import (
    compute_focus_percentage,
    compute_weekly_average,
    get_routines_by_date,
    js_round,
    load_week_routines,
    mark_auto_check,
    percentage_tier,
    routine_checklist,
    toggle_self_check,
)


def routine(key, completed=True):
    return SimpleNamespace(routine_key=key, is_completed=completed)


def test_toggle_creates_completed_row(db, test_user):
    row = toggle_self_check(db, test_user, "2026-03-02", "wake_up")
    assert row.is_completed is True
    assert row.check_type == "self"
    assert row.completed_at is not None


def test_toggle_twice_restores_original_state(db, test_user):
    toggle_self_check(db, test_user, "2026-03-02", "exercise")
    row = toggle_self_check(db, test_user, "2026-03-02", "exercise")
    assert row.is_completed is False
    assert row.completed_at is None
    assert db.query(DailyRoutine).count() == 1


def test_toggle_rejects_auto_routine(db, test_user):
    with pytest.raises(InvalidRoutineError):
        toggle_self_check(db, test_user, "2026-03-02", "news_scrap")


def test_mark_auto_check_is_idempotent(db, test_user):
    first_time = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
    later = datetime(2026, 3, 2, 18, 0, tzinfo=timezone.utc)

    first = mark_auto_check(db, test_user, "2026-03-02", "time_block", now=first_time)
    second = mark_auto_check(db, test_user, "2026-03-02", "time_block", now=later)

    rows = db.query(DailyRoutine).filter(DailyRoutine.routine_key == "time_block").all()
    assert len(rows) == 1
    assert second.id == first.id
    assert rows[0].completed_at.replace(tzinfo=None) == first_time.replace(tzinfo=None)
    assert rows[0].check_type == "auto"
    assert rows[0].is_completed is True


def test_mark_auto_check_rejects_self_routine(db, test_user):
    with pytest.raises(InvalidRoutineError):
        mark_auto_check(db, test_user, "2026-03-02", "wake_up")


def test_routines_are_scoped_to_user_and_date(db, test_user, other_user):
    toggle_self_check(db, test_user, "2026-03-02", "wake_up")
    toggle_self_check(db, other_user, "2026-03-02", "exercise")
    toggle_self_check(db, test_user, "2026-03-03", "exercise")

    rows = get_routines_by_date(db, test_user, "2026-03-02")
    assert [row.routine_key for row in rows] == ["wake_up"]


def test_focus_percentage_three_of_five():
    routines = [routine("wake_up"), routine("time_block"), routine("job_listing"), routine("exercise", False)]
    assert compute_focus_percentage(routines) == 60


def test_focus_percentage_ignores_unknown_rows():
    routines = [routine("wake_up"), routine("time_block"), routine("job_listing"),
                routine("meditation"), routine("reading")]
    assert compute_focus_percentage(routines) == 60


def test_focus_percentage_empty_day():
    assert compute_focus_percentage([]) == 0


def test_js_round_rounds_half_up():
    assert js_round(2.5) == 3
    assert js_round(46.666) == 47
    assert js_round(0.4) == 0


def test_weekly_average_uses_live_today():
    week = {
        "2026-03-02": [routine("wake_up"), routine("exercise")],  # 40
        "2026-03-03": [],  # 0
        "2026-03-04": [],  # replaced by today's live rows
    }
    today = [routine(key) for key in ("wake_up", "exercise", "time_block", "news_scrap", "job_listing")]
    # (40 + 0 + 100) / 3
    assert compute_weekly_average(week, today, "2026-03-04") == 47


def test_weekly_average_ignores_weekend_and_future():
    week = {
        "2026-03-06": [routine("wake_up")],
        "2026-03-07": [routine("wake_up"), routine("exercise")],
    }
    # Saturday: only Friday qualifies
    assert compute_weekly_average(week, [routine("wake_up")], "2026-03-07") == 20


def test_weekly_average_zero_when_no_day_qualifies():
    assert compute_weekly_average({}, [], "2026-03-08") == 0


@pytest.mark.parametrize("percentage,level", [
    (0, "red"), (30, "red"), (31, "yellow"), (70, "yellow"), (71, "green"), (100, "green"),
])
def test_percentage_tier_thresholds(percentage, level):
    assert percentage_tier(percentage).level == level


def test_percentage_tier_comments():
    assert percentage_tier(10).comment == "...뭐하세요?"
    assert percentage_tier(50).comment == "힘내세요"
    assert percentage_tier(90).comment == "고생했어요~"


def test_checklist_follows_catalogue_order():
    checklist = routine_checklist([routine("news_scrap"), routine("wake_up", False)])
    assert [item["key"] for item in checklist["self"]] == ["wake_up", "exercise"]
    assert [item["key"] for item in checklist["auto"]] == ["time_block", "news_scrap", "job_listing"]
    assert checklist["auto"][1]["checked"] is True
    assert checklist["self"][0]["checked"] is False


def test_load_week_routines_covers_weekdays_through_today(db, test_user):
    toggle_self_check(db, test_user, "2026-03-02", "wake_up")
    week = load_week_routines(db, test_user, "2026-03-03")
    assert list(week) == ["2026-03-02", "2026-03-03"]
    assert len(week["2026-03-02"]) == 1
    assert week["2026-03-03"] == []
