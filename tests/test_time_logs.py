"""
Tests for time blocks, weekly goals, schedules and news scraps.
"""
from datetime import date
from types import SimpleNamespace

import pytest

from jobtrack.db.models.daily_routine import DailyRoutine
from jobtrack.db.models.weekly_goal import WeeklyGoal
from jobtrack.services.news_scraps import create_news_scrap, get_all_news_scraps, update_news_scrap
from jobtrack.services.schedules import create_schedule, get_schedules_by_month
from jobtrack.services.time_logs import (
    blocks_starting_at,
    category_label,
    create_time_log,
    get_time_logs_for_week_of,
    get_weekly_goals_by_month,
    hour_label,
    is_hour_occupied,
    update_time_log,
    upsert_weekly_goal,
    validate_hours,
)


# ============================================
# Time logs
# ============================================

def test_time_log_for_today_checks_time_block(db, test_user):
    create_time_log(db, test_user, "resume", "자소서 작성", "2026-03-02", 9, 11, today="2026-03-02")
    routine = db.query(DailyRoutine).one()
    assert (routine.date, routine.routine_key) == ("2026-03-02", "time_block")


def test_time_log_for_other_day_does_not_check_routine(db, test_user):
    create_time_log(db, test_user, "meal", "", "2026-03-03", 12, 13, today="2026-03-02")
    assert db.query(DailyRoutine).count() == 0


@pytest.mark.parametrize("start,end", [(10, 10), (12, 9), (-1, 3), (5, 24)])
def test_invalid_hours_rejected(start, end):
    with pytest.raises(ValueError):
        validate_hours(start, end)


def test_update_validates_against_stored_hours(db, test_user):
    log = create_time_log(db, test_user, "sleep", "", "2026-03-03", 0, 7, today="2026-03-02")
    with pytest.raises(ValueError):
        update_time_log(db, test_user, log.id, {"start_hour": 8})
    assert update_time_log(db, test_user, log.id, {"end_hour": 8}).end_hour == 8


def test_week_query_ordered_and_bounded(db, test_user):
    create_time_log(db, test_user, "exercise", "", "2026-03-04", 18, 19, today="2026-03-01")
    create_time_log(db, test_user, "routine", "", "2026-03-02", 7, 8, today="2026-03-01")
    create_time_log(db, test_user, "personal_study", "", "2026-03-09", 9, 10, today="2026-03-01")

    logs = get_time_logs_for_week_of(db, test_user, "2026-03-05")
    assert [(log.date, log.start_hour) for log in logs] == [("2026-03-02", 7), ("2026-03-04", 18)]


def test_overlapping_blocks_stack_by_start_hour():
    logs = [
        SimpleNamespace(date="2026-03-02", start_hour=9, end_hour=12),
        SimpleNamespace(date="2026-03-02", start_hour=9, end_hour=10),
        SimpleNamespace(date="2026-03-02", start_hour=10, end_hour=11),
    ]
    assert len(blocks_starting_at(logs, "2026-03-02", 9)) == 2
    assert is_hour_occupied(logs, "2026-03-02", 11) is True
    assert is_hour_occupied(logs, "2026-03-02", 12) is False
    assert is_hour_occupied(logs, date(2026, 3, 3), 10) is False


def test_labels():
    assert category_label("certificate") == "자격증"
    assert category_label("unknown") == "unknown"
    assert hour_label(0) == "오전 12시"
    assert hour_label(12) == "오후 12시"
    assert hour_label(13) == "오후 1시"


# ============================================
# Weekly goals
# ============================================

def test_upsert_weekly_goal_keeps_one_row(db, test_user):
    upsert_weekly_goal(db, test_user, "2026-03", 1, "지원 5곳")
    upsert_weekly_goal(db, test_user, "2026-03", 1, "지원 10곳")
    upsert_weekly_goal(db, test_user, "2026-03", 2, "면접 준비")

    goals = get_weekly_goals_by_month(db, test_user, "2026-03")
    assert [(g.week, g.goal) for g in goals] == [(1, "지원 10곳"), (2, "면접 준비")]
    assert db.query(WeeklyGoal).filter(WeeklyGoal.week == 1).count() == 1


def test_weekly_goal_week_range(db, test_user):
    with pytest.raises(ValueError):
        upsert_weekly_goal(db, test_user, "2026-03", 5, "x")


# ============================================
# Schedules and news scraps
# ============================================

def test_schedule_title_trimmed_and_required(db, test_user):
    schedule = create_schedule(db, test_user, "  토익 시험  ", "2026-03-14")
    assert schedule.title == "토익 시험"
    with pytest.raises(ValueError):
        create_schedule(db, test_user, "   ", "2026-03-14")


def test_schedules_by_month(db, test_user):
    create_schedule(db, test_user, "A", "2026-02-28")
    create_schedule(db, test_user, "B", "2026-03-01")
    create_schedule(db, test_user, "C", "2026-03-31")
    assert [s.title for s in get_schedules_by_month(db, test_user, 2026, 3)] == ["B", "C"]


def test_news_scrap_checks_routine_and_updates(db, test_user):
    scrap = create_news_scrap(
        db, test_user,
        {"article_url": "https://news.example.com/1", "headline": "금리 동결", "content": "<p>메모</p>"},
        today="2026-03-02",
    )
    routine = db.query(DailyRoutine).one()
    assert routine.routine_key == "news_scrap"

    updated = update_news_scrap(db, test_user, scrap.id, {"industry": "금융", "unknown": "ignored"})
    assert updated.industry == "금융"
    assert [s.headline for s in get_all_news_scraps(db, test_user)] == ["금리 동결"]
