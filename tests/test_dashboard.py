"""
Tests for the dashboard state container.
"""
from datetime import date, datetime
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from jobtrack.core.exceptions import PersistenceError
from jobtrack.schemas.dashboard import DashboardToggleRequest
from jobtrack.services import routines as routine_service
from jobtrack.services.applications import create_application
from jobtrack.services.dashboard import DashboardState, RoutineState, calculate_metrics, date_subtitle
from jobtrack.services.routines import mark_auto_check, toggle_self_check

TODAY = date(2026, 3, 4)


def state_row(key, completed=True, day="2026-03-04"):
    return RoutineState(id=None, date=day, routine_key=key, check_type="self", is_completed=completed)


@pytest.fixture
def seeded(db, test_user):
    toggle_self_check(db, test_user, "2026-03-02", "wake_up")
    toggle_self_check(db, test_user, "2026-03-02", "exercise")
    toggle_self_check(db, test_user, "2026-03-04", "wake_up")
    mark_auto_check(db, test_user, "2026-03-04", "time_block")
    create_application(db, test_user, "카카오", "백엔드", applied_at=datetime(2026, 3, 3, 10, 0))
    return test_user


def test_metrics_are_pure():
    today_routines = [state_row("wake_up"), state_row("exercise"), state_row("news_scrap")]
    week = {"2026-03-02": [], "2026-03-03": [], "2026-03-04": []}
    applications = [SimpleNamespace(applied_at=datetime(2026, 3, 3, 9, 0))]

    first = calculate_metrics(today_routines, week, applications, TODAY, datetime(2026, 3, 4, 12, 0))
    second = calculate_metrics(today_routines, week, applications, TODAY, datetime(2026, 3, 4, 12, 0))

    assert first == second
    assert first.today_focus_percentage == 60
    assert first.today_focus_tier.level == "yellow"
    assert first.weekly_average_percentage == 20
    assert first.weekly_application_stats.count == 1


def test_preload_collects_raw_data(db, seeded):
    state = DashboardState(TODAY).preload(db, seeded)

    assert state.is_ready is True
    assert {r.routine_key for r in state.today_routines} == {"wake_up", "time_block"}
    assert list(state.week_routines) == ["2026-03-02", "2026-03-03", "2026-03-04"]
    assert len(state.applications) == 1

    metrics = state.metrics
    assert metrics.today_focus_percentage == 40
    # (40 + 0 + 40) / 3
    assert metrics.weekly_average_percentage == 27
    assert metrics.weekly_average_tier.level == "red"
    assert metrics.weekly_application_stats.percentage == 50


def test_metrics_follow_raw_updates():
    state = DashboardState(TODAY)
    state.week_routines = {"2026-03-04": []}
    assert state.metrics.today_focus_percentage == 0

    state.update_today_routines([state_row("wake_up"), state_row("exercise")])
    assert state.metrics.today_focus_percentage == 40
    assert state.week_routines["2026-03-04"] == state.today_routines

    state.add_application(SimpleNamespace(applied_at=datetime.combine(TODAY, datetime.min.time())))
    assert state.metrics.weekly_application_stats.count == 1


def test_toggle_self_check_persists_and_reconciles(db, seeded):
    state = DashboardState(TODAY).preload(db, seeded)
    routines = state.toggle_self_check(db, seeded, "exercise")

    exercise = next(r for r in routines if r.routine_key == "exercise")
    assert exercise.is_completed is True
    assert exercise.id is not None
    assert state.metrics.today_focus_percentage == 60

    state.toggle_self_check(db, seeded, "wake_up")
    assert state.metrics.today_focus_percentage == 40


def test_toggle_self_check_rolls_back_on_failure(db, seeded, monkeypatch):
    state = DashboardState(TODAY).preload(db, seeded)
    before = list(state.today_routines)

    def fail(*args, **kwargs):
        raise PersistenceError("Failed to update daily_routine_status: database is locked")

    monkeypatch.setattr(routine_service, "toggle_self_check", fail)

    with pytest.raises(PersistenceError):
        state.toggle_self_check(db, seeded, "exercise")
    assert state.today_routines == before
    assert state.metrics.today_focus_percentage == 40


def test_to_dict_shape(db, seeded):
    data = DashboardState(TODAY).preload(db, seeded).to_dict()
    assert data["date"] == "2026-03-04"
    assert data["today_focus"] == {"percentage": 40, "level": "yellow", "comment": "힘내세요"}
    assert data["weekly_applications"]["subtitle"] == "1개 완료! 1개 더 지원해보세요"
    assert [item["checked"] for item in data["routines"]["self"]] == [True, False]


def test_date_subtitle():
    assert date_subtitle(date(2026, 3, 2)) == "3월 2일 (월) 목표 달성률"


def test_toggle_request_accepts_self_check_keys_only():
    assert DashboardToggleRequest(routine_key="exercise").routine_key == "exercise"
    with pytest.raises(ValidationError):
        DashboardToggleRequest(routine_key="time_block")
