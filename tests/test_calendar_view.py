"""
Tests for the job listing and dashboard month calendars.
"""
from types import SimpleNamespace

from jobtrack.services.calendar_view import (
    application_events_on,
    build_dashboard_calendar,
    build_job_calendar,
    d_day_markers,
    group_listings_by_deadline,
    short_company,
)


def listing(company, deadline):
    return SimpleNamespace(company=company, deadline=deadline)


def application(company, deadline, status="active"):
    return SimpleNamespace(company=company, deadline=deadline, status=status)


def cell_for(cells, date_str):
    return next(cell for cell in cells if cell.date_str == date_str)


def test_group_listings_by_deadline_skips_missing():
    grouped = group_listings_by_deadline([
        listing("A", "2026-03-05"),
        listing("B", None),
        listing("C", "2026-03-05"),
    ])
    assert grouped == {"2026-03-05": ["A", "C"]}


def test_job_calendar_preview_and_more_count():
    listings = [listing(name, "2026-03-05") for name in ("A", "B", "C", "D")]
    cells = build_job_calendar(listings, 2026, 3, today="2026-03-02")
    cell = cell_for(cells, "2026-03-05")
    assert cell.preview == ["A", "B"]
    assert cell.more_count == 2
    assert cell.companies == ["A", "B", "C", "D"]
    assert cell_for(cells, "2026-03-02").is_today is True


def test_short_company():
    assert short_company("삼성전자") == "삼성전.."
    assert short_company("LG") == "LG"


def test_d_day_markers_window_and_closed_statuses():
    applications = [
        application("오늘마감회사", "2026-03-02"),
        application("Soon", "2026-03-12"),
        application("Far", "2026-04-15"),
        application("Past", "2026-03-01"),
        application("Done", "2026-03-05", status="accepted"),
        application("Nope", "2026-03-06", status="rejected"),
    ]
    markers = d_day_markers(applications, today="2026-03-02")
    assert set(markers) == {"2026-03-02", "2026-03-12"}
    assert markers["2026-03-02"].label == "D-Day"
    assert markers["2026-03-02"].company == "오늘마.."
    assert markers["2026-03-12"].label == "D-10"


def test_application_events_use_stage_or_deadline_label():
    applications = [
        application("A", "2026-03-05", status="1차면접"),
        application("B", "2026-03-05", status="active"),
        application("C", "2026-03-05", status="rejected"),
    ]
    events = application_events_on(applications, "2026-03-05")
    assert [(e.company, e.stage) for e in events] == [("A", "1차면접"), ("B", "마감")]


def test_dashboard_calendar_attaches_schedules():
    schedules = [SimpleNamespace(title="스터디", date="2026-03-10")]
    cells = build_dashboard_calendar(
        [application("A", "2026-03-10")], schedules, 2026, 3, today="2026-03-02"
    )
    cell = cell_for(cells, "2026-03-10")
    assert [s.title for s in cell.schedules] == ["스터디"]
    assert cell.d_day.label == "D-8"
    assert [e.company for e in cell.application_events] == ["A"]

    blanks = [c for c in cells if not c.is_current_month]
    assert all(c.d_day is None and c.schedules == [] for c in blanks)
