"""
Tests for the job listing service: CRUD, status changes, move-to-applications
and table filters.
"""
from datetime import datetime
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

from jobtrack.core.exceptions import PersistenceError, RecordNotFoundError
from jobtrack.db.models.application import Application
from jobtrack.db.models.daily_routine import DailyRoutine
from jobtrack.services.job_listings import (
    change_job_listing_status,
    create_job_listing,
    filter_job_listings,
    get_all_job_listings,
    get_job_listing,
    get_job_listings_by_month,
    get_upcoming_job_listings,
    listing_positions,
    move_to_applications,
    update_job_listing,
    visible_listings,
)


def listing(company, position="Backend", company_size="대기업"):
    return SimpleNamespace(company=company, position=position, company_size=company_size)


def test_create_listing_starts_not_applied_and_checks_routine(db, test_user):
    created = create_job_listing(
        db, test_user, "네이버", "백엔드", company_size="대기업",
        deadline="2026-03-15", today="2026-03-02",
    )
    assert created.status == "Not applied"
    assert created.deadline == "2026-03-15"

    routine = db.query(DailyRoutine).filter(DailyRoutine.routine_key == "job_listing").one()
    assert routine.date == "2026-03-02"
    assert routine.check_type == "auto"
    assert routine.is_completed is True


def test_second_listing_same_day_keeps_single_routine_row(db, test_user):
    create_job_listing(db, test_user, "A", "x", today="2026-03-02")
    create_job_listing(db, test_user, "B", "x", today="2026-03-02")
    assert db.query(DailyRoutine).count() == 1


def test_update_listing_blank_size_becomes_null(db, test_user):
    created = create_job_listing(db, test_user, "A", "x", company_size="스타트업", today="2026-03-02")
    updated = update_job_listing(db, test_user, created.id, {"company_size": ""})
    assert updated.company_size is None


def test_move_to_applications_with_deadline(db, test_user):
    created = create_job_listing(
        db, test_user, "카카오", "프론트엔드", deadline="2026-03-01",
        job_post_url="https://example.com/1", today="2026-02-20",
    )
    application = move_to_applications(db, test_user, created.id, now=datetime(2026, 2, 21, 9, 0))

    assert application.status == "active"
    assert application.progress == 10
    assert application.stage == "서류 접수"
    assert application.deadline == "2026-03-01"
    assert application.url == "https://example.com/1"
    with pytest.raises(RecordNotFoundError):
        get_job_listing(db, test_user, created.id)


def test_move_to_applications_without_deadline_is_reviewing(db, test_user):
    created = create_job_listing(db, test_user, "토스", "서버", today="2026-03-02")
    application = move_to_applications(db, test_user, created.id)
    assert application.status == "reviewing"
    assert application.url is None
    assert get_all_job_listings(db, test_user) == []
    assert db.query(Application).count() == 1


def test_failed_move_keeps_listing_and_writes_no_application(db, test_user, monkeypatch):
    created = create_job_listing(db, test_user, "배민", "백엔드", deadline="2026-03-10", today="2026-03-02")

    def fail_delete(record):
        raise OperationalError("DELETE FROM job_listings", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "delete", fail_delete)

    with pytest.raises(PersistenceError):
        move_to_applications(db, test_user, created.id)

    assert db.query(Application).count() == 0
    assert [l.company for l in get_all_job_listings(db, test_user)] == ["배민"]


def test_status_change_to_applied_requires_confirmation(db, test_user):
    created = create_job_listing(db, test_user, "라인", "QA", today="2026-03-02")
    change = change_job_listing_status(db, test_user, created.id, "Applied")
    assert change.requires_confirmation is True
    assert get_job_listing(db, test_user, created.id).status == "Not applied"


def test_status_change_back_to_not_applied_is_direct(db, test_user):
    created = create_job_listing(db, test_user, "라인", "QA", today="2026-03-02")
    update_job_listing(db, test_user, created.id, {"status": "Applied"})
    change = change_job_listing_status(db, test_user, created.id, "Not applied")
    assert change.requires_confirmation is False
    assert change.listing.status == "Not applied"


def test_upcoming_and_monthly_listings(db, test_user):
    create_job_listing(db, test_user, "soon", "x", deadline="2026-03-05", today="2026-03-02")
    create_job_listing(db, test_user, "later", "x", deadline="2026-04-02", today="2026-03-02")
    create_job_listing(db, test_user, "none", "x", today="2026-03-02")

    upcoming = get_upcoming_job_listings(db, test_user, days=7, today="2026-03-02")
    assert [l.company for l in upcoming] == ["soon"]

    april = get_job_listings_by_month(db, test_user, 2026, 4)
    assert [l.company for l in april] == ["later"]


def test_filter_job_listings():
    listings = [
        listing("Samsung", "Backend", "대기업"),
        listing("samsung SDS", "Frontend", "대기업"),
        listing("Startup Co", "Backend", "스타트업"),
    ]
    assert [l.company for l in filter_job_listings(listings, search=" SAMSUNG ")] == ["Samsung", "samsung SDS"]
    assert [l.company for l in filter_job_listings(listings, position="Backend")] == ["Samsung", "Startup Co"]
    assert [l.company for l in filter_job_listings(listings, scale="스타트업")] == ["Startup Co"]
    assert len(filter_job_listings(listings, position="all", scale="all")) == 3


def test_listing_positions_unique_non_empty():
    listings = [listing("A", "Backend"), listing("B", ""), listing("C", "Frontend"), listing("D", "Backend")]
    assert listing_positions(listings) == ["Backend", "Frontend"]


def test_collapsed_table_shows_fifteen_rows():
    listings = [listing(f"C{i}") for i in range(20)]
    assert len(visible_listings(listings)) == 15
    assert len(visible_listings(listings, expanded=True)) == 20
