"""
Job listing service.

Listings are companies the user is considering. Moving a listing to the
applications board converts it into an Application and removes the listing.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from jobtrack.db.data_access import UserScopedTable
from jobtrack.db.models.application import Application
from jobtrack.db.models.job_listing import JobListing
from jobtrack.services import applications as application_service
from jobtrack.services.dates import DateLike, format_date, get_week_start, month_bounds, parse_date
from jobtrack.services.routines import mark_auto_check

logger = logging.getLogger(__name__)

COMPANY_SIZES = ("대기업", "중견기업", "중소기업", "스타트업")
LISTING_STATUSES = ("Not applied", "Applied")

INDUSTRY_OPTIONS = [
    "IT",
    "미디어,광고",
    "문화,예술,디자인",
    "판매,유통(백화점,무역,물류 등)",
    "제조,생산,화학(반도체,자동차,디스플레이 등)",
    "금융,은행",
    "서비스(호텔,외식,여행,식품 등)",
    "공공기관 / 공기업",
    "교육",
    "의료,제약(보건,바이오,사회복지 등)",
    "건설",
    "기타",
]

COLLAPSED_ROWS = 15


def _table(db: Session, user) -> UserScopedTable:
    return UserScopedTable(db, JobListing, user)


def _normalize_deadline(deadline: Optional[DateLike]) -> Optional[str]:
    if deadline is None or deadline == "":
        return None
    return format_date(parse_date(deadline))


def get_all_job_listings(db: Session, user) -> List[JobListing]:
    """All listings, newest first."""
    return _table(db, user).select_all(order_by=[JobListing.created_at.desc(), JobListing.id.desc()])


def get_job_listings_by_status(db: Session, user, status: str) -> List[JobListing]:
    return _table(db, user).select_all(
        filters={"status": status},
        order_by=[JobListing.created_at.desc(), JobListing.id.desc()],
    )


def get_job_listing(db: Session, user, listing_id: int) -> JobListing:
    return _table(db, user).get_or_raise(listing_id)


def get_upcoming_job_listings(
    db: Session, user, days: int = 7, today: Optional[DateLike] = None
) -> List[JobListing]:
    """Listings with a deadline between today and `days` days from now."""
    today_day = parse_date(today) if today is not None else date.today()
    start = format_date(today_day)
    end = format_date(today_day + timedelta(days=days))
    return _table(db, user).select_all(
        where=[
            JobListing.deadline.isnot(None),
            JobListing.deadline >= start,
            JobListing.deadline <= end,
        ],
        order_by=[JobListing.deadline.asc()],
    )


def get_job_listings_by_month(db: Session, user, year: int, month: int) -> List[JobListing]:
    first_day, last_day = month_bounds(year, month)
    return _table(db, user).select_all(
        where=[
            JobListing.deadline.isnot(None),
            JobListing.deadline >= first_day,
            JobListing.deadline <= last_day,
        ],
        order_by=[JobListing.deadline.asc()],
    )


def get_this_week_job_listings_count(db: Session, user, now: Optional[datetime] = None) -> int:
    """Listings created since Monday 00:00 of the current week."""
    week_start = get_week_start(now or datetime.now())
    return _table(db, user).count(where=[JobListing.created_at >= week_start])


def create_job_listing(
    db: Session,
    user,
    company: str,
    position: str,
    location: str = "",
    industry: str = "",
    company_size: Optional[str] = None,
    deadline: Optional[DateLike] = None,
    job_post_url: str = "",
    today: Optional[DateLike] = None,
) -> JobListing:
    """Create a listing and auto-check today's job_listing routine."""
    listing = _table(db, user).insert({
        "company": company,
        "position": position,
        "location": location or "",
        "industry": industry or "",
        "company_size": company_size or None,
        "deadline": _normalize_deadline(deadline),
        "job_post_url": job_post_url or "",
        "status": "Not applied",
    })
    mark_auto_check(db, user, today or date.today(), "job_listing")
    return listing


def update_job_listing(db: Session, user, listing_id: int, changes: Dict[str, Any]) -> JobListing:
    values = dict(changes)
    if "deadline" in values:
        values["deadline"] = _normalize_deadline(values["deadline"])
    if "company_size" in values:
        values["company_size"] = values["company_size"] or None
    return _table(db, user).update(listing_id, values)


def delete_job_listing(db: Session, user, listing_id: int) -> None:
    _table(db, user).delete(listing_id)


@dataclass
class StatusChange:
    listing: JobListing
    requires_confirmation: bool


def change_job_listing_status(db: Session, user, listing_id: int, status: str) -> StatusChange:
    """
    Per-row status selector.

    Not applied → Applied is only a request: the caller must confirm the
    move to applications. Every other change is a plain flag update.
    """
    listing = get_job_listing(db, user, listing_id)
    if status == "Applied" and listing.status == "Not applied":
        return StatusChange(listing=listing, requires_confirmation=True)
    updated = update_job_listing(db, user, listing_id, {"status": status})
    return StatusChange(listing=updated, requires_confirmation=False)


def move_to_applications(
    db: Session, user, listing_id: int, now: Optional[datetime] = None
) -> Application:
    """
    Convert a listing into an application and delete the listing.

    The application starts at 서류 접수 (10%), active when the listing had a
    deadline and reviewing otherwise. Both writes commit together; a failure
    leaves the listing in place and no application behind.
    """
    listings = _table(db, user)
    applications = UserScopedTable(db, Application, user)
    listing = listings.get_or_raise(listing_id)

    values = application_service.new_application_values(
        company=listing.company,
        position=listing.position,
        stage=application_service.INITIAL_STAGE,
        deadline=listing.deadline,
        applied_at=now or datetime.now().astimezone(),
        status="active" if listing.deadline else "reviewing",
        url=listing.job_post_url or None,
    )
    application = applications.insert(values, commit=False)
    listings.delete(listing_id, commit=False)
    applications.commit(application)
    logger.info(f"Job listing moved to applications: listing_id={listing_id}, application_id={application.id}")
    return application


# ============================================
# Table projection
# ============================================

def listing_positions(listings: Sequence) -> List[str]:
    """Distinct non-empty positions in first-seen order."""
    seen = []
    for listing in listings:
        if listing.position and listing.position not in seen:
            seen.append(listing.position)
    return seen


def filter_job_listings(
    listings: Sequence,
    search: Optional[str] = None,
    position: Optional[str] = "all",
    scale: Optional[str] = "all",
) -> List:
    query = (search or "").strip().lower()
    filtered = []
    for listing in listings:
        if query and query not in listing.company.lower():
            continue
        if position and position != "all" and listing.position != position:
            continue
        if scale and scale != "all" and listing.company_size != scale:
            continue
        filtered.append(listing)
    return filtered


def visible_listings(listings: Sequence, expanded: bool = False) -> List:
    if expanded:
        return list(listings)
    return list(listings[:COLLAPSED_ROWS])
