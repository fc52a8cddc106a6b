"""
Job listing endpoints.

Listings are companies under consideration; a listing marked Applied is
moved to the applications board.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_db, get_current_user_obj
from jobtrack.db.models.user import User
from jobtrack.services import job_listings as listing_service
from jobtrack.services.applications import d_day_badge
from jobtrack.services.calendar_view import build_job_calendar
from jobtrack.services.dates import format_d_day
from jobtrack.schemas.application import ApplicationResponse, DDayBadgeResponse
from jobtrack.schemas.job_listing import (
    CountResponse,
    JobCalendarCellResponse,
    JobCalendarResponse,
    JobListingCreate,
    JobListingResponse,
    JobListingStatusResponse,
    JobListingStatusUpdate,
    JobListingTableResponse,
    JobListingUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/job-listings", tags=["Job Listings"])

DATE_QUERY = r"^\d{4}-\d{2}-\d{2}$"


def listing_response(listing, today: Optional[str] = None) -> JobListingResponse:
    response = JobListingResponse.model_validate(listing)
    response.d_day = format_d_day(listing.deadline, today)
    return response


@router.get("", response_model=JobListingTableResponse)
def list_job_listings(
    search: Optional[str] = Query(None, description="Company name contains (case-insensitive)"),
    position: str = Query("all", description="Exact position or 'all'"),
    scale: str = Query("all", description="Exact company size or 'all'"),
    listing_status: Optional[str] = Query(None, alias="status", description="Filter by listing status"),
    expanded: bool = Query(False, description="Show every row instead of the collapsed table"),
    today: Optional[str] = Query(None, pattern=DATE_QUERY, description="Reference day for D-day text"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """
    Listing table for the authenticated user.

    Filters by company search text, position and company scale; the collapsed
    view shows the first 15 rows.
    """
    if listing_status:
        listings = listing_service.get_job_listings_by_status(db, user, listing_status)
    else:
        listings = listing_service.get_all_job_listings(db, user)

    filtered = listing_service.filter_job_listings(listings, search, position, scale)
    visible = listing_service.visible_listings(filtered, expanded)

    logger.debug(f"Job listings listed: user_id={user.id}, total={len(filtered)}")

    return JobListingTableResponse(
        listings=[listing_response(listing, today) for listing in visible],
        total=len(filtered),
        has_more=len(filtered) > len(visible),
        positions=listing_service.listing_positions(listings),
    )


@router.get("/options")
def listing_options():
    """Selectable values for the listing form."""
    return {
        "company_sizes": list(listing_service.COMPANY_SIZES),
        "industries": listing_service.INDUSTRY_OPTIONS,
        "statuses": list(listing_service.LISTING_STATUSES),
    }


@router.get("/upcoming", response_model=List[JobListingResponse])
def upcoming_job_listings(
    days: int = Query(7, ge=0, le=365, description="Days ahead to include"),
    today: Optional[str] = Query(None, pattern=DATE_QUERY),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    listings = listing_service.get_upcoming_job_listings(db, user, days, today)
    return [listing_response(listing, today) for listing in listings]


@router.get("/this-week/count", response_model=CountResponse)
def this_week_count(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return CountResponse(count=listing_service.get_this_week_job_listings_count(db, user))


@router.get("/calendar", response_model=JobCalendarResponse)
def job_calendar(
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12, description="1-based month"),
    today: Optional[str] = Query(None, pattern=DATE_QUERY),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Month grid with the companies whose deadline falls on each day."""
    listings = listing_service.get_job_listings_by_month(db, user, year, month)
    cells = build_job_calendar(listings, year, month, today)
    return JobCalendarResponse(
        year=year,
        month=month,
        cells=[JobCalendarCellResponse.model_validate(cell) for cell in cells],
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobListingResponse)
def create_job_listing(
    listing_data: JobListingCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Create a listing; also completes today's job_listing routine."""
    listing = listing_service.create_job_listing(db, user, **listing_data.model_dump())
    logger.info(f"Job listing created: listing_id={listing.id}, user_id={user.id}, company={listing.company}")
    return listing_response(listing)


@router.get("/{listing_id}", response_model=JobListingResponse)
def get_job_listing(
    listing_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return listing_response(listing_service.get_job_listing(db, user, listing_id))


@router.patch("/{listing_id}", response_model=JobListingResponse)
def update_job_listing(
    listing_id: int,
    listing_data: JobListingUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Only updates provided fields."""
    listing = listing_service.update_job_listing(
        db, user, listing_id, listing_data.model_dump(exclude_unset=True)
    )
    logger.info(f"Job listing updated: listing_id={listing_id}, user_id={user.id}")
    return listing_response(listing)


@router.patch("/{listing_id}/status", response_model=JobListingStatusResponse)
def change_status(
    listing_id: int,
    status_data: JobListingStatusUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """
    Change the listing status flag.

    Not applied → Applied is not written; the response asks the client to
    confirm and call /move instead.
    """
    change = listing_service.change_job_listing_status(db, user, listing_id, status_data.status)
    return JobListingStatusResponse(
        listing=listing_response(change.listing),
        requires_confirmation=change.requires_confirmation,
    )


@router.post("/{listing_id}/move", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
def move_to_applications(
    listing_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Convert the listing into an application and delete the listing."""
    application = listing_service.move_to_applications(db, user, listing_id)
    response = ApplicationResponse.model_validate(application)
    response.badge = DDayBadgeResponse.model_validate(d_day_badge(application))
    return response


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job_listing(
    listing_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    listing_service.delete_job_listing(db, user, listing_id)
    logger.info(f"Job listing deleted: listing_id={listing_id}, user_id={user.id}")
    return None
