"""
Dashboard endpoints: metric cards, routine toggle and the month calendar.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_db, get_current_user_obj
from jobtrack.db.models.user import User
from jobtrack.services import applications as application_service
from jobtrack.services import schedules as schedule_service
from jobtrack.services.calendar_view import build_dashboard_calendar
from jobtrack.services.dashboard import DashboardState
from jobtrack.services.dates import parse_date
from jobtrack.schemas.dashboard import (
    DashboardCalendarCellResponse,
    DashboardCalendarResponse,
    DashboardResponse,
    DashboardToggleRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

DATE_QUERY = r"^\d{4}-\d{2}-\d{2}$"


def load_state(db: Session, user: User, today: Optional[str]) -> DashboardState:
    return DashboardState(parse_date(today) if today else None).preload(db, user)


@router.get("", response_model=DashboardResponse)
def dashboard(
    today: Optional[str] = Query(None, pattern=DATE_QUERY, description="Reference day; defaults to today"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Today's focus, weekly average and weekly application cards."""
    return DashboardResponse(**load_state(db, user, today).to_dict())


@router.post("/routines/toggle", response_model=DashboardResponse)
def toggle_routine(
    toggle_data: DashboardToggleRequest,
    today: Optional[str] = Query(None, pattern=DATE_QUERY),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Toggle a self-check routine for today and return the recomputed cards."""
    state = load_state(db, user, today)
    state.toggle_self_check(db, user, toggle_data.routine_key)
    return DashboardResponse(**state.to_dict())


@router.get("/calendar", response_model=DashboardCalendarResponse)
def dashboard_calendar(
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12, description="1-based month"),
    today: Optional[str] = Query(None, pattern=DATE_QUERY),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Month grid with schedules, application events and D-day markers."""
    applications = application_service.get_all_applications(db, user)
    schedules = schedule_service.get_schedules_by_month(db, user, year, month)
    cells = build_dashboard_calendar(applications, schedules, year, month, today)
    return DashboardCalendarResponse(
        year=year,
        month=month,
        cells=[DashboardCalendarCellResponse.model_validate(cell) for cell in cells],
    )
