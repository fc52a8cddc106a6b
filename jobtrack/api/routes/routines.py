"""
Daily routine endpoints.

Self-check routines are toggled by the user; auto-check routines are normally
completed as a side effect of creating time blocks, news scraps and job
listings, and can also be marked directly.
"""
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_db, get_current_user_obj
from jobtrack.db.models.user import User
from jobtrack.services import routines as routine_service
from jobtrack.services.dates import format_date, parse_date
from jobtrack.schemas.routine import (
    DayRoutinesResponse,
    RoutineAutoCheckRequest,
    RoutineResponse,
    RoutineToggleRequest,
    WeekRoutinesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routines", tags=["Routines"])

DATE_QUERY = r"^\d{4}-\d{2}-\d{2}$"


def day_response(day: str, routines) -> DayRoutinesResponse:
    return DayRoutinesResponse(
        date=day,
        routines=[RoutineResponse.model_validate(routine) for routine in routines],
        checklist=routine_service.routine_checklist(routines),
        percentage=routine_service.compute_focus_percentage(routines),
    )


@router.get("/catalogue")
def routine_catalogue():
    return [
        {"key": d.key, "label": d.label, "check_type": d.check_type}
        for d in routine_service.ROUTINE_DEFINITIONS
    ]


@router.get("/week", response_model=WeekRoutinesResponse)
def week_routines(
    today: Optional[str] = Query(None, pattern=DATE_QUERY),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Weekday routines from Monday through today and their average."""
    today_str = format_date(parse_date(today) if today else date.today())
    week = routine_service.load_week_routines(db, user, today_str)
    today_routines = week.get(today_str) or routine_service.get_routines_by_date(db, user, today_str)
    return WeekRoutinesResponse(
        days={
            day: [RoutineResponse.model_validate(routine) for routine in routines]
            for day, routines in week.items()
        },
        weekly_average=routine_service.compute_weekly_average(week, today_routines, today_str),
    )


@router.get("/{day}", response_model=DayRoutinesResponse)
def routines_by_date(
    day: str,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    date_str = format_date(parse_date(day))
    return day_response(date_str, routine_service.get_routines_by_date(db, user, date_str))


@router.post("/toggle", response_model=DayRoutinesResponse)
def toggle_routine(
    toggle_data: RoutineToggleRequest,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Flip a self-check routine and return the day's routines."""
    date_str = format_date(parse_date(toggle_data.date) if toggle_data.date else date.today())
    routine = routine_service.toggle_self_check(db, user, date_str, toggle_data.routine_key)
    logger.info(
        f"Routine toggled: user_id={user.id}, date={date_str}, "
        f"key={routine.routine_key}, completed={routine.is_completed}"
    )
    return day_response(date_str, routine_service.get_routines_by_date(db, user, date_str))


@router.post("/auto-check", response_model=RoutineResponse)
def auto_check_routine(
    check_data: RoutineAutoCheckRequest,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    date_str = format_date(parse_date(check_data.date) if check_data.date else date.today())
    routine = routine_service.mark_auto_check(db, user, date_str, check_data.routine_key)
    return RoutineResponse.model_validate(routine)
