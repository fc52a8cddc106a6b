"""
Calendar schedule endpoints.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_db, get_current_user_obj
from jobtrack.db.models.user import User
from jobtrack.services import schedules as schedule_service
from jobtrack.schemas.schedule import ScheduleCreate, ScheduleResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedules", tags=["Schedules"])


@router.get("", response_model=List[ScheduleResponse])
def list_schedules(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12, description="1-based month; requires year"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    if year is not None and month is not None:
        schedules = schedule_service.get_schedules_by_month(db, user, year, month)
    else:
        schedules = schedule_service.get_all_schedules(db, user)
    return [ScheduleResponse.model_validate(schedule) for schedule in schedules]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ScheduleResponse)
def create_schedule(
    schedule_data: ScheduleCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    schedule = schedule_service.create_schedule(db, user, schedule_data.title, schedule_data.date)
    return ScheduleResponse.model_validate(schedule)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_schedule(
    schedule_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    schedule_service.delete_schedule(db, user, schedule_id)
    return None
