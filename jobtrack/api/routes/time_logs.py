"""
Time management endpoints: hourly time blocks and weekly goals.
"""
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobtrack.core.auth_dependency import get_db, get_current_user_obj
from jobtrack.db.models.user import User
from jobtrack.services import time_logs as time_log_service
from jobtrack.schemas.time_log import (
    TimeLogCreate,
    TimeLogResponse,
    TimeLogUpdate,
    WeeklyGoalResponse,
    WeeklyGoalUpsert,
)

logger = logging.getLogger(__name__)

DATE_QUERY = r"^\d{4}-\d{2}-\d{2}$"

router = APIRouter(prefix="/time-logs", tags=["Time Logs"])
goals_router = APIRouter(prefix="/weekly-goals", tags=["Weekly Goals"])


def log_response(log) -> TimeLogResponse:
    response = TimeLogResponse.model_validate(log)
    response.category_label = time_log_service.category_label(log.category)
    return response


# ============================================
# Time logs
# ============================================

@router.get("/categories")
def time_categories():
    return [{"id": c.id, "label": c.label} for c in time_log_service.TIME_CATEGORIES]


@router.get("", response_model=List[TimeLogResponse])
def list_time_logs(
    start_date: Optional[str] = Query(None, pattern=DATE_QUERY, description="First day of the range"),
    end_date: Optional[str] = Query(None, pattern=DATE_QUERY, description="Last day of the range"),
    week_of: Optional[str] = Query(None, pattern=DATE_QUERY, description="Any day of the Monday–Sunday week"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Logs in a date range, or of the week containing `week_of` (default this week)."""
    if start_date and end_date:
        logs = time_log_service.get_time_logs_by_week(db, user, start_date, end_date)
    else:
        logs = time_log_service.get_time_logs_for_week_of(db, user, week_of or date.today())
    return [log_response(log) for log in logs]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TimeLogResponse)
def create_time_log(
    log_data: TimeLogCreate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Create a block; a block dated today completes today's time_block routine."""
    log = time_log_service.create_time_log(
        db,
        user,
        category=log_data.category,
        content=log_data.content,
        day=log_data.date,
        start_hour=log_data.start_hour,
        end_hour=log_data.end_hour,
    )
    return log_response(log)


@router.patch("/{log_id}", response_model=TimeLogResponse)
def update_time_log(
    log_id: int,
    log_data: TimeLogUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    log = time_log_service.update_time_log(db, user, log_id, log_data.model_dump(exclude_unset=True))
    return log_response(log)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_time_log(
    log_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    time_log_service.delete_time_log(db, user, log_id)
    return None


# ============================================
# Weekly goals
# ============================================

@goals_router.get("", response_model=List[WeeklyGoalResponse])
def list_weekly_goals(
    year_month: str = Query(..., pattern=r"^\d{4}-\d{2}$", description="Month (YYYY-MM)"),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    goals = time_log_service.get_weekly_goals_by_month(db, user, year_month)
    return [WeeklyGoalResponse.model_validate(goal) for goal in goals]


@goals_router.put("", response_model=WeeklyGoalResponse)
def upsert_weekly_goal(
    goal_data: WeeklyGoalUpsert,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Insert or replace the goal for (year_month, week)."""
    goal = time_log_service.upsert_weekly_goal(
        db, user, goal_data.year_month, goal_data.week, goal_data.goal
    )
    return WeeklyGoalResponse.model_validate(goal)


@goals_router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_weekly_goal(
    goal_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    time_log_service.delete_weekly_goal(db, user, goal_id)
    return None
