"""
Calendar schedules: free-text events pinned to one day.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from jobtrack.db.data_access import UserScopedTable
from jobtrack.db.models.schedule import Schedule
from jobtrack.services.dates import DateLike, format_date, month_bounds, parse_date

logger = logging.getLogger(__name__)


def _table(db: Session, user) -> UserScopedTable:
    return UserScopedTable(db, Schedule, user)


def get_all_schedules(db: Session, user) -> List[Schedule]:
    return _table(db, user).select_all(order_by=[Schedule.date.asc(), Schedule.id.asc()])


def get_schedules_by_month(db: Session, user, year: int, month: int) -> List[Schedule]:
    start, end = month_bounds(year, month)
    return _table(db, user).select_all(
        where=[Schedule.date >= start, Schedule.date <= end],
        order_by=[Schedule.date.asc(), Schedule.id.asc()],
    )


def create_schedule(db: Session, user, title: str, day: DateLike) -> Schedule:
    """
    Raises:
        ValueError: If the title is blank
    """
    title = (title or "").strip()
    if not title:
        raise ValueError("Schedule title is required")
    return _table(db, user).insert({"title": title, "date": format_date(parse_date(day))})


def delete_schedule(db: Session, user, schedule_id: int) -> None:
    _table(db, user).delete(schedule_id)
