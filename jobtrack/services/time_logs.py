"""
Time management: hourly time blocks and weekly goals.

Blocks may overlap; a day column renders them stacked by start hour.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from jobtrack.db.data_access import UserScopedTable
from jobtrack.db.models.time_log import TimeLog
from jobtrack.db.models.weekly_goal import WeeklyGoal
from jobtrack.services.dates import DateLike, format_date, get_week_end, get_week_start, parse_date
from jobtrack.services.routines import mark_auto_check

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeCategory:
    id: str
    label: str


TIME_CATEGORIES = [
    TimeCategory("personal_study", "개인공부"),
    TimeCategory("other", "기타"),
    TimeCategory("routine", "루틴"),
    TimeCategory("interview", "면접"),
    TimeCategory("meal", "식사"),
    TimeCategory("exercise", "운동"),
    TimeCategory("sleep", "잠"),
    TimeCategory("resume", "자소서"),
    TimeCategory("certificate", "자격증"),
]
CATEGORY_IDS = [category.id for category in TIME_CATEGORIES]

MIN_HOUR = 0
MAX_HOUR = 23
WEEKS_PER_MONTH = 4


def category_label(category_id: str) -> str:
    for category in TIME_CATEGORIES:
        if category.id == category_id:
            return category.label
    return category_id


def hour_label(hour: int) -> str:
    """12-hour Korean label, e.g. 0 → 오전 12시, 13 → 오후 1시."""
    if hour < 12:
        return f"오전 {12 if hour == 0 else hour}시"
    return f"오후 {12 if hour == 12 else hour - 12}시"


def validate_hours(start_hour: int, end_hour: int) -> None:
    if not (MIN_HOUR <= start_hour <= MAX_HOUR and MIN_HOUR <= end_hour <= MAX_HOUR):
        raise ValueError(f"Hours must be between {MIN_HOUR} and {MAX_HOUR}")
    if end_hour <= start_hour:
        raise ValueError("end_hour must be after start_hour")


def _logs(db: Session, user) -> UserScopedTable:
    return UserScopedTable(db, TimeLog, user)


def _goals(db: Session, user) -> UserScopedTable:
    return UserScopedTable(db, WeeklyGoal, user)


# ============================================
# Time logs
# ============================================

def get_time_logs_by_week(db: Session, user, start_date: DateLike, end_date: DateLike) -> List[TimeLog]:
    start = format_date(parse_date(start_date))
    end = format_date(parse_date(end_date))
    return _logs(db, user).select_all(
        where=[TimeLog.date >= start, TimeLog.date <= end],
        order_by=[TimeLog.date.asc(), TimeLog.start_hour.asc()],
    )


def get_time_logs_for_week_of(db: Session, user, day: DateLike) -> List[TimeLog]:
    """Logs of the Monday–Sunday week containing `day`."""
    return get_time_logs_by_week(db, user, get_week_start(day), get_week_end(day))


def create_time_log(
    db: Session,
    user,
    category: str,
    content: str,
    day: DateLike,
    start_hour: int,
    end_hour: int,
    today: Optional[DateLike] = None,
) -> TimeLog:
    """Create a block; a block dated today completes today's time_block routine."""
    validate_hours(start_hour, end_hour)
    date_str = format_date(parse_date(day))
    log = _logs(db, user).insert({
        "category": category,
        "content": content,
        "date": date_str,
        "start_hour": start_hour,
        "end_hour": end_hour,
    })
    today_str = format_date(parse_date(today) if today is not None else date.today())
    if date_str == today_str:
        mark_auto_check(db, user, date_str, "time_block")
    return log


def update_time_log(db: Session, user, log_id: int, changes: Dict[str, Any]) -> TimeLog:
    table = _logs(db, user)
    values = dict(changes)
    if "date" in values:
        values["date"] = format_date(parse_date(values["date"]))
    if "start_hour" in values or "end_hour" in values:
        current = table.get_or_raise(log_id)
        validate_hours(
            values.get("start_hour", current.start_hour),
            values.get("end_hour", current.end_hour),
        )
    return table.update(log_id, values)


def delete_time_log(db: Session, user, log_id: int) -> None:
    _logs(db, user).delete(log_id)


def blocks_starting_at(logs: Sequence, day: DateLike, hour: int) -> List:
    date_str = format_date(parse_date(day))
    return [log for log in logs if log.date == date_str and log.start_hour == hour]


def is_hour_occupied(logs: Sequence, day: DateLike, hour: int) -> bool:
    """True when a block that started earlier is still running at `hour`."""
    date_str = format_date(parse_date(day))
    return any(
        log.date == date_str and log.start_hour < hour < log.end_hour
        for log in logs
    )


# ============================================
# Weekly goals
# ============================================

def get_weekly_goals_by_month(db: Session, user, year_month: str) -> List[WeeklyGoal]:
    return _goals(db, user).select_all(
        filters={"year_month": year_month},
        order_by=[WeeklyGoal.week.asc()],
    )


def upsert_weekly_goal(db: Session, user, year_month: str, week: int, goal: str) -> WeeklyGoal:
    """Insert or replace the goal for (year_month, week)."""
    if not 1 <= week <= WEEKS_PER_MONTH:
        raise ValueError(f"week must be between 1 and {WEEKS_PER_MONTH}")
    return _goals(db, user).upsert(
        {"year_month": year_month, "week": week, "goal": goal},
        conflict_keys=("year_month", "week"),
    )


def delete_weekly_goal(db: Session, user, goal_id: int) -> None:
    _goals(db, user).delete(goal_id)
