"""
Daily routine tracking and completion aggregation.

Two routines are checked by the user (self) and three are checked by the
system the first time the matching action happens on a day (auto). Auto
checks are written at most once per day and never cleared.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from jobtrack.core.exceptions import InvalidRoutineError
from jobtrack.db.data_access import UserScopedTable
from jobtrack.db.models.daily_routine import DailyRoutine
from jobtrack.services.dates import DateLike, format_date, parse_date, weekdays_through

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutineDefinition:
    key: str
    label: str
    check_type: str


ROUTINE_DEFINITIONS = [
    RoutineDefinition("wake_up", "기상 (오전 8시 이전)", "self"),
    RoutineDefinition("exercise", "운동 (최소 10분)", "self"),
    RoutineDefinition("time_block", "타임 블록 계획하기", "auto"),
    RoutineDefinition("news_scrap", "경제 뉴스 스크랩", "auto"),
    RoutineDefinition("job_listing", "기업 리스트 추가", "auto"),
]

ROUTINE_KEYS = [definition.key for definition in ROUTINE_DEFINITIONS]
SELF_CHECK_KEYS = [d.key for d in ROUTINE_DEFINITIONS if d.check_type == "self"]
AUTO_CHECK_KEYS = [d.key for d in ROUTINE_DEFINITIONS if d.check_type == "auto"]
TOTAL_ROUTINES = len(ROUTINE_DEFINITIONS)


@dataclass(frozen=True)
class PercentageTier:
    level: str
    comment: str


def js_round(value: float) -> int:
    """Round half up, as the dashboard always displayed percentages."""
    return int(math.floor(value + 0.5))


def _routines_table(db: Session, user) -> UserScopedTable:
    return UserScopedTable(db, DailyRoutine, user)


def get_routines_by_date(db: Session, user, day: DateLike) -> List[DailyRoutine]:
    date_str = format_date(parse_date(day))
    return _routines_table(db, user).select_all(
        filters={"date": date_str},
        order_by=[DailyRoutine.id],
    )


def toggle_self_check(
    db: Session,
    user,
    day: DateLike,
    routine_key: str,
    now: Optional[datetime] = None,
) -> DailyRoutine:
    """
    Flip a self-check routine for a day and return the row in its new state.

    A missing row is created already completed.
    """
    if routine_key not in SELF_CHECK_KEYS:
        raise InvalidRoutineError(f"'{routine_key}' is not a self-check routine")

    table = _routines_table(db, user)
    date_str = format_date(parse_date(day))
    now = now or datetime.now().astimezone()

    existing = table.find_one(date=date_str, routine_key=routine_key)
    if existing is not None:
        completed = not existing.is_completed
        return table.update(existing.id, {
            "is_completed": completed,
            "completed_at": now if completed else None,
        })

    return table.insert({
        "date": date_str,
        "routine_key": routine_key,
        "check_type": "self",
        "is_completed": True,
        "completed_at": now,
    })


def mark_auto_check(
    db: Session,
    user,
    day: DateLike,
    routine_key: str,
    now: Optional[datetime] = None,
) -> DailyRoutine:
    """
    Record that an auto-check routine happened on a day.

    An existing row is returned untouched, so repeated calls keep the
    completion time of the first one.
    """
    if routine_key not in AUTO_CHECK_KEYS:
        raise InvalidRoutineError(f"'{routine_key}' is not an auto-check routine")

    table = _routines_table(db, user)
    date_str = format_date(parse_date(day))

    existing = table.find_one(date=date_str, routine_key=routine_key)
    if existing is not None:
        return existing

    logger.info(f"Auto-check routine completed: user_id={table.user_id}, date={date_str}, key={routine_key}")
    return table.insert({
        "date": date_str,
        "routine_key": routine_key,
        "check_type": "auto",
        "is_completed": True,
        "completed_at": now or datetime.now().astimezone(),
    })


def routine_status_map(routines: Iterable) -> Dict[str, bool]:
    return {routine.routine_key: bool(routine.is_completed) for routine in routines}


def _completed_count(routines: Iterable) -> int:
    status = routine_status_map(routines)
    return sum(1 for key in ROUTINE_KEYS if status.get(key))


def compute_day_percentage(routines: Iterable) -> float:
    return _completed_count(routines) / TOTAL_ROUTINES * 100


def compute_focus_percentage(routines: Iterable) -> int:
    """Completed catalogue routines out of all five, as a rounded percentage."""
    return js_round(compute_day_percentage(routines))


def compute_weekly_average(
    week_routines: Mapping[str, Sequence],
    today_routines: Sequence,
    today: DateLike,
) -> int:
    """
    Mean daily percentage over this week's weekdays up to and including today.

    `week_routines` maps YYYY-MM-DD to that day's persisted rows; today's
    entry is replaced by `today_routines`. Weekends never count.
    """
    today_str = format_date(parse_date(today))
    days = [day for day in weekdays_through(today_str) if day in week_routines or day == today_str]
    if not days:
        return 0

    total = 0.0
    for day in days:
        routines = today_routines if day == today_str else week_routines[day]
        total += compute_day_percentage(routines)
    return js_round(total / len(days))


def percentage_tier(percentage: float) -> PercentageTier:
    if percentage <= 30:
        return PercentageTier("red", "...뭐하세요?")
    if percentage <= 70:
        return PercentageTier("yellow", "힘내세요")
    return PercentageTier("green", "고생했어요~")


def routine_checklist(routines: Iterable) -> Dict[str, List[dict]]:
    """Self and auto checklist items in catalogue order."""
    status = routine_status_map(routines)
    checklist = {"self": [], "auto": []}
    for definition in ROUTINE_DEFINITIONS:
        checklist[definition.check_type].append({
            "key": definition.key,
            "label": definition.label,
            "checked": status.get(definition.key, False),
        })
    return checklist


def load_week_routines(db: Session, user, today: Optional[DateLike] = None) -> Dict[str, List[DailyRoutine]]:
    """Persisted routines for each weekday of this week up to today."""
    today_day = parse_date(today) if today is not None else datetime.now().date()
    return {
        day: get_routines_by_date(db, user, day)
        for day in weekdays_through(today_day)
    }
