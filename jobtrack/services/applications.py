"""
Application tracking service.

CRUD over applications plus the projections the applications board and the
dashboard read: status buckets, D-day badges and the weekly stat.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from jobtrack.core.exceptions import InvalidDateError, InvalidStageError
from jobtrack.db.data_access import UserScopedTable
from jobtrack.db.models.application import Application
from jobtrack.services.dates import (
    DateLike,
    calculate_d_day,
    format_d_day_with_expiry,
    format_date,
    get_week_end,
    get_week_start,
    parse_date,
    to_local_naive,
)

logger = logging.getLogger(__name__)

APPLICATION_STATUSES = ("active", "reviewing", "rejected", "accepted")
INTERVIEW_STAGE_STATUSES = ("인적성", "AI면접", "1차면접", "2차면접")
ALL_STATUSES = APPLICATION_STATUSES + INTERVIEW_STAGE_STATUSES

INITIAL_STAGE = "서류 접수"
INITIAL_PROGRESS = 10

# Ordered; the last entry is the final stage
PROGRESS_STAGES = [
    ("서류합격", 25),
    ("1차면접 합격", 50),
    ("2차면접 합격", 75),
    ("최종합격", 100),
]
FINAL_STAGE = PROGRESS_STAGES[-1][0]

REVIEWING_TEXT = "심사중"

INTERVIEW_STAGE_COLORS = {
    "인적성": "purple",
    "AI면접": "cyan",
    "1차면접": "blue",
    "2차면접": "indigo",
}

ACTIVE_PREVIEW_LIMIT = 10
CLOSED_PREVIEW_LIMIT = 1


def _table(db: Session, user) -> UserScopedTable:
    return UserScopedTable(db, Application, user)


def _normalize_deadline(deadline: Optional[DateLike]) -> Optional[str]:
    if deadline is None or deadline == "":
        return None
    return format_date(parse_date(deadline))


# ============================================
# CRUD
# ============================================

def get_all_applications(db: Session, user) -> List[Application]:
    """All applications, most recently applied first."""
    return _table(db, user).select_all(order_by=[Application.applied_at.desc(), Application.id.desc()])


def get_applications_by_status(db: Session, user, status: str) -> List[Application]:
    return _table(db, user).select_all(
        filters={"status": status},
        order_by=[Application.applied_at.desc(), Application.id.desc()],
    )


def get_application(db: Session, user, application_id: int) -> Application:
    return _table(db, user).get_or_raise(application_id)


def check_accepted_stage(stage: str, status: str) -> None:
    """`accepted` is only valid at the final stage."""
    if status == "accepted" and stage != FINAL_STAGE:
        raise InvalidStageError(f"Status 'accepted' requires stage '{FINAL_STAGE}', not '{stage}'")


def new_application_values(
    company: str,
    position: str,
    stage: str = INITIAL_STAGE,
    deadline: Optional[DateLike] = None,
    applied_at: Optional[datetime] = None,
    status: str = "active",
    url: Optional[str] = None,
) -> Dict[str, Any]:
    """Column values for a new application; progress follows the stage."""
    progress = stage_progress(stage)
    check_accepted_stage(stage, status)
    return {
        "company": company,
        "position": position,
        "stage": stage,
        "progress": progress,
        "deadline": _normalize_deadline(deadline),
        "applied_at": applied_at or datetime.now().astimezone(),
        "status": status,
        "url": url or None,
    }


def create_application(
    db: Session,
    user,
    company: str,
    position: str,
    stage: str = INITIAL_STAGE,
    deadline: Optional[DateLike] = None,
    applied_at: Optional[datetime] = None,
    status: str = "active",
    url: Optional[str] = None,
) -> Application:
    values = new_application_values(company, position, stage, deadline, applied_at, status, url)
    return _table(db, user).insert(values)


def update_application(db: Session, user, application_id: int, changes: Dict[str, Any]) -> Application:
    """
    Replace the supplied fields only.

    Setting `accepted` is rejected unless the application is, or is being
    moved to, the final stage.
    """
    table = _table(db, user)
    values = dict(changes)
    if "deadline" in values:
        values["deadline"] = _normalize_deadline(values["deadline"])
    if values.get("status") == "accepted":
        stage = values.get("stage") or table.get_or_raise(application_id).stage
        check_accepted_stage(stage, "accepted")
    return table.update(application_id, values)


def delete_application(db: Session, user, application_id: int) -> None:
    _table(db, user).delete(application_id)


def reject_application(db: Session, user, application_id: int) -> Application:
    return update_application(db, user, application_id, {"status": "rejected"})


def restore_application(db: Session, user, application_id: int) -> Application:
    return update_application(db, user, application_id, {"status": "active"})


def stage_progress(stage: str) -> int:
    """Progress value paired with a stage label."""
    if stage == INITIAL_STAGE:
        return INITIAL_PROGRESS
    for label, progress in PROGRESS_STAGES:
        if label == stage:
            return progress
    raise InvalidStageError(f"Unknown stage: {stage}")


def update_application_progress(db: Session, user, application_id: int, stage: str) -> Application:
    """Move to a stage; reaching the final stage marks the application accepted."""
    progress = stage_progress(stage)
    status = "accepted" if stage == FINAL_STAGE else "active"
    logger.info(f"Application stage changed: id={application_id}, stage={stage}, status={status}")
    return update_application(db, user, application_id, {
        "stage": stage,
        "progress": progress,
        "status": status,
    })


def update_application_deadline(
    db: Session, user, application_id: int, deadline: Optional[DateLike]
) -> Application:
    """Set a deadline (active) or clear it to mark the application under review."""
    normalized = _normalize_deadline(deadline)
    return update_application(db, user, application_id, {
        "deadline": normalized,
        "status": "active" if normalized else "reviewing",
    })


# ============================================
# Aggregates
# ============================================

def count_by_status(applications: Sequence) -> Dict[str, int]:
    counts = {status: 0 for status in APPLICATION_STATUSES}
    counts["total"] = len(applications)
    for application in applications:
        if application.status in counts:
            counts[application.status] += 1
    return counts


def get_applications_count_by_status(db: Session, user) -> Dict[str, int]:
    return count_by_status(get_all_applications(db, user))


def upcoming_deadlines(applications: Sequence, today: Optional[DateLike] = None, days: int = 7) -> List:
    """Active or reviewing applications due within the next `days` days."""
    today_day = parse_date(today) if today is not None else date.today()
    upcoming = []
    for application in applications:
        if application.status not in ("active", "reviewing") or not application.deadline:
            continue
        d_day = calculate_d_day(application.deadline, today_day)
        if 0 <= d_day <= days:
            upcoming.append(application)
    return sorted(upcoming, key=lambda a: a.deadline)


def get_upcoming_deadlines(db: Session, user, today: Optional[DateLike] = None) -> List[Application]:
    return upcoming_deadlines(get_all_applications(db, user), today)


# ============================================
# Board projection
# ============================================

@dataclass
class ApplicationBucket:
    name: str
    items: List[Any]
    limit: int
    expanded: bool = False

    @property
    def visible(self) -> List[Any]:
        if self.expanded or len(self.items) <= self.limit:
            return list(self.items)
        return self.items[:self.limit]

    @property
    def has_more(self) -> bool:
        return len(self.items) > self.limit

    @property
    def hidden_count(self) -> int:
        return len(self.items) - len(self.visible)


@dataclass
class ApplicationBoard:
    active: ApplicationBucket
    accepted: ApplicationBucket
    rejected: ApplicationBucket
    positions: List[str] = field(default_factory=list)


def filter_applications(
    applications: Sequence,
    search: Optional[str] = None,
    position: Optional[str] = None,
) -> List:
    query = (search or "").strip().lower()
    filtered = []
    for application in applications:
        if query and query not in application.company.lower():
            continue
        if position and position != "all" and application.position != position:
            continue
        filtered.append(application)
    return filtered


def bucket_applications(
    applications: Sequence,
    search: Optional[str] = None,
    position: Optional[str] = None,
    expand_active: bool = False,
    expand_accepted: bool = False,
    expand_rejected: bool = False,
) -> ApplicationBoard:
    """
    Split applications into disjoint active / accepted / rejected buckets.

    Filters apply to each bucket; each bucket shows a short preview unless
    expanded.
    """
    filtered = filter_applications(applications, search, position)
    active = [a for a in filtered if a.status not in ("rejected", "accepted")]
    accepted = [a for a in filtered if a.status == "accepted"]
    rejected = [a for a in filtered if a.status == "rejected"]

    positions = sorted({a.position for a in applications if a.position})

    return ApplicationBoard(
        active=ApplicationBucket("active", active, ACTIVE_PREVIEW_LIMIT, expand_active),
        accepted=ApplicationBucket("accepted", accepted, CLOSED_PREVIEW_LIMIT, expand_accepted),
        rejected=ApplicationBucket("rejected", rejected, CLOSED_PREVIEW_LIMIT, expand_rejected),
        positions=positions,
    )


@dataclass(frozen=True)
class DDayBadge:
    text: str
    color: str


def d_day_badge(application, today: Optional[DateLike] = None) -> DDayBadge:
    """
    Badge text and colour for an application; the first matching rule wins.
    """
    status = application.status
    deadline = application.deadline

    if status == "rejected":
        return DDayBadge("", "transparent")
    if status == "reviewing":
        return DDayBadge(REVIEWING_TEXT, "amber")
    if status in INTERVIEW_STAGE_COLORS:
        text = format_d_day_with_expiry(deadline, today) if deadline else status
        return DDayBadge(text, INTERVIEW_STAGE_COLORS[status])
    if not deadline:
        return DDayBadge(REVIEWING_TEXT, "amber")

    d_day = calculate_d_day(deadline, today)
    text = format_d_day_with_expiry(deadline, today)
    if d_day < 0:
        return DDayBadge(text, "muted")
    if d_day <= 3:
        return DDayBadge(text, "rose")
    if d_day <= 7:
        return DDayBadge(text, "orange")
    return DDayBadge(text, "sky")


# ============================================
# Weekly stat
# ============================================

@dataclass(frozen=True)
class WeeklyApplicationStats:
    count: int
    percentage: int
    subtitle: str


def weekly_subtitle(count: int) -> str:
    if count == 0:
        return "이번 주 지원 내역이 없어요!"
    if count == 1:
        return "1개 완료! 1개 더 지원해보세요"
    return f"{count}개 완료! 목표 달성 🎉"


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, str):
        try:
            return to_local_naive(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError as e:
            raise InvalidDateError(f"Invalid timestamp: {value!r}") from e
    return datetime.combine(parse_date(value), datetime.min.time())


def weekly_application_stats(applications: Sequence, now: Optional[DateLike] = None) -> WeeklyApplicationStats:
    """Applications whose applied_at falls in the current Monday–Sunday week."""
    reference = now if now is not None else datetime.now()
    start = get_week_start(reference)
    end = get_week_end(reference)

    count = 0
    for application in applications:
        applied_at = _as_datetime(application.applied_at)
        if start <= applied_at <= end:
            count += 1

    return WeeklyApplicationStats(
        count=count,
        percentage=min(count * 50, 100),
        subtitle=weekly_subtitle(count),
    )

