"""
Dashboard state container.

Holds the raw collections the dashboard shows and derives every metric from
them on read, so metrics can never drift from the data they describe.
"""
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from jobtrack.core.exceptions import JobTrackError
from jobtrack.services import applications as application_service
from jobtrack.services import news_scraps as news_scrap_service
from jobtrack.services import routines as routine_service
from jobtrack.services.applications import WeeklyApplicationStats, weekly_application_stats
from jobtrack.services.dates import DAYS_OF_WEEK, format_date, js_day_of_week
from jobtrack.services.optimistic import OptimisticUpdate
from jobtrack.services.routines import (
    PercentageTier,
    compute_focus_percentage,
    compute_weekly_average,
    percentage_tier,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutineState:
    """Plain copy of a daily routine row, safe to keep outside a session."""
    id: Optional[int]
    date: str
    routine_key: str
    check_type: str
    is_completed: bool
    completed_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row) -> "RoutineState":
        return cls(
            id=row.id,
            date=row.date,
            routine_key=row.routine_key,
            check_type=row.check_type,
            is_completed=bool(row.is_completed),
            completed_at=row.completed_at,
        )


@dataclass(frozen=True)
class DashboardMetrics:
    today_focus_percentage: int
    today_focus_tier: PercentageTier
    weekly_average_percentage: int
    weekly_average_tier: PercentageTier
    weekly_application_stats: WeeklyApplicationStats


def calculate_metrics(
    today_routines: List,
    week_routines: Dict[str, List],
    applications: List,
    today: date,
    now: Optional[datetime] = None,
) -> DashboardMetrics:
    focus = compute_focus_percentage(today_routines)
    weekly_average = compute_weekly_average(week_routines, today_routines, today)
    return DashboardMetrics(
        today_focus_percentage=focus,
        today_focus_tier=percentage_tier(focus),
        weekly_average_percentage=weekly_average,
        weekly_average_tier=percentage_tier(weekly_average),
        weekly_application_stats=weekly_application_stats(
            applications, now or datetime.combine(today, datetime.now().time())
        ),
    )


def date_subtitle(today: date) -> str:
    """e.g. 3월 2일 (월) 목표 달성률"""
    return f"{today.month}월 {today.day}일 ({DAYS_OF_WEEK[js_day_of_week(today)]}) 목표 달성률"


class DashboardState:
    """
    Raw dashboard collections plus metrics computed from them.

    Args:
        today: Fixed reference day; the real current date when omitted
    """

    def __init__(self, today: Optional[date] = None):
        self._today = today
        self.is_ready = False
        self.today_routines: List[RoutineState] = []
        self.week_routines: Dict[str, List[RoutineState]] = {}
        self.applications: List = []
        self.news_scraps: List = []

    @property
    def today(self) -> date:
        return self._today or date.today()

    @property
    def today_str(self) -> str:
        return format_date(self.today)

    @property
    def metrics(self) -> DashboardMetrics:
        return calculate_metrics(
            self.today_routines,
            self.week_routines,
            self.applications,
            self.today,
        )

    def preload(self, db: Session, user) -> "DashboardState":
        """Fetch everything the dashboard needs; the state is ready afterwards even on failure."""
        try:
            routines = routine_service.get_routines_by_date(db, user, self.today)
            week = routine_service.load_week_routines(db, user, self.today)
            self.applications = application_service.get_all_applications(db, user)
            self.news_scraps = news_scrap_service.get_all_news_scraps(db, user)
            self.today_routines = [RoutineState.from_row(row) for row in routines]
            self.week_routines = {
                day: [RoutineState.from_row(row) for row in rows]
                for day, rows in week.items()
            }
        except JobTrackError as e:
            logger.error(f"Failed to preload dashboard data: {e}")
            raise
        finally:
            self.is_ready = True
        return self

    def update_today_routines(self, routines: List[RoutineState]) -> None:
        self.today_routines = list(routines)
        if self.today_str in self.week_routines:
            self.week_routines = {**self.week_routines, self.today_str: list(routines)}

    def add_application(self, application) -> None:
        self.applications = self.applications + [application]

    def update_applications(self, applications: List) -> None:
        self.applications = list(applications)

    def add_news_scrap(self, scrap) -> None:
        self.news_scraps = [scrap] + self.news_scraps

    def update_news_scraps(self, scraps: List) -> None:
        self.news_scraps = list(scraps)

    def _optimistic_toggle(self, routines: List[RoutineState], routine_key: str) -> List[RoutineState]:
        now = datetime.now().astimezone()
        for index, routine in enumerate(routines):
            if routine.routine_key == routine_key:
                completed = not routine.is_completed
                routines[index] = replace(
                    routine,
                    is_completed=completed,
                    completed_at=now if completed else None,
                )
                return routines
        return routines + [RoutineState(
            id=None,
            date=self.today_str,
            routine_key=routine_key,
            check_type="self",
            is_completed=True,
            completed_at=now,
        )]

    def toggle_self_check(self, db: Session, user, routine_key: str) -> List[RoutineState]:
        """
        Toggle a self-check routine for today.

        The toggled state shows immediately; on success it is replaced by the
        persisted rows, on failure the previous rows come back.
        """
        def persist():
            routine_service.toggle_self_check(db, user, self.today, routine_key)
            return routine_service.get_routines_by_date(db, user, self.today)

        OptimisticUpdate(lambda: self.today_routines, self.update_today_routines).run(
            apply=lambda routines: self._optimistic_toggle(routines, routine_key),
            persist=persist,
            reconcile=lambda _, rows: [RoutineState.from_row(row) for row in rows],
        )
        return self.today_routines

    def to_dict(self) -> dict:
        metrics = self.metrics
        stats = metrics.weekly_application_stats
        return {
            "date": self.today_str,
            "date_subtitle": date_subtitle(self.today),
            "is_ready": self.is_ready,
            "routines": routine_service.routine_checklist(self.today_routines),
            "today_focus": {
                "percentage": metrics.today_focus_percentage,
                "level": metrics.today_focus_tier.level,
                "comment": metrics.today_focus_tier.comment,
            },
            "weekly_average": {
                "percentage": metrics.weekly_average_percentage,
                "level": metrics.weekly_average_tier.level,
                "comment": metrics.weekly_average_tier.comment,
            },
            "weekly_applications": {
                "count": stats.count,
                "percentage": stats.percentage,
                "subtitle": stats.subtitle,
            },
            "news_scrap_count": len(self.news_scraps),
        }
