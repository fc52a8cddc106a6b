"""
Month calendars for the dashboard and the job listings page.

Both start from build_calendar_grid and attach the records that fall on each
day cell, matched on the YYYY-MM-DD date string.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from jobtrack.services.applications import INTERVIEW_STAGE_STATUSES
from jobtrack.services.dates import DateLike, build_calendar_grid, calculate_d_day, parse_date

JOB_CALENDAR_PREVIEW = 2
D_DAY_HORIZON_DAYS = 30
COMPANY_LABEL_LENGTH = 3

CLOSED_STATUSES = ("rejected", "accepted")


@dataclass
class JobCalendarCell:
    day: int
    is_current_month: bool
    is_today: bool
    date_str: str
    companies: List[str] = field(default_factory=list)

    @property
    def preview(self) -> List[str]:
        return self.companies[:JOB_CALENDAR_PREVIEW]

    @property
    def more_count(self) -> int:
        return max(len(self.companies) - JOB_CALENDAR_PREVIEW, 0)


def group_listings_by_deadline(listings: Sequence) -> Dict[str, List[str]]:
    """Company names keyed by deadline date string, in listing order."""
    grouped = defaultdict(list)
    for listing in listings:
        if listing.deadline:
            grouped[listing.deadline].append(listing.company)
    return dict(grouped)


def build_job_calendar(
    listings: Sequence, year: int, month: int, today: Optional[DateLike] = None
) -> List[JobCalendarCell]:
    grouped = group_listings_by_deadline(listings)
    return [
        JobCalendarCell(
            day=cell.day,
            is_current_month=cell.is_current_month,
            is_today=cell.is_today,
            date_str=cell.date_str,
            companies=list(grouped.get(cell.date_str, [])) if cell.is_current_month else [],
        )
        for cell in build_calendar_grid(year, month, today)
    ]


@dataclass(frozen=True)
class DDayMarker:
    label: str
    company: str
    days_left: int


@dataclass(frozen=True)
class ApplicationEvent:
    company: str
    stage: str


@dataclass
class DashboardCalendarCell:
    day: int
    is_current_month: bool
    is_today: bool
    date_str: str
    d_day: Optional[DDayMarker] = None
    schedules: List = field(default_factory=list)
    application_events: List[ApplicationEvent] = field(default_factory=list)


def short_company(company: str) -> str:
    if len(company) > COMPANY_LABEL_LENGTH:
        return company[:COMPANY_LABEL_LENGTH] + ".."
    return company


def d_day_markers(applications: Sequence, today: Optional[DateLike] = None) -> Dict[str, DDayMarker]:
    """
    One marker per deadline date within the next 30 days for open applications.

    The first application seen for a date keeps the marker.
    """
    today_day = parse_date(today) if today is not None else date.today()
    markers: Dict[str, DDayMarker] = {}
    for application in applications:
        if not application.deadline or application.status in CLOSED_STATUSES:
            continue
        days_left = calculate_d_day(application.deadline, today_day)
        if not 0 <= days_left <= D_DAY_HORIZON_DAYS:
            continue
        existing = markers.get(application.deadline)
        if existing is None or days_left < existing.days_left:
            markers[application.deadline] = DDayMarker(
                label="D-Day" if days_left == 0 else f"D-{days_left}",
                company=short_company(application.company),
                days_left=days_left,
            )
    return markers


def application_events_on(applications: Sequence, date_str: str) -> List[ApplicationEvent]:
    """Open applications due on a day, labelled with their interview stage or 마감."""
    return [
        ApplicationEvent(
            company=application.company,
            stage=application.status if application.status in INTERVIEW_STAGE_STATUSES else "마감",
        )
        for application in applications
        if application.deadline == date_str and application.status not in CLOSED_STATUSES
    ]


def build_dashboard_calendar(
    applications: Sequence,
    schedules: Sequence,
    year: int,
    month: int,
    today: Optional[DateLike] = None,
) -> List[DashboardCalendarCell]:
    markers = d_day_markers(applications, today)
    schedules_by_date = defaultdict(list)
    for schedule in schedules:
        schedules_by_date[schedule.date].append(schedule)

    cells = []
    for cell in build_calendar_grid(year, month, today):
        if not cell.is_current_month:
            cells.append(DashboardCalendarCell(
                day=cell.day,
                is_current_month=False,
                is_today=False,
                date_str=cell.date_str,
            ))
            continue
        cells.append(DashboardCalendarCell(
            day=cell.day,
            is_current_month=True,
            is_today=cell.is_today,
            date_str=cell.date_str,
            d_day=markers.get(cell.date_str),
            schedules=list(schedules_by_date.get(cell.date_str, [])),
            application_events=application_events_on(applications, cell.date_str),
        ))
    return cells
