"""
Date and deadline arithmetic.

Every calendar and D-day computation works on the YYYY-MM-DD form of a date
so that no timezone conversion can move a deadline to a neighbouring day.
"""
import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple, Union

from jobtrack.core.exceptions import InvalidDateError

DateLike = Union[str, date, datetime]

DAYS_OF_WEEK = ["일", "월", "화", "수", "목", "금", "토"]


def parse_date(value: DateLike) -> date:
    """
    Coerce a YYYY-MM-DD string, ISO-8601 timestamp, date or datetime to a date.

    Raises:
        InvalidDateError: If a string cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(f"Invalid date: {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as e:
        raise InvalidDateError(f"Invalid date: {value!r}") from e


def format_date(value: Union[date, datetime]) -> str:
    """YYYY-MM-DD"""
    return f"{value.year}-{value.month:02d}-{value.day:02d}"


def format_year_month(value: Union[date, datetime]) -> str:
    """YYYY-MM"""
    return f"{value.year}-{value.month:02d}"


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware timestamp to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def calculate_d_day(deadline: Optional[DateLike], reference: Optional[DateLike] = None) -> Optional[int]:
    """
    Whole days from `reference` (default today) until `deadline`.

    0 means due today, positive means days remaining, negative means days
    overdue. Returns None when there is no deadline.
    """
    if deadline is None or deadline == "":
        return None
    deadline_day = parse_date(deadline)
    reference_day = parse_date(reference) if reference is not None else date.today()
    return (deadline_day - reference_day).days


def format_d_day(deadline: Optional[DateLike], reference: Optional[DateLike] = None) -> str:
    """D-day text with overdue deadlines shown as D+n."""
    d_day = calculate_d_day(deadline, reference)
    if d_day is None:
        return "-"
    if d_day == 0:
        return "D-Day"
    if d_day > 0:
        return f"D-{d_day}"
    return f"D+{abs(d_day)}"


def format_d_day_with_expiry(deadline: Optional[DateLike], reference: Optional[DateLike] = None) -> str:
    """D-day text for the applications board, where overdue reads 마감."""
    d_day = calculate_d_day(deadline, reference)
    if d_day is None:
        return "-"
    if d_day < 0:
        return "마감"
    if d_day == 0:
        return "D-Day"
    return f"D-{d_day}"


def js_day_of_week(value: date) -> int:
    """Day-of-week index with Sunday as 0 and Saturday as 6."""
    return (value.weekday() + 1) % 7


def get_week_start(value: DateLike) -> datetime:
    """
    Monday 00:00 of the week containing `value`.

    Sunday is the last day of the week that started six days earlier.
    """
    day = parse_date(value)
    dow = js_day_of_week(day)
    offset = -6 if dow == 0 else 1 - dow
    return datetime.combine(day + timedelta(days=offset), time.min)


def get_week_end(value: DateLike) -> datetime:
    """Sunday 23:59:59.999 of the week containing `value`."""
    start = get_week_start(value)
    return datetime.combine(start.date() + timedelta(days=6), time(23, 59, 59, 999000))


def weekdays_through(today: DateLike) -> List[str]:
    """Monday..Friday dates of today's week that are not after today."""
    today_day = parse_date(today)
    start = get_week_start(today_day).date()
    days = []
    for offset in range(7):
        day = start + timedelta(days=offset)
        if day > today_day:
            break
        if day.weekday() < 5:
            days.append(format_date(day))
    return days


def first_day_of_week(year: int, month: int) -> int:
    """Sunday-based index of the first day of the month."""
    return js_day_of_week(date(year, month, 1))


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> Tuple[str, str]:
    """First and last day of the month as YYYY-MM-DD."""
    last = days_in_month(year, month)
    return f"{year}-{month:02d}-01", f"{year}-{month:02d}-{last:02d}"


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """(year, month) moved by `delta` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


@dataclass
class CalendarCell:
    day: int
    is_current_month: bool
    is_today: bool
    date_str: str


def build_calendar_grid(year: int, month: int, today: Optional[DateLike] = None) -> List[CalendarCell]:
    """
    Month grid in Sunday-first rows of seven.

    Leading and trailing blanks have day 0 and an empty date string.
    `month` is 1-based. `is_today` compares against the real current date,
    not the displayed month.
    """
    if not 1 <= month <= 12:
        raise InvalidDateError(f"Invalid month: {month}")
    today_day = parse_date(today) if today is not None else date.today()

    def blank():
        return CalendarCell(day=0, is_current_month=False, is_today=False, date_str="")

    leading = first_day_of_week(year, month)
    total_days = days_in_month(year, month)

    cells = [blank() for _ in range(leading)]
    for day in range(1, total_days + 1):
        current = date(year, month, day)
        cells.append(CalendarCell(
            day=day,
            is_current_month=True,
            is_today=current == today_day,
            date_str=format_date(current),
        ))

    remainder = len(cells) % 7
    if remainder:
        cells.extend(blank() for _ in range(7 - remainder))
    return cells
