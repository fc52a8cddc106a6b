"""
Pydantic schemas for the dashboard.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from jobtrack.schemas.routine import ChecklistItem
from jobtrack.schemas.schedule import ScheduleResponse


class DashboardToggleRequest(BaseModel):
    routine_key: str = Field(..., description="Self-check routine key", pattern="^(wake_up|exercise)$")


class PercentageCard(BaseModel):
    percentage: int = Field(..., description="Rounded completion percentage")
    level: str = Field(..., description="red | yellow | green")
    comment: str = Field(..., description="Tier comment")


class WeeklyApplicationCard(BaseModel):
    count: int = Field(..., description="Applications submitted this week")
    percentage: int = Field(..., description="Weekly goal progress, capped at 100")
    subtitle: str


class DashboardResponse(BaseModel):
    """Metrics for the dashboard cards."""
    date: str
    date_subtitle: str
    is_ready: bool
    routines: Dict[str, List[ChecklistItem]]
    today_focus: PercentageCard
    weekly_average: PercentageCard
    weekly_applications: WeeklyApplicationCard
    news_scrap_count: int

    class Config:
        json_schema_extra = {
            "example": {
                "date": "2026-03-02",
                "date_subtitle": "3월 2일 (월) 목표 달성률",
                "is_ready": True,
                "routines": {
                    "self": [{"key": "wake_up", "label": "기상 (오전 8시 이전)", "checked": True}],
                    "auto": [{"key": "time_block", "label": "타임 블록 계획하기", "checked": False}]
                },
                "today_focus": {"percentage": 20, "level": "red", "comment": "...뭐하세요?"},
                "weekly_average": {"percentage": 20, "level": "red", "comment": "...뭐하세요?"},
                "weekly_applications": {"count": 1, "percentage": 50, "subtitle": "1개 완료! 1개 더 지원해보세요"},
                "news_scrap_count": 0
            }
        }


class DDayMarkerResponse(BaseModel):
    label: str
    company: str
    days_left: int

    class Config:
        from_attributes = True


class ApplicationEventResponse(BaseModel):
    company: str
    stage: str

    class Config:
        from_attributes = True


class DashboardCalendarCellResponse(BaseModel):
    day: int = Field(..., description="Day of month; 0 for blank cells")
    is_current_month: bool
    is_today: bool
    date_str: str
    d_day: Optional[DDayMarkerResponse] = None
    schedules: List[ScheduleResponse] = Field(default_factory=list)
    application_events: List[ApplicationEventResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True


class DashboardCalendarResponse(BaseModel):
    year: int
    month: int
    cells: List[DashboardCalendarCellResponse]
