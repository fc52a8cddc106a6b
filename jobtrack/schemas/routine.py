"""
Pydantic schemas for daily routines.
"""
from typing import Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class RoutineToggleRequest(BaseModel):
    routine_key: str = Field(..., description="Self-check routine key", pattern="^(wake_up|exercise)$")
    date: Optional[str] = Field(None, description="Day to toggle (YYYY-MM-DD); today when omitted", pattern=DATE_PATTERN)


class RoutineAutoCheckRequest(BaseModel):
    routine_key: str = Field(
        ..., description="Auto-check routine key", pattern="^(time_block|news_scrap|job_listing)$"
    )
    date: Optional[str] = Field(None, description="Day to mark (YYYY-MM-DD); today when omitted", pattern=DATE_PATTERN)


class RoutineResponse(BaseModel):
    id: Optional[int] = None
    date: str
    routine_key: str
    check_type: str
    is_completed: bool
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChecklistItem(BaseModel):
    key: str
    label: str
    checked: bool


class DayRoutinesResponse(BaseModel):
    """Routines of one day with their checklist and completion."""
    date: str
    routines: List[RoutineResponse]
    checklist: Dict[str, List[ChecklistItem]] = Field(..., description="Self and auto checklist items")
    percentage: int = Field(..., description="Completed routines out of five, rounded")


class WeekRoutinesResponse(BaseModel):
    days: Dict[str, List[RoutineResponse]] = Field(..., description="Routines per weekday up to today")
    weekly_average: int = Field(..., description="Average weekday completion percentage")
