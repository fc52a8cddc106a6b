"""
Pydantic schemas for calendar schedules.
"""
from datetime import datetime
from pydantic import BaseModel, Field

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class ScheduleCreate(BaseModel):
    title: str = Field(..., description="Schedule title", min_length=1, max_length=255)
    date: str = Field(..., description="Day of the schedule (YYYY-MM-DD)", pattern=DATE_PATTERN)


class ScheduleResponse(BaseModel):
    id: int
    user_id: int
    title: str
    date: str
    created_at: datetime

    class Config:
        from_attributes = True
