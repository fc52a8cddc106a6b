"""
Pydantic schemas for time blocks and weekly goals.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, model_validator

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
CATEGORY_PATTERN = "^(personal_study|other|routine|interview|meal|exercise|sleep|resume|certificate)$"


class TimeLogCreate(BaseModel):
    category: str = Field(..., description="Time category id", pattern=CATEGORY_PATTERN)
    content: str = Field("", description="What the block was spent on")
    date: str = Field(..., description="Day of the block (YYYY-MM-DD)", pattern=DATE_PATTERN)
    start_hour: int = Field(..., ge=0, le=23, description="First hour of the block")
    end_hour: int = Field(..., ge=0, le=23, description="Hour the block ends")

    @model_validator(mode="after")
    def check_hours(self):
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be after start_hour")
        return self


class TimeLogUpdate(BaseModel):
    category: Optional[str] = Field(None, description="Time category id", pattern=CATEGORY_PATTERN)
    content: Optional[str] = None
    date: Optional[str] = Field(None, description="Day of the block (YYYY-MM-DD)", pattern=DATE_PATTERN)
    start_hour: Optional[int] = Field(None, ge=0, le=23)
    end_hour: Optional[int] = Field(None, ge=0, le=23)


class TimeLogResponse(BaseModel):
    id: int
    user_id: int
    category: str
    category_label: Optional[str] = None
    content: str
    date: str
    start_hour: int
    end_hour: int
    created_at: datetime

    class Config:
        from_attributes = True


class WeeklyGoalUpsert(BaseModel):
    year_month: str = Field(..., description="Month (YYYY-MM)", pattern=r"^\d{4}-\d{2}$")
    week: int = Field(..., ge=1, le=4, description="Week of the month")
    goal: str = Field(..., description="Goal text")


class WeeklyGoalResponse(BaseModel):
    id: int
    user_id: int
    year_month: str
    week: int
    goal: str
    updated_at: datetime

    class Config:
        from_attributes = True
