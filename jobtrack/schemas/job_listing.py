"""
Pydantic schemas for job listing endpoints.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
COMPANY_SIZE_PATTERN = "^(대기업|중견기업|중소기업|스타트업)$"
LISTING_STATUS_PATTERN = "^(Not applied|Applied)$"


class JobListingBase(BaseModel):
    """Base job listing schema with common fields."""
    company: str = Field(..., description="Company name", min_length=1, max_length=255)
    position: str = Field(..., description="Position / job role", min_length=1, max_length=255)
    location: str = Field("", description="Work location")
    industry: str = Field("", description="Industry")
    company_size: Optional[str] = Field(None, description="Company scale", pattern=COMPANY_SIZE_PATTERN)
    deadline: Optional[str] = Field(None, description="Application deadline (YYYY-MM-DD)", pattern=DATE_PATTERN)
    job_post_url: str = Field("", description="Job posting URL")


class JobListingCreate(JobListingBase):
    """Schema for creating a new job listing."""
    pass


class JobListingUpdate(BaseModel):
    """Schema for updating an existing job listing."""
    company: Optional[str] = Field(None, description="Company name", min_length=1, max_length=255)
    position: Optional[str] = Field(None, description="Position / job role", min_length=1, max_length=255)
    location: Optional[str] = Field(None, description="Work location")
    industry: Optional[str] = Field(None, description="Industry")
    company_size: Optional[str] = Field(None, description="Company scale", pattern=COMPANY_SIZE_PATTERN)
    deadline: Optional[str] = Field(None, description="Application deadline (YYYY-MM-DD)", pattern=DATE_PATTERN)
    job_post_url: Optional[str] = Field(None, description="Job posting URL")
    status: Optional[str] = Field(None, description="Listing status", pattern=LISTING_STATUS_PATTERN)


class JobListingStatusUpdate(BaseModel):
    status: str = Field(..., description="Listing status", pattern=LISTING_STATUS_PATTERN)


class JobListingResponse(JobListingBase):
    """Schema for job listing response."""
    id: int = Field(..., description="Listing ID")
    user_id: int = Field(..., description="Owner user ID")
    status: str = Field(..., description="Listing status")
    d_day: str = Field("-", description="D-day text for the deadline")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "user_id": 1,
                "company": "네이버",
                "position": "백엔드 개발자",
                "location": "성남",
                "industry": "IT·웹·통신",
                "company_size": "대기업",
                "deadline": "2026-03-15",
                "job_post_url": "https://example.com/jobs/1",
                "status": "Not applied",
                "d_day": "D-13",
                "created_at": "2026-03-02T09:00:00Z",
                "updated_at": "2026-03-02T09:00:00Z"
            }
        }


class JobListingTableResponse(BaseModel):
    """Filtered listing table with its filter options."""
    listings: List[JobListingResponse] = Field(..., description="Visible rows")
    total: int = Field(..., description="Rows matching the filters")
    has_more: bool = Field(..., description="More rows hidden by the collapsed view")
    positions: List[str] = Field(..., description="Distinct positions for the position filter")


class JobListingStatusResponse(BaseModel):
    listing: JobListingResponse
    requires_confirmation: bool = Field(
        ..., description="True when the change must be confirmed as a move to applications"
    )


class JobCalendarCellResponse(BaseModel):
    day: int = Field(..., description="Day of month; 0 for blank cells")
    is_current_month: bool
    is_today: bool
    date_str: str = Field("", description="YYYY-MM-DD; empty for blank cells")
    companies: List[str] = Field(default_factory=list, description="All companies due this day")
    preview: List[str] = Field(default_factory=list, description="Companies shown in the cell")
    more_count: int = Field(0, description="Companies not shown in the preview")

    class Config:
        from_attributes = True


class JobCalendarResponse(BaseModel):
    year: int
    month: int
    cells: List[JobCalendarCellResponse]


class CountResponse(BaseModel):
    count: int
