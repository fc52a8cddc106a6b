"""
Pydantic schemas for application endpoints.
"""
from typing import Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
STATUS_PATTERN = "^(active|reviewing|rejected|accepted|인적성|AI면접|1차면접|2차면접)$"
STAGE_PATTERN = "^(서류 접수|서류합격|1차면접 합격|2차면접 합격|최종합격)$"


class ApplicationCreate(BaseModel):
    """Schema for creating a new application."""
    company: str = Field(..., description="Company name", min_length=1, max_length=255)
    position: str = Field(..., description="Position applied for", min_length=1, max_length=255)
    stage: str = Field("서류 접수", description="Current hiring stage; progress follows it", pattern=STAGE_PATTERN)
    deadline: Optional[str] = Field(None, description="Next deadline (YYYY-MM-DD)", pattern=DATE_PATTERN)
    applied_at: Optional[datetime] = Field(None, description="Application timestamp; now when omitted")
    status: str = Field("active", description="Application status", pattern=STATUS_PATTERN)
    url: Optional[str] = Field(None, description="Job posting URL")


class ApplicationUpdate(BaseModel):
    """Schema for a partial application update."""
    company: Optional[str] = Field(None, description="Company name", min_length=1, max_length=255)
    position: Optional[str] = Field(None, description="Position applied for", min_length=1, max_length=255)
    deadline: Optional[str] = Field(None, description="Next deadline (YYYY-MM-DD)", pattern=DATE_PATTERN)
    status: Optional[str] = Field(None, description="Application status", pattern=STATUS_PATTERN)
    url: Optional[str] = Field(None, description="Job posting URL")


class ProgressUpdate(BaseModel):
    stage: str = Field(..., description="Stage label to move to", pattern=STAGE_PATTERN)


class DeadlineUpdate(BaseModel):
    deadline: Optional[str] = Field(
        None, description="New deadline (YYYY-MM-DD); null marks the application under review", pattern=DATE_PATTERN
    )


class DDayBadgeResponse(BaseModel):
    text: str = Field(..., description="Badge text")
    color: str = Field(..., description="Badge colour token")

    class Config:
        from_attributes = True


class ApplicationResponse(BaseModel):
    """Schema for application response."""
    id: int = Field(..., description="Application ID")
    user_id: int = Field(..., description="Owner user ID")
    company: str
    position: str
    stage: str
    progress: int
    deadline: Optional[str] = None
    applied_at: datetime
    status: str
    url: Optional[str] = None
    badge: Optional[DDayBadgeResponse] = Field(None, description="D-day badge for the board")
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "user_id": 1,
                "company": "카카오",
                "position": "프론트엔드 개발자",
                "stage": "서류합격",
                "progress": 25,
                "deadline": "2026-03-05",
                "applied_at": "2026-03-02T10:00:00+09:00",
                "status": "active",
                "url": "https://example.com/jobs/2",
                "badge": {"text": "D-3", "color": "rose"},
                "created_at": "2026-03-02T10:00:00+09:00",
                "updated_at": "2026-03-02T10:00:00+09:00"
            }
        }


class ApplicationBucketResponse(BaseModel):
    items: List[ApplicationResponse] = Field(..., description="Visible applications")
    total: int = Field(..., description="Applications in the bucket")
    has_more: bool = Field(..., description="Bucket is longer than its preview")
    hidden_count: int = Field(..., description="Applications hidden by the preview")


class ApplicationBoardResponse(BaseModel):
    """Applications split into active / accepted / rejected."""
    active: ApplicationBucketResponse
    accepted: ApplicationBucketResponse
    rejected: ApplicationBucketResponse
    positions: List[str] = Field(..., description="Distinct positions for the position filter")


class StatusCountResponse(BaseModel):
    counts: Dict[str, int] = Field(..., description="Applications per status")
