"""
Pydantic schemas for news scraps.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class NewsScrapCreate(BaseModel):
    article_url: str = Field(..., description="Article URL", min_length=1)
    headline: str = Field(..., description="Article headline", min_length=1)
    content: str = Field("", description="Notes (rich text HTML)")
    applied_role: Optional[str] = Field(None, description="Role the article relates to")
    industry: Optional[str] = Field(None, description="Industry")
    company_name: Optional[str] = Field(None, description="Company the article covers")


class NewsScrapUpdate(BaseModel):
    article_url: Optional[str] = Field(None, description="Article URL", min_length=1)
    headline: Optional[str] = Field(None, description="Article headline", min_length=1)
    content: Optional[str] = Field(None, description="Notes (rich text HTML)")
    applied_role: Optional[str] = None
    industry: Optional[str] = None
    company_name: Optional[str] = None


class NewsScrapResponse(BaseModel):
    id: int
    user_id: int
    article_url: str
    headline: str
    content: str
    applied_role: Optional[str] = None
    industry: Optional[str] = None
    company_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
