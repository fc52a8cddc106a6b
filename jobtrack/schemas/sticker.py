"""
Pydantic schemas for stickers.
"""
from datetime import datetime
from pydantic import BaseModel, Field


class StickerCreate(BaseModel):
    text: str = Field(..., description="Sticker text", min_length=1, max_length=500)


class StickerUpdate(BaseModel):
    text: str = Field(..., description="Sticker text", min_length=1, max_length=500)


class StickerResponse(BaseModel):
    id: int
    user_id: int
    text: str
    is_completed: bool
    created_at: datetime

    class Config:
        from_attributes = True
