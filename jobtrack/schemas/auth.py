"""
Pydantic schemas for authentication endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator


class SignupRequest(BaseModel):
    """Request schema for user signup."""
    full_name: str = Field(..., min_length=1, max_length=200, description="User's full name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, description="User's password (min 8 characters)")
    avatar_url: Optional[str] = Field(default=None, description="Profile image URL (optional)")

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length in bytes (bcrypt limit is 72 bytes)."""
        password_bytes = v.encode("utf-8")
        if len(password_bytes) > 72:
            raise ValueError("Password too long (bcrypt limit 72 bytes)")
        if len(password_bytes) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "full_name": "김취준",
                "email": "jobseeker@example.com",
                "password": "SecurePass123",
                "avatar_url": None
            }
        }


class UserResponse(BaseModel):
    """Authenticated user profile."""
    id: int = Field(..., description="User ID")
    full_name: str = Field(..., description="User's full name")
    email: EmailStr = Field(..., description="User's email address")
    avatar_url: Optional[str] = Field(None, description="Profile image URL")
    created_at: Optional[datetime] = Field(None, description="Signup timestamp")

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str = Field(..., description="JWT bearer token")
    token_type: str = Field("bearer", description="Token type")
