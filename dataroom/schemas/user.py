"""User schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel, strip_required


class UserCreate(CamelModel):
    """Schema for creating a user account."""
    email: str
    name: str
    password: str = Field(..., min_length=8)
    avatar_url: Optional[str] = None

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Valid email address required")
        return v

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v)


class UserResponse(CamelModel):
    """Public view of a user (never includes the password hash)."""
    id: str
    email: str
    name: str
    is_active: bool
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
