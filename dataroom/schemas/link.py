"""Shared link schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .common import CamelModel

LINK_RIGHTS = ("view", "download")


class SharedLinkCreate(CamelModel):
    created_by: str
    rights: List[str] = ["view"]
    max_uses: Optional[int] = Field(None, gt=0)
    expires_at: Optional[datetime] = None
    password: Optional[str] = Field(None, min_length=4)

    @field_validator('rights')
    @classmethod
    def validate_rights(cls, v: List[str]) -> List[str]:
        rights = sorted({r.strip().lower() for r in v})
        if not rights:
            raise ValueError("at least one right is required")
        unknown = [r for r in rights if r not in LINK_RIGHTS]
        if unknown:
            raise ValueError(f"unknown rights {unknown}; allowed: {list(LINK_RIGHTS)}")
        return rights


class SharedLinkResponse(CamelModel):
    id: str
    data_room_id: str
    token: str
    max_uses: Optional[int] = None
    current_uses: int
    expires_at: Optional[datetime] = None
    rights: List[str]
    created_by: str
    is_active: bool
    created_at: Optional[datetime] = None
    last_used_at: Optional[datetime] = None
    password_protected: bool = False


class SharedLinkAccess(CamelModel):
    password: Optional[str] = None


class SharedLinkAccessResponse(CamelModel):
    """What a link holder is allowed to see."""
    data_room_id: str
    name: str
    description: Optional[str] = None
    rights: List[str]
