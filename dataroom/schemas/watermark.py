"""Watermark schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from .common import CamelModel, strip_required

WatermarkPosition = Literal["center", "top-left", "top-right", "bottom-left", "bottom-right", "diagonal"]


class WatermarkSet(CamelModel):
    user_id: str
    template: str
    position: WatermarkPosition = "center"
    opacity: float = Field(0.3, ge=0.0, le=1.0)

    @field_validator('template')
    @classmethod
    def validate_template(cls, v: str) -> str:
        return strip_required(v)


class WatermarkResponse(CamelModel):
    id: str
    data_room_id: str
    template: str
    position: str
    opacity: float
    is_active: bool
    created_at: Optional[datetime] = None
