"""AI query schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import field_validator

from .common import CamelModel, strip_required


class AiQueryCreate(CamelModel):
    user_id: str
    query_text: str

    @field_validator('query_text')
    @classmethod
    def validate_query(cls, v: str) -> str:
        return strip_required(v)


class AiQueryResponse(CamelModel):
    id: str
    user_id: str
    data_room_id: str
    query_text: str
    response_text: Optional[str] = None
    files_referenced: Optional[List[str]] = None
    processing_status: str
    processing_time_ms: Optional[int] = None
    created_at: Optional[datetime] = None
