"""Shared schema base.

The API speaks camelCase JSON (``fileName``, ``uploadedBy``); Python code
uses snake_case attributes. Both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement body."""
    message: str


def strip_required(v: str) -> str:
    """Shared validator body for required, non-blank names."""
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v
