"""Tag API."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..services import tag_service

router = APIRouter(prefix="/api/tags", tags=["tags"])


@router.get("", response_model=List[str])
def list_tags(db: Session = Depends(get_db)):
    """All tag names, alphabetically."""
    return tag_service.list_tag_names(db)
