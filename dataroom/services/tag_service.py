"""Tag lookups and find-or-create."""

from typing import Optional

from sqlalchemy.orm import Session

from ..models.data_room import Tag
from ..repositories import TagRepository


def list_tags(db: Session) -> list[Tag]:
    return TagRepository(db).list_all()


def list_tag_names(db: Session) -> list[str]:
    return [tag.name for tag in list_tags(db)]


def find_or_create(db: Session, name: str, color: Optional[str] = None) -> Tag:
    """Return the tag with exactly this name, creating it if needed. Does not commit."""
    repo = TagRepository(db)
    tag = repo.get_by_name(name)
    if tag is None:
        tag = repo.create(name, color)
    return tag


def resolve_tags(db: Session, names: list[str]) -> list[Tag]:
    """Find-or-create each name once, preserving first-seen order."""
    tags: list[Tag] = []
    seen: set[str] = set()
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        tags.append(find_or_create(db, name))
    return tags
