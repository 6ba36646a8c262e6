"""Repository for tags."""

from typing import List, Optional

from ..models.data_room import Tag


class TagRepository:

    def __init__(self, db):
        self.db = db

    def get_by_name(self, name: str) -> Optional[Tag]:
        return self.db.query(Tag).filter(Tag.name == name).first()

    def list_all(self) -> List[Tag]:
        return self.db.query(Tag).order_by(Tag.name).all()

    def create(self, name: str, color: Optional[str] = None) -> Tag:
        tag = Tag(name=name, color=color)
        self.db.add(tag)
        self.db.flush()
        return tag
