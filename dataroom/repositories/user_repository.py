"""Repository for user accounts."""

from typing import List, Optional

from ..exceptions import UserNotFoundError
from ..models.user import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    model_class = User
    not_found_error = UserNotFoundError

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at).all()

    def count(self) -> int:
        return self.db.query(User).count()
