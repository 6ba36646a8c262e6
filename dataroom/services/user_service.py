"""User service: account creation and password verification.

Passwords are hashed with bcrypt via passlib and never stored or logged
in plaintext.
"""

import logging
from typing import Optional

from passlib.hash import bcrypt
from sqlalchemy.orm import Session

from ..database import utcnow
from ..exceptions import ValidationError
from ..models.user import User
from ..repositories import UserRepository
from ..schemas.user import UserCreate

logger = logging.getLogger(__name__)


def create_user(db: Session, data: UserCreate, user_id: Optional[str] = None) -> User:
    """Create a user account.

    Raises ValidationError if the email is already registered.
    """
    repo = UserRepository(db)
    if repo.get_by_email(data.email) is not None:
        raise ValidationError("Email already registered", field="email")

    user = User(
        email=data.email,
        name=data.name,
        password_hash=bcrypt.hash(data.password),
        avatar_url=data.avatar_url,
        is_active=True,
    )
    if user_id:
        user.id = user_id
    repo.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id})
    return user


def get_user(db: Session, user_id: str) -> User:
    return UserRepository(db).get_by_id(user_id)


def list_users(db: Session) -> list[User]:
    return UserRepository(db).list_all()


def verify_password(db: Session, email: str, password: str) -> Optional[User]:
    """Return the active user matching the credentials, or None.

    Records ``last_login`` on success.
    """
    user = UserRepository(db).get_by_email(email)
    if user is None or not user.is_active:
        return None
    if not bcrypt.verify(password, user.password_hash):
        logger.info("Password check failed", extra={"user_id": user.id})
        return None
    user.last_login = utcnow()
    db.commit()
    return user
