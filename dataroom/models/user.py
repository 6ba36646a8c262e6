"""User accounts.

Users are referenced by every other table (room creator, permission
holder, uploader, access log actor). Passwords are stored as bcrypt
hashes only.
"""

from sqlalchemy import Column, String, DateTime, Boolean, Text

from ..database import Base, new_id, utcnow


class User(Base):
    """User account."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    password_hash = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    avatar_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    last_login = Column(DateTime(timezone=True), nullable=True)
