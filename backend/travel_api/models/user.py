"""
Travel API Backend — User SQLAlchemy Model
============================================

What:  ORM model for the `users` table.
Who:   Written by signup, read by login and by the admin access check.

Lifecycle:
    Created at signup; never updated or deleted by the API.
"""

from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from travel_api.database import Base

# Allowed values for users.role
ROLE_USER = "user"
ROLE_ADMIN = "admin"
VALID_ROLES = (ROLE_USER, ROLE_ADMIN)


class User(Base):
    """An account that can like/comment, or curate content when role='admin'."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(100), nullable=False)

    # UNIQUE: one account per email; duplicates surface as a signup failure
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # bcrypt hash (60 chars); the plaintext is never stored
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ROLE_USER,
        server_default=text("'user'"),
        comment="Account role: user or admin",
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
