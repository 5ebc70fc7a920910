"""
Travel API Backend — Like SQLAlchemy Model
============================================

What:  ORM model for the `likes` table.

Invariant:
    (place_id, user_id) is UNIQUE. The like toggle relies on this constraint
    instead of reading first: it inserts, and a unique violation means the
    pair already exists and should be removed.
"""

from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP, ForeignKey, Integer, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from travel_api.database import Base


class Like(Base):
    """A user's like on a place; presence of the row is the liked state."""

    __tablename__ = "likes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    place_id: Mapped[int] = mapped_column(
        ForeignKey("places.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        UniqueConstraint("place_id", "user_id", name="uq_likes_place_user"),
    )

    def __repr__(self) -> str:
        return f"<Like(place_id={self.place_id}, user_id={self.user_id})>"
