"""
Travel API Backend — Place SQLAlchemy Model
=============================================

What:  ORM model for the `places` table.
Who:   Created and deleted by admins; read by /places and /top-places.

Table Design:
    - image: relative reference returned by the upload sink
      (e.g. "uploads/2024/01/15/<uuid>.jpg"), never the binary itself
    - rating: NUMERIC(3,1), returned to Python as float
    - Likes, comments, and tour schedules cascade on delete, so removing a
      place stays a single DELETE statement
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import TIMESTAMP, ForeignKey, Index, Integer, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from travel_api.database import Base


class Place(Base):
    """A destination curated by an admin."""

    __tablename__ = "places"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    image: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Relative path of the uploaded image",
    )

    # Creator; the admin who added the place
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
    )

    rating: Mapped[float] = mapped_column(
        Numeric(3, 1, asdecimal=False),
        nullable=False,
        default=0.0,
        server_default=text("0.0"),
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # /places orders by created_at DESC
    __table_args__ = (
        Index("idx_places_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Place(id={self.id}, title='{self.title}', rating={self.rating})>"
