"""
Travel API Backend — Agency and TourSchedule Models
=====================================================

What:  ORM models for `agencies` and `tour_schedules`.
Who:   Both are created by admins only. Agencies are listed newest first;
       schedules are only listed per agency, soonest tour first.
"""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import TIMESTAMP, Date, ForeignKey, Index, Integer, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from travel_api.database import Base


class Agency(Base):
    """A travel agency offering tours to places."""

    __tablename__ = "agencies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    contact: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Optional for agencies (unlike places)
    image: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_agencies_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Agency(id={self.id}, name='{self.name}')>"


class TourSchedule(Base):
    """One dated, priced tour of a place run by an agency."""

    __tablename__ = "tour_schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    agency_id: Mapped[int] = mapped_column(
        ForeignKey("agencies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    place_id: Mapped[int] = mapped_column(
        ForeignKey("places.id", ondelete="CASCADE"),
        nullable=False,
    )

    tour_date: Mapped[date] = mapped_column(Date, nullable=False)
    price: Mapped[Optional[float]] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<TourSchedule(id={self.id}, agency_id={self.agency_id}, "
            f"place_id={self.place_id}, tour_date='{self.tour_date}')>"
        )
