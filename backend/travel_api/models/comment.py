"""
Travel API Backend — Comment and CommentReply Models
======================================================

What:  ORM models for `comments` and `comment_replies`.

Threading:
    One level deep: users comment on a place, admins reply to a comment.
    Replies cascade away with their comment, comments with their place.
"""

from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from travel_api.database import Base


class Comment(Base):
    """A user's comment on a place."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    place_id: Mapped[int] = mapped_column(
        ForeignKey("places.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    comment: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_comments_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, place_id={self.place_id}, user_id={self.user_id})>"


class CommentReply(Base):
    """An admin's reply to a comment."""

    __tablename__ = "comment_replies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    comment_id: Mapped[int] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    reply: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<CommentReply(id={self.id}, comment_id={self.comment_id})>"
