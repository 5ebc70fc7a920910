"""
Travel API Backend — Comment Service
======================================

What:  Add comments, add admin replies, and fetch a place's comment threads.
Who:   Called by routes/comments.py.

Thread Query:
    SELECT c.id, c.comment, c.user_id, u.username, c.created_at,
           cr.id AS reply_id, cr.reply, cr.user_id AS reply_user_id,
           ru.username AS reply_username, cr.created_at AS reply_created_at
    FROM comments c
    LEFT JOIN users u            ON c.user_id = u.id
    LEFT JOIN comment_replies cr ON c.id = cr.comment_id
    LEFT JOIN users ru           ON cr.user_id = ru.id
    WHERE c.place_id = :place_id
    ORDER BY c.created_at DESC, cr.created_at ASC

    The result is one row per reply (or one row with NULL reply columns).
    build_threads() folds it into comment → replies, keyed by comment id,
    keeping the row order, so comments stay newest first and replies
    oldest first.
"""

import logging
from typing import Any, Dict, Iterable, List

from sqlalchemy import asc, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from travel_api.exceptions import DatabaseError
from travel_api.models.comment import Comment, CommentReply
from travel_api.models.user import User
from travel_api.schemas.comment import (
    CommentCreate,
    CommentThreadResponse,
    ReplyCreate,
    ReplyResponse,
)
from travel_api.schemas.common import parse_field
from travel_api.services.user_service import user_service

logger = logging.getLogger(__name__)


def build_threads(rows: Iterable[Any]) -> List[CommentThreadResponse]:
    """
    Group flat comment/reply rows into nested threads.

    Rows must expose the labels selected by CommentService.list_comments.
    First appearance of a comment id fixes its position.
    """
    threads: Dict[int, CommentThreadResponse] = {}
    for row in rows:
        thread = threads.get(row.id)
        if thread is None:
            thread = CommentThreadResponse(
                id=row.id,
                comment=row.comment,
                user_id=row.user_id,
                username=row.username,
                created_at=row.created_at,
            )
            threads[row.id] = thread

        if row.reply_id is not None:
            thread.replies.append(
                ReplyResponse(
                    id=row.reply_id,
                    reply=row.reply,
                    user_id=row.reply_user_id,
                    username=row.reply_username,
                    created_at=row.reply_created_at,
                )
            )
    return list(threads.values())


class CommentService:
    """Business logic for comments and replies."""

    async def add_comment(self, db: AsyncSession, payload: CommentCreate) -> None:
        """Insert a comment. Open to any caller."""
        comment = Comment(
            place_id=payload.place_id,
            user_id=payload.user_id,
            comment=payload.comment,
        )
        try:
            db.add(comment)
            await db.flush()
        except SQLAlchemyError as e:
            logger.warning("Add comment error: %s", str(e))
            raise DatabaseError.from_exception("Failed to add comment", e)

        logger.info("Comment %s added on place %s", comment.id, payload.place_id)

    async def add_reply(self, db: AsyncSession, payload: ReplyCreate) -> None:
        """Insert a reply to a comment. Admins only; fields typed after the check."""
        admin_id = await user_service.ensure_admin(
            db, payload.user_id, "Only admins can reply to comments"
        )

        reply = CommentReply(
            comment_id=parse_field("commentId", payload.comment_id, int),
            user_id=admin_id,
            reply=parse_field("reply", payload.reply, str),
        )
        try:
            db.add(reply)
            await db.flush()
        except SQLAlchemyError as e:
            logger.warning("Add reply error: %s", str(e))
            raise DatabaseError.from_exception("Failed to add reply", e)

        logger.info("Reply %s added to comment %s", reply.id, payload.comment_id)

    async def list_comments(
        self, db: AsyncSession, place_id: int
    ) -> List[CommentThreadResponse]:
        """Comment threads for a place, newest comment first."""
        author = aliased(User)
        reply_author = aliased(User)

        query = (
            select(
                Comment.id,
                Comment.comment,
                Comment.user_id,
                author.username.label("username"),
                Comment.created_at,
                CommentReply.id.label("reply_id"),
                CommentReply.reply,
                CommentReply.user_id.label("reply_user_id"),
                reply_author.username.label("reply_username"),
                CommentReply.created_at.label("reply_created_at"),
            )
            .select_from(Comment)
            .outerjoin(author, Comment.user_id == author.id)
            .outerjoin(CommentReply, CommentReply.comment_id == Comment.id)
            .outerjoin(reply_author, CommentReply.user_id == reply_author.id)
            .where(Comment.place_id == place_id)
            .order_by(
                desc(Comment.created_at),
                desc(Comment.id),
                asc(CommentReply.created_at),
                asc(CommentReply.id),
            )
        )
        try:
            result = await db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Fetch comments error: %s", str(e))
            raise DatabaseError.from_exception("Failed to fetch comments", e)

        return build_threads(rows)


# ── Singleton Instance ────────────────────────────────────────────────────
comment_service = CommentService()
