"""
Travel API Backend — Comment Schemas
======================================

What:  Request bodies for comments/replies and the nested thread response.

Thread shape (GET /comments/{placeId}):
    [
        {
            "id": 7, "comment": "Lovely", "user_id": 3, "username": "ana",
            "created_at": "...",
            "replies": [
                {"id": 1, "reply": "Thanks!", "user_id": 1, "username": "admin", "created_at": "..."}
            ]
        }
    ]
    Comments newest first; replies oldest first within a comment.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from travel_api.schemas.common import CamelRequest


class CommentCreate(CamelRequest):
    """POST /add-comment body."""
    place_id: Optional[int] = Field(default=None, alias="placeId")
    comment: Optional[str] = None
    user_id: Optional[int] = Field(default=None, alias="userId")


class ReplyCreate(CamelRequest):
    """POST /add-comment-reply body; typed by CommentService after the admin check."""
    comment_id: Any = Field(default=None, alias="commentId")
    reply: Any = None
    user_id: Any = Field(default=None, alias="userId")


class ReplyResponse(BaseModel):
    id: int
    reply: str
    user_id: int
    username: Optional[str] = None
    created_at: datetime


class CommentThreadResponse(BaseModel):
    id: int
    comment: str
    user_id: int
    username: Optional[str] = None
    created_at: datetime
    replies: List[ReplyResponse] = Field(default_factory=list)
