"""
Travel API Backend — ORM Models
================================

Importing this package registers every table with `Base.metadata`
(Alembic autogenerate and the test suite's create_all() rely on it).
"""

from travel_api.models.user import User
from travel_api.models.place import Place
from travel_api.models.agency import Agency, TourSchedule
from travel_api.models.like import Like
from travel_api.models.comment import Comment, CommentReply

__all__ = [
    "User",
    "Place",
    "Agency",
    "TourSchedule",
    "Like",
    "Comment",
    "CommentReply",
]
