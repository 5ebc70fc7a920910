"""Create travel schema

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates users, places, agencies, tour_schedules, likes, comments
       and comment_replies.
How:   Integer identity keys, TIMESTAMP WITH TIME ZONE, ON DELETE CASCADE
       from every child table to places/agencies/comments.

Rollback: downgrade() drops all seven tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    # ── Accounts ──────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column(
            "role",
            sa.String(20),
            server_default=sa.text("'user'"),
            nullable=False,
            comment="Account role: user or admin",
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    # ── Catalog ───────────────────────────────────────────────────────────
    op.create_table(
        "places",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column(
            "image",
            sa.String(255),
            nullable=False,
            comment="Relative path of the uploaded image",
        ),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column(
            "rating",
            sa.Numeric(3, 1),
            server_default=sa.text("0.0"),
            nullable=False,
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    # Listing order for /places
    op.create_index("idx_places_created_at", "places", [sa.text("created_at DESC")])

    op.create_table(
        "agencies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("contact", sa.String(255), nullable=True),
        sa.Column("image", sa.String(255), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_agencies_created_at", "agencies", [sa.text("created_at DESC")])

    op.create_table(
        "tour_schedules",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("agency_id", sa.Integer(), nullable=False),
        sa.Column("place_id", sa.Integer(), nullable=False),
        sa.Column("tour_date", sa.Date(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["agency_id"], ["agencies.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["place_id"], ["places.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_tour_schedules_agency_id", "tour_schedules", ["agency_id"])

    # ── Engagement ────────────────────────────────────────────────────────
    op.create_table(
        "likes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("place_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["place_id"], ["places.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        # The like toggle relies on this constraint
        sa.UniqueConstraint("place_id", "user_id", name="uq_likes_place_user"),
    )

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("place_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["place_id"], ["places.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_comments_place_id", "comments", ["place_id"])
    op.create_index("idx_comments_created_at", "comments", [sa.text("created_at DESC")])

    op.create_table(
        "comment_replies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("comment_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("reply", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_comment_replies_comment_id", "comment_replies", ["comment_id"])


def downgrade() -> None:
    """Drop every table, children first. All data is lost."""
    op.drop_index("ix_comment_replies_comment_id", table_name="comment_replies")
    op.drop_table("comment_replies")
    op.drop_index("idx_comments_created_at", table_name="comments")
    op.drop_index("ix_comments_place_id", table_name="comments")
    op.drop_table("comments")
    op.drop_table("likes")
    op.drop_index("ix_tour_schedules_agency_id", table_name="tour_schedules")
    op.drop_table("tour_schedules")
    op.drop_index("idx_agencies_created_at", table_name="agencies")
    op.drop_table("agencies")
    op.drop_index("idx_places_created_at", table_name="places")
    op.drop_table("places")
    op.drop_table("users")
