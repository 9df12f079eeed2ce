"""Initial schema: children, screen-time settings, daily usage.

Revision ID: 001
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    # ── children ──────────────────────────────────────────────────────
    op.create_table(
        "children",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("guardian_id", sa.Uuid(), nullable=False),
        sa.Column("guardian_role", sa.String(20), nullable=False, server_default="parent"),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_children_guardian_id", "children", ["guardian_id"])

    # ── screen_time_settings ──────────────────────────────────────────
    op.create_table(
        "screen_time_settings",
        sa.Column(
            "child_id", sa.Uuid(),
            sa.ForeignKey("children.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("daily_limit", sa.Integer(), nullable=False),
        sa.Column("video_limit", sa.Integer(), nullable=False),
        sa.Column("book_limit", sa.Integer(), nullable=False),
        sa.Column("bedtime_start", sa.String(5), nullable=False),
        sa.Column("bedtime_end", sa.String(5), nullable=False),
        sa.Column("weekend_extension", sa.Integer(), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("content_filtering", sa.String(20), nullable=False),
        sa.Column(
            "allowed_categories", postgresql.ARRAY(sa.Text()),
            nullable=False, server_default=sa.text("'{}'::text[]"),
        ),
        sa.Column("reward_system", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("reward_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ── daily_usage ───────────────────────────────────────────────────
    op.create_table(
        "daily_usage",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "child_id", sa.Uuid(),
            sa.ForeignKey("children.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("video_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("book_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_activity", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "categories_accessed", postgresql.ARRAY(sa.Text()),
            nullable=False, server_default=sa.text("'{}'::text[]"),
        ),
        sa.UniqueConstraint("child_id", "date", name="uq_daily_usage_child_date"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("daily_usage")
    op.drop_table("screen_time_settings")
    op.drop_index("ix_children_guardian_id", "children")
    op.drop_table("children")
