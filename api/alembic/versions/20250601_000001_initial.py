"""initial schema

Revision ID: 20250601_000001
Revises: 
Create Date: 2025-06-01 00:00:01.000000
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20250601_000001"
down_revision = None
branch_labels = None
depends_on = None


media_type_enum = postgresql.ENUM(
    "movie", "show", "anime", "book", "game", "music_album", name="media_type", create_type=False
)
media_status_enum = postgresql.ENUM(
    "completed",
    "in_progress",
    "planned",
    "on_hold",
    "dropped",
    name="media_status",
    create_type=False,
)


def upgrade() -> None:
    """Create profile, media envelope and category extension tables."""
    media_type_enum.create(op.get_bind(), checkfirst=True)
    media_status_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("uid", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_uid", "users", ["uid"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=False)

    op.create_table(
        "media_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("owner_id", sa.String(length=128), nullable=False),
        sa.Column("media_type", media_type_enum, nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("cover", sa.String(length=1024), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("favorite", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("date_consumed", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", media_status_enum, nullable=True),
        sa.Column("tags", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("external_ids", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("release_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_media_item_rating_range"),
    )
    op.create_index("ix_media_items_owner_id", "media_items", ["owner_id"], unique=False)
    op.create_index("ix_media_items_title", "media_items", ["title"], unique=False)
    op.create_index("ix_media_items_owner_media_type", "media_items", ["owner_id", "media_type"], unique=False)
    op.create_index("ix_media_items_owner_favorite", "media_items", ["owner_id", "favorite"], unique=False)
    op.create_index("ix_media_items_owner_date_consumed", "media_items", ["owner_id", "date_consumed"], unique=False)

    op.create_table(
        "book_items",
        sa.Column("media_item_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("media_items.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("authors", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("page_count", sa.Integer(), nullable=True),
        sa.Column("publisher", sa.String(length=255), nullable=True),
        sa.Column("isbn", sa.String(length=32), nullable=True),
        sa.CheckConstraint("page_count >= 0", name="ck_book_page_count_nonnegative"),
    )

    op.create_table(
        "game_items",
        sa.Column("media_item_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("media_items.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("platforms", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("developers", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("game_publisher", sa.String(length=255), nullable=True),
        sa.Column("hours_played", sa.Float(), nullable=True),
        sa.CheckConstraint("hours_played >= 0", name="ck_game_hours_played_nonnegative"),
    )

    op.create_table(
        "screen_items",
        sa.Column("media_item_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("media_items.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("director", sa.String(length=255), nullable=True),
        sa.Column("runtime_minutes", sa.Integer(), nullable=True),
        sa.Column("season_count", sa.Integer(), nullable=True),
        sa.Column("episode_count", sa.Integer(), nullable=True),
        sa.CheckConstraint("runtime_minutes >= 0", name="ck_screen_runtime_nonnegative"),
        sa.CheckConstraint("season_count >= 0", name="ck_screen_season_count_nonnegative"),
        sa.CheckConstraint("episode_count >= 0", name="ck_screen_episode_count_nonnegative"),
    )

    op.create_table(
        "music_album_items",
        sa.Column("media_item_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("media_items.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("artist", sa.String(length=255), nullable=True),
        sa.Column("music_genre", postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("track_count", sa.Integer(), nullable=True),
        sa.Column("record_label", sa.String(length=255), nullable=True),
        sa.CheckConstraint("track_count >= 0", name="ck_music_album_track_count_nonnegative"),
    )


def downgrade() -> None:
    """Drop media and profile tables and enum types."""
    op.drop_table("music_album_items")
    op.drop_table("screen_items")
    op.drop_table("game_items")
    op.drop_table("book_items")
    op.drop_index("ix_media_items_owner_date_consumed", table_name="media_items")
    op.drop_index("ix_media_items_owner_favorite", table_name="media_items")
    op.drop_index("ix_media_items_owner_media_type", table_name="media_items")
    op.drop_index("ix_media_items_title", table_name="media_items")
    op.drop_index("ix_media_items_owner_id", table_name="media_items")
    op.drop_table("media_items")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_uid", table_name="users")
    op.drop_table("users")
    media_status_enum.drop(op.get_bind(), checkfirst=True)
    media_type_enum.drop(op.get_bind(), checkfirst=True)
