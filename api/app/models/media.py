"""Media item models: a shared envelope plus one extension table per category."""

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, CheckConstraint, DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


JSON_COMPATIBLE = JSON().with_variant(JSONB, "postgresql")


class MediaType(str, enum.Enum):
    """Closed set of media categories a user can log."""
    MOVIE = "movie"
    SHOW = "show"
    ANIME = "anime"
    BOOK = "book"
    GAME = "game"
    MUSIC_ALBUM = "music_album"


class MediaStatus(str, enum.Enum):
    """Tracking statuses for a logged item."""
    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    PLANNED = "planned"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"


SCREEN_MEDIA_TYPES = frozenset({MediaType.MOVIE, MediaType.SHOW, MediaType.ANIME})


class MediaItem(Base):
    """A single logged consumption record owned by one user."""
    __tablename__ = "media_items"
    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_media_item_rating_range"),
        Index("ix_media_items_owner_media_type", "owner_id", "media_type"),
        Index("ix_media_items_owner_favorite", "owner_id", "favorite"),
        Index("ix_media_items_owner_date_consumed", "owner_id", "date_consumed"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    # Persist the enum values (lowercase) instead of names (uppercase) so they match the DB enum
    media_type: Mapped[MediaType] = mapped_column(
        Enum(MediaType, name="media_type", values_callable=lambda enum_cls: [e.value for e in enum_cls]),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    cover: Mapped[str | None] = mapped_column(String(1024))
    rating: Mapped[float | None] = mapped_column(Float)
    favorite: Mapped[bool] = mapped_column(default=False, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    date_consumed: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[MediaStatus | None] = mapped_column(
        Enum(MediaStatus, name="media_status", values_callable=lambda enum_cls: [e.value for e in enum_cls])
    )
    tags: Mapped[list[str]] = mapped_column(JSON_COMPATIBLE, default=list, nullable=False)
    external_ids: Mapped[dict[str, str] | None] = mapped_column(JSON_COMPATIBLE)
    release_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    book: Mapped["BookItem | None"] = relationship(
        back_populates="media_item", uselist=False, cascade="all, delete-orphan"
    )
    game: Mapped["GameItem | None"] = relationship(
        back_populates="media_item", uselist=False, cascade="all, delete-orphan"
    )
    screen: Mapped["ScreenItem | None"] = relationship(
        back_populates="media_item", uselist=False, cascade="all, delete-orphan"
    )
    music_album: Mapped["MusicAlbumItem | None"] = relationship(
        back_populates="media_item", uselist=False, cascade="all, delete-orphan"
    )

    @property
    def details(self) -> "BookItem | GameItem | ScreenItem | MusicAlbumItem | None":
        """Return the extension row matching this item's media type."""
        return getattr(self, details_attribute(self.media_type))


class BookItem(Base):
    """Book-specific extension fields for a media item."""
    __tablename__ = "book_items"
    __table_args__ = (CheckConstraint("page_count >= 0", name="ck_book_page_count_nonnegative"),)

    media_item_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("media_items.id", ondelete="CASCADE"), primary_key=True
    )
    authors: Mapped[list[str]] = mapped_column(JSON_COMPATIBLE, default=list, nullable=False)
    page_count: Mapped[int | None] = mapped_column(Integer)
    publisher: Mapped[str | None] = mapped_column(String(255))
    isbn: Mapped[str | None] = mapped_column(String(32))

    media_item: Mapped[MediaItem] = relationship(back_populates="book")


class GameItem(Base):
    """Game-specific extension fields for a media item."""
    __tablename__ = "game_items"
    __table_args__ = (CheckConstraint("hours_played >= 0", name="ck_game_hours_played_nonnegative"),)

    media_item_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("media_items.id", ondelete="CASCADE"), primary_key=True
    )
    platforms: Mapped[list[str]] = mapped_column(JSON_COMPATIBLE, default=list, nullable=False)
    developers: Mapped[list[str]] = mapped_column(JSON_COMPATIBLE, default=list, nullable=False)
    game_publisher: Mapped[str | None] = mapped_column(String(255))
    hours_played: Mapped[float | None] = mapped_column(Float)

    media_item: Mapped[MediaItem] = relationship(back_populates="game")


class ScreenItem(Base):
    """Movie, show and anime extension fields for a media item."""
    __tablename__ = "screen_items"
    __table_args__ = (
        CheckConstraint("runtime_minutes >= 0", name="ck_screen_runtime_nonnegative"),
        CheckConstraint("season_count >= 0", name="ck_screen_season_count_nonnegative"),
        CheckConstraint("episode_count >= 0", name="ck_screen_episode_count_nonnegative"),
    )

    media_item_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("media_items.id", ondelete="CASCADE"), primary_key=True
    )
    director: Mapped[str | None] = mapped_column(String(255))
    runtime_minutes: Mapped[int | None] = mapped_column(Integer)
    season_count: Mapped[int | None] = mapped_column(Integer)
    episode_count: Mapped[int | None] = mapped_column(Integer)

    media_item: Mapped[MediaItem] = relationship(back_populates="screen")


class MusicAlbumItem(Base):
    """Music album extension fields for a media item."""
    __tablename__ = "music_album_items"
    __table_args__ = (CheckConstraint("track_count >= 0", name="ck_music_album_track_count_nonnegative"),)

    media_item_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("media_items.id", ondelete="CASCADE"), primary_key=True
    )
    artist: Mapped[str | None] = mapped_column(String(255))
    music_genre: Mapped[list[str]] = mapped_column(JSON_COMPATIBLE, default=list, nullable=False)
    track_count: Mapped[int | None] = mapped_column(Integer)
    record_label: Mapped[str | None] = mapped_column(String(255))

    media_item: Mapped[MediaItem] = relationship(back_populates="music_album")


DETAILS_MODELS: dict[MediaType, type[BookItem | GameItem | ScreenItem | MusicAlbumItem]] = {
    MediaType.BOOK: BookItem,
    MediaType.GAME: GameItem,
    MediaType.MOVIE: ScreenItem,
    MediaType.SHOW: ScreenItem,
    MediaType.ANIME: ScreenItem,
    MediaType.MUSIC_ALBUM: MusicAlbumItem,
}


def details_attribute(media_type: MediaType | str) -> str:
    """Name of the `MediaItem` relationship holding a category's extension row."""
    media_type = MediaType(media_type)
    if media_type in SCREEN_MEDIA_TYPES:
        return "screen"
    return media_type.value
