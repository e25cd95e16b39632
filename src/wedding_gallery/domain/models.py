"""Domain models for albums and photos."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller resolved from a Supabase session."""

    id: UUID
    email: str | None = None


@dataclass(frozen=True)
class Album:
    """Represents an album row stored in the database."""

    id: UUID
    couple_names: str
    event_date: date
    cover_photo_url: str | None
    cover_photo_drive_id: str | None
    drive_folder_id: str | None
    access_code: str
    created_by: UUID | None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Photo:
    """Represents a photo row stored in the database."""

    id: UUID
    album_id: UUID
    drive_file_id: str
    drive_file_url: str
    thumbnail_url: str
    file_name: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class AlbumSummary:
    """Album with its photo count for list views."""

    album: Album
    photo_count: int
