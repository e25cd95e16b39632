"""Album metadata access for the gallery pages."""

from contextlib import closing
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from wedding_gallery.domain.models import Album, AlbumSummary, CallerIdentity, Photo
from wedding_gallery.errors import NotFoundError


class IdentityVerifier(Protocol):
    """Resolves the caller behind a forwarded session."""

    def current_user(self) -> CallerIdentity:
        """Return the authenticated caller or raise ``UnauthorizedError``."""


class AlbumRepository(Protocol):
    """Persistence interface for albums."""

    def create_album(  # noqa: PLR0913
        self,
        couple_names: str,
        event_date: date,
        cover_photo_url: str,
        cover_photo_drive_id: str,
        drive_folder_id: str,
        access_code: str,
        created_by: UUID,
    ) -> Album:
        """Insert an album row and return it."""

    def get_album(self, album_id: UUID) -> Album | None:
        """Return an album by id, if present."""

    def list_albums(self, search: str | None = None) -> list[Album]:
        """Return albums, newest event first."""


class PhotoRepository(Protocol):
    """Persistence interface for photos."""

    def create_photo(  # noqa: PLR0913
        self,
        album_id: UUID,
        drive_file_id: str,
        drive_file_url: str,
        thumbnail_url: str,
        file_name: str,
    ) -> Photo:
        """Insert a photo row and return it."""

    def list_photos(self, album_id: UUID) -> list[Photo]:
        """Return the photos of an album."""

    def count_photos(self, album_id: UUID) -> int:
        """Return the number of photos in an album."""


class MetadataStore(Protocol):
    """Metadata store scoped to one caller's session."""

    identity: IdentityVerifier
    albums: AlbumRepository
    photos: PhotoRepository

    def close(self) -> None:
        """Release the connections held for this caller."""


class MetadataStoreFactory(Protocol):
    """Builds request-scoped metadata stores."""

    def for_caller(self, authorization: str | None) -> MetadataStore:
        """Return a store that forwards the caller's Authorization header."""


@dataclass
class AlbumService:
    """Read-side queries used by the album pages."""

    store_factory: MetadataStoreFactory

    def list_albums(
        self, authorization: str | None = None, search: str | None = None
    ) -> list[AlbumSummary]:
        """Return albums with their photo counts."""
        cleaned = search.strip() if search else None
        with closing(self.store_factory.for_caller(authorization)) as store:
            return [
                AlbumSummary(
                    album=album, photo_count=store.photos.count_photos(album.id)
                )
                for album in store.albums.list_albums(search=cleaned or None)
            ]

    def get_album_with_photos(
        self, album_id: UUID, authorization: str | None = None
    ) -> tuple[Album, list[Photo]]:
        """Return an album and its photos."""
        with closing(self.store_factory.for_caller(authorization)) as store:
            album = store.albums.get_album(album_id)
            if album is None:
                raise NotFoundError("Album not found")
            return album, store.photos.list_photos(album_id)
