"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

import httpx
from supabase import Client, PostgrestAPIError

from wedding_gallery.domain.models import Photo
from wedding_gallery.errors import PersistenceError
from wedding_gallery.services.albums import PhotoRepository

PHOTO_COLUMNS = (
    "id, album_id, drive_file_id, drive_file_url, thumbnail_url, file_name, "
    "created_at"
)


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo metadata persistence."""

    client: Client

    def create_photo(  # noqa: PLR0913
        self,
        album_id: UUID,
        drive_file_id: str,
        drive_file_url: str,
        thumbnail_url: str,
        file_name: str,
    ) -> Photo:
        """Create a photo metadata row and return it."""
        try:
            response = (
                self.client.table("photos")
                .insert(
                    {
                        "album_id": str(album_id),
                        "drive_file_id": drive_file_id,
                        "drive_file_url": drive_file_url,
                        "thumbnail_url": thumbnail_url,
                        "file_name": file_name,
                    }
                )
                .execute()
            )
        except PostgrestAPIError as exc:
            raise PersistenceError(
                f"Failed to create photo metadata: {exc.message}"
            ) from exc
        except httpx.HTTPError as exc:
            raise PersistenceError(
                "Failed to create photo metadata: database unreachable"
            ) from exc
        if not response.data:
            raise PersistenceError("Failed to create photo metadata")
        return photo_from_row(response.data[0])

    def list_photos(self, album_id: UUID) -> list[Photo]:
        """Return an album's photos in upload order."""
        response = (
            self.client.table("photos")
            .select(PHOTO_COLUMNS)
            .eq("album_id", str(album_id))
            .order("created_at")
            .execute()
        )
        return [photo_from_row(row) for row in response.data or []]

    def count_photos(self, album_id: UUID) -> int:
        """Return the exact number of photos in an album."""
        response = (
            self.client.table("photos")
            .select("id", count="exact")
            .eq("album_id", str(album_id))
            .execute()
        )
        return response.count or 0


def photo_from_row(row: dict[str, object]) -> Photo:
    created_at = row.get("created_at")
    return Photo(
        id=UUID(str(row["id"])),
        album_id=UUID(str(row["album_id"])),
        drive_file_id=str(row["drive_file_id"]),
        drive_file_url=str(row["drive_file_url"]),
        thumbnail_url=str(row.get("thumbnail_url") or row["drive_file_url"]),
        file_name=str(row.get("file_name") or ""),
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
    )
