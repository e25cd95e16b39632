"""Supabase-backed album repository."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

import httpx
from supabase import Client, PostgrestAPIError

from wedding_gallery.domain.models import Album
from wedding_gallery.errors import PersistenceError
from wedding_gallery.services.albums import AlbumRepository

ALBUM_COLUMNS = (
    "id, couple_names, event_date, cover_photo_url, cover_photo_drive_id, "
    "drive_folder_id, access_code, created_by, created_at"
)


@dataclass
class SupabaseAlbumRepository(AlbumRepository):
    """Supabase implementation for album persistence."""

    client: Client

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
        try:
            response = (
                self.client.table("albums")
                .insert(
                    {
                        "couple_names": couple_names,
                        "event_date": event_date.isoformat(),
                        "cover_photo_url": cover_photo_url,
                        "cover_photo_drive_id": cover_photo_drive_id,
                        "drive_folder_id": drive_folder_id,
                        "access_code": access_code,
                        "created_by": str(created_by),
                    }
                )
                .execute()
            )
        except PostgrestAPIError as exc:
            raise PersistenceError(f"Failed to create album: {exc.message}") from exc
        except httpx.HTTPError as exc:
            raise PersistenceError(
                "Failed to create album: database unreachable"
            ) from exc
        if not response.data:
            raise PersistenceError("Failed to create album")
        return album_from_row(response.data[0])

    def get_album(self, album_id: UUID) -> Album | None:
        """Return an album by id, if present."""
        response = (
            self.client.table("albums")
            .select(ALBUM_COLUMNS)
            .eq("id", str(album_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return album_from_row(response.data[0])
        return None

    def list_albums(self, search: str | None = None) -> list[Album]:
        """Return albums ordered by event date, newest first."""
        query = self.client.table("albums").select(ALBUM_COLUMNS)
        if search:
            query = query.ilike("couple_names", f"%{search}%")
        response = query.order("event_date", desc=True).execute()
        return [album_from_row(row) for row in response.data or []]


def album_from_row(row: dict[str, object]) -> Album:
    created_by = row.get("created_by")
    created_at = row.get("created_at")
    return Album(
        id=UUID(str(row["id"])),
        couple_names=str(row["couple_names"]),
        event_date=date.fromisoformat(str(row["event_date"])),
        cover_photo_url=row.get("cover_photo_url"),
        cover_photo_drive_id=row.get("cover_photo_drive_id"),
        drive_folder_id=row.get("drive_folder_id"),
        access_code=str(row.get("access_code") or ""),
        created_by=UUID(str(created_by)) if created_by else None,
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
    )
