"""JSON shapes returned by the API, mirroring the database rows."""

from wedding_gallery.domain.models import Album, AlbumSummary, Photo


def serialize_album(
    album: Album, include_access_code: bool = True
) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": str(album.id),
        "couple_names": album.couple_names,
        "event_date": album.event_date.isoformat(),
        "cover_photo_url": album.cover_photo_url,
        "cover_photo_drive_id": album.cover_photo_drive_id,
        "drive_folder_id": album.drive_folder_id,
        "access_code": album.access_code,
        "created_by": str(album.created_by) if album.created_by else None,
        "created_at": album.created_at.isoformat() if album.created_at else None,
    }
    if not include_access_code:
        payload.pop("access_code")
    return payload


def serialize_album_summary(summary: AlbumSummary) -> dict[str, object]:
    payload = serialize_album(summary.album, include_access_code=False)
    payload["photo_count"] = summary.photo_count
    return payload


def serialize_photo(photo: Photo) -> dict[str, object]:
    return {
        "id": str(photo.id),
        "album_id": str(photo.album_id),
        "drive_file_id": photo.drive_file_id,
        "drive_file_url": photo.drive_file_url,
        "thumbnail_url": photo.thumbnail_url,
        "file_name": photo.file_name,
        "created_at": photo.created_at.isoformat() if photo.created_at else None,
    }
