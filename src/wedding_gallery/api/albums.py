"""Read endpoints backing the album pages."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Header, Request

from wedding_gallery.api.serializers import (
    serialize_album,
    serialize_album_summary,
    serialize_photo,
)
from wedding_gallery.services.access_codes import generate_access_code

if TYPE_CHECKING:
    from wedding_gallery.containers import AppContainer

router = APIRouter(prefix="/api", tags=["albums"])


@router.get("/albums")
async def list_albums(
    request: Request,
    search: str | None = None,
    authorization: str | None = Header(default=None),
) -> dict[str, object]:
    """Return albums with photo counts, newest event first."""
    container: AppContainer = request.app.state.container
    summaries = container.album_service.list_albums(authorization, search=search)
    return {"albums": [serialize_album_summary(summary) for summary in summaries]}


@router.get("/albums/{album_id}")
async def album_detail(
    album_id: UUID,
    request: Request,
    authorization: str | None = Header(default=None),
) -> dict[str, object]:
    """Return an album and its photos."""
    container: AppContainer = request.app.state.container
    album, photos = container.album_service.get_album_with_photos(
        album_id, authorization
    )
    return {
        "album": serialize_album(album, include_access_code=False),
        "photos": [serialize_photo(photo) for photo in photos],
    }


@router.get("/access-code")
async def new_access_code() -> dict[str, str]:
    """Return a fresh guest access code for the album form."""
    return {"access_code": generate_access_code()}
