"""Ingestion endpoint called by the admin dashboard."""

from __future__ import annotations

import logging
from contextlib import closing
from typing import TYPE_CHECKING

from fastapi import APIRouter, Header, Request

from wedding_gallery.api.forms import parse_create_album, parse_upload_photos
from wedding_gallery.api.serializers import serialize_album, serialize_photo
from wedding_gallery.errors import InvalidRequestError

if TYPE_CHECKING:
    from wedding_gallery.containers import AppContainer
    from wedding_gallery.services.ingestion import CallerSession

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])


@router.post("/google-drive-upload")
async def google_drive_upload(
    request: Request, authorization: str | None = Header(default=None)
) -> dict[str, object]:
    """Create an album or upload photos, depending on the form's action."""
    container: AppContainer = request.app.state.container
    service = container.ingestion_service
    with closing(service.authenticate(authorization)) as session:
        return await _dispatch(request, container, session)


async def _dispatch(
    request: Request, container: AppContainer, session: CallerSession
) -> dict[str, object]:
    service = container.ingestion_service
    async with request.form() as form:
        action = form.get("action")
        _logger.info("Action: %s (caller=%s)", action, session.caller.id)
        if action == "create_album":
            album_request = await parse_create_album(form)
            album = await service.create_album(session, album_request)
            return {"success": True, "album": serialize_album(album)}
        if action == "upload_photos":
            album_id, files = await parse_upload_photos(
                form, container.settings.max_upload_files
            )
            result = await service.upload_photos(session, album_id, files)
            return {
                "success": True,
                "photos": [serialize_photo(photo) for photo in result.photos],
            }
    raise InvalidRequestError("Invalid action")
