"""Album and photo ingestion into Google Drive and Supabase."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from wedding_gallery.domain.models import Album, CallerIdentity
from wedding_gallery.domain.uploads import (
    CreateAlbumRequest,
    DriveFile,
    PhotoBatchResult,
    PhotoUploadOutcome,
    UploadedFile,
)
from wedding_gallery.errors import NotFoundError, PersistenceError, UpstreamWriteError
from wedding_gallery.services.albums import (
    MetadataStore,
    MetadataStoreFactory,
    PhotoRepository,
)

_logger = logging.getLogger(__name__)


class TokenProvider(Protocol):
    """Issues short-lived bearer tokens for Google Drive."""

    async def fetch_access_token(self) -> str:
        """Exchange the configured refresh token for an access token."""


class DriveClient(Protocol):
    """Interface for Google Drive folder and file writes."""

    async def create_folder(
        self, access_token: str, name: str, parent_id: str | None = None
    ) -> str:
        """Create a folder and return its id."""

    async def upload_file(  # noqa: PLR0913
        self,
        access_token: str,
        data: bytes,
        name: str,
        mime_type: str,
        folder_id: str | None = None,
    ) -> DriveFile:
        """Upload a file and make it publicly readable."""


@dataclass(frozen=True)
class CallerSession:
    """An authenticated caller together with its scoped metadata store."""

    store: MetadataStore
    caller: CallerIdentity

    def close(self) -> None:
        self.store.close()


@dataclass
class IngestionService:
    """Drives album creation and photo uploads end to end."""

    store_factory: MetadataStoreFactory
    token_provider: TokenProvider
    drive_client: DriveClient

    def authenticate(self, authorization: str | None) -> CallerSession:
        """Resolve the caller before any remote call is made."""
        store = self.store_factory.for_caller(authorization)
        try:
            caller = store.identity.current_user()
        except Exception:
            store.close()
            raise
        return CallerSession(store=store, caller=caller)

    async def create_album(
        self, session: CallerSession, request: CreateAlbumRequest
    ) -> Album:
        """Create the Drive folder, upload the cover and insert the album row.

        Steps run in order and the first failure aborts the rest. Remote
        resources created before the failure are left in place.
        """
        _logger.info("Creating album: %s", request.couple_names)
        access_token = await self.token_provider.fetch_access_token()
        folder_id = await self.drive_client.create_folder(
            access_token, request.folder_name
        )
        _logger.info("Folder created: %s", folder_id)
        cover = request.cover_photo
        cover_file = await self.drive_client.upload_file(
            access_token,
            data=cover.data,
            name=cover.name,
            mime_type=cover.content_type,
            folder_id=folder_id,
        )
        _logger.info("Cover photo uploaded: %s", cover_file.file_id)
        album = session.store.albums.create_album(
            couple_names=request.couple_names,
            event_date=request.event_date,
            cover_photo_url=cover_file.content_url,
            cover_photo_drive_id=cover_file.file_id,
            drive_folder_id=folder_id,
            access_code=request.access_code,
            created_by=session.caller.id,
        )
        _logger.info("Album created in database: %s", album.id)
        return album

    async def upload_photos(
        self, session: CallerSession, album_id: UUID, files: list[UploadedFile]
    ) -> PhotoBatchResult:
        """Upload photos into an album's folder, skipping files that fail."""
        _logger.info("Uploading photos to album: %s", album_id)
        album = session.store.albums.get_album(album_id)
        if album is None or not album.drive_folder_id:
            raise NotFoundError("Album not found")
        access_token = await self.token_provider.fetch_access_token()
        result = PhotoBatchResult()
        for upload in files:
            outcome = await self._ingest_photo(
                session.store.photos, access_token, album, upload
            )
            result.add(outcome)
        _logger.info(
            "Photos uploaded: %s of %s (album=%s)",
            len(result.photos),
            len(files),
            album_id,
        )
        return result

    async def _ingest_photo(
        self,
        photos: PhotoRepository,
        access_token: str,
        album: Album,
        upload: UploadedFile,
    ) -> PhotoUploadOutcome:
        _logger.info("Uploading file: %s", upload.name)
        try:
            drive_file = await self.drive_client.upload_file(
                access_token,
                data=upload.data,
                name=upload.name,
                mime_type=upload.content_type,
                folder_id=album.drive_folder_id,
            )
        except UpstreamWriteError as exc:
            _logger.warning("Skipping %s: %s", upload.name, exc.message)
            return PhotoUploadOutcome(file_name=upload.name, error=exc.message)
        try:
            photo = photos.create_photo(
                album_id=album.id,
                drive_file_id=drive_file.file_id,
                drive_file_url=drive_file.content_url,
                thumbnail_url=drive_file.content_url,
                file_name=upload.name,
            )
        except PersistenceError as exc:
            _logger.error(
                "Photo database error for %s (drive_file_id=%s): %s",
                upload.name,
                drive_file.file_id,
                exc.message,
            )
            return PhotoUploadOutcome(file_name=upload.name, error=exc.message)
        return PhotoUploadOutcome(file_name=upload.name, photo=photo)
