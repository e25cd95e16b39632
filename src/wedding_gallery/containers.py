"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from wedding_gallery.adapters.google_drive_client import HttpxGoogleDriveClient
from wedding_gallery.adapters.google_oauth_client import GoogleOAuthTokenProvider
from wedding_gallery.adapters.supabase_metadata_store import (
    SupabaseMetadataStoreFactory,
)
from wedding_gallery.config import Settings
from wedding_gallery.services.albums import AlbumService
from wedding_gallery.services.ingestion import IngestionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ingestion_service: IngestionService
    album_service: AlbumService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store_factory = SupabaseMetadataStoreFactory(
        supabase_url=resolved_settings.supabase_url,
        supabase_key=resolved_settings.supabase_anon_key,
        timeout=resolved_settings.http_timeout_seconds,
    )
    token_provider = GoogleOAuthTokenProvider.create(
        client_id=resolved_settings.google_drive_client_id,
        client_secret=resolved_settings.google_drive_client_secret,
        refresh_token=resolved_settings.google_drive_refresh_token,
        token_url=resolved_settings.google_oauth_token_url,
        timeout=resolved_settings.http_timeout_seconds,
    )
    drive_client = HttpxGoogleDriveClient.create(
        api_url=resolved_settings.google_drive_api_url,
        upload_url=resolved_settings.google_drive_upload_url,
        timeout=resolved_settings.http_timeout_seconds,
    )
    ingestion_service = IngestionService(
        store_factory=store_factory,
        token_provider=token_provider,
        drive_client=drive_client,
    )
    album_service = AlbumService(store_factory)

    async def close_resources() -> None:
        await token_provider.close()
        await drive_client.close()

    return AppContainer(
        settings=resolved_settings,
        ingestion_service=ingestion_service,
        album_service=album_service,
        close_resources=close_resources,
    )
