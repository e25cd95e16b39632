"""Request-scoped Supabase clients for the metadata store."""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

import httpx
from supabase import AuthError, Client, ClientOptions, create_client

from wedding_gallery.adapters.supabase_album_repository import SupabaseAlbumRepository
from wedding_gallery.adapters.supabase_photo_repository import SupabasePhotoRepository
from wedding_gallery.domain.models import CallerIdentity
from wedding_gallery.errors import UnauthorizedError
from wedding_gallery.services.albums import (
    AlbumRepository,
    IdentityVerifier,
    MetadataStore,
    MetadataStoreFactory,
    PhotoRepository,
)


def bearer_token(authorization: str | None) -> str | None:
    """Return the token from a ``Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@dataclass
class SupabaseIdentityVerifier(IdentityVerifier):
    """Resolves the caller through Supabase auth."""

    client: Client
    authorization: str | None

    def current_user(self) -> CallerIdentity:
        """Return the caller behind the forwarded session."""
        token = bearer_token(self.authorization)
        if token is None:
            raise UnauthorizedError("Unauthorized")
        try:
            response = self.client.auth.get_user(token)
        except AuthError as exc:
            raise UnauthorizedError("Unauthorized") from exc
        user = response.user if response else None
        if user is None:
            raise UnauthorizedError("Unauthorized")
        return CallerIdentity(id=UUID(str(user.id)), email=user.email)


@dataclass
class SupabaseMetadataStore(MetadataStore):
    """Repositories sharing one caller-scoped Supabase client."""

    identity: IdentityVerifier
    albums: AlbumRepository
    photos: PhotoRepository
    http_client: httpx.Client

    def close(self) -> None:
        """Close the connections opened for this caller."""
        self.http_client.close()


@dataclass
class SupabaseMetadataStoreFactory(MetadataStoreFactory):
    """Creates a Supabase client per request with the caller's headers."""

    supabase_url: str
    supabase_key: str
    timeout: float = 30
    client_factory: Callable[[str, str, ClientOptions], Client] = create_client

    def for_caller(self, authorization: str | None) -> SupabaseMetadataStore:
        """Return a store whose queries run as the caller.

        The store owns its HTTP session, so callers must close it when the
        request ends.
        """
        http_client = httpx.Client(timeout=self.timeout)
        options = ClientOptions(httpx_client=http_client)
        if authorization:
            options = ClientOptions(
                headers={**options.headers, "Authorization": authorization},
                httpx_client=http_client,
            )
        try:
            client = self.client_factory(
                self.supabase_url, self.supabase_key, options
            )
        except Exception:
            http_client.close()
            raise
        return SupabaseMetadataStore(
            identity=SupabaseIdentityVerifier(client, authorization),
            albums=SupabaseAlbumRepository(client),
            photos=SupabasePhotoRepository(client),
            http_client=http_client,
        )
