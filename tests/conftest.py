"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest

from wedding_gallery.adapters.google_drive_client import public_content_url
from wedding_gallery.config import Settings
from wedding_gallery.containers import AppContainer
from wedding_gallery.domain.models import Album, CallerIdentity, Photo
from wedding_gallery.domain.uploads import DriveFile
from wedding_gallery.errors import (
    PersistenceError,
    UnauthorizedError,
    UpstreamWriteError,
)
from wedding_gallery.services.albums import (
    AlbumRepository,
    AlbumService,
    IdentityVerifier,
    MetadataStore,
    MetadataStoreFactory,
    PhotoRepository,
)
from wedding_gallery.services.ingestion import (
    DriveClient,
    IngestionService,
    TokenProvider,
)

VALID_AUTHORIZATION = "Bearer valid-session"
CALLER = CallerIdentity(id=UUID("11111111-1111-4111-8111-111111111111"))


@dataclass
class InMemoryAlbumRepository(AlbumRepository):
    """In-memory album repository for tests."""

    albums: dict[UUID, Album] = field(default_factory=dict)
    insert_error: Exception | None = None

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
        if self.insert_error is not None:
            raise self.insert_error
        album = Album(
            id=uuid4(),
            couple_names=couple_names,
            event_date=event_date,
            cover_photo_url=cover_photo_url,
            cover_photo_drive_id=cover_photo_drive_id,
            drive_folder_id=drive_folder_id,
            access_code=access_code,
            created_by=created_by,
            created_at=datetime.now(tz=UTC),
        )
        self.albums[album.id] = album
        return album

    def get_album(self, album_id: UUID) -> Album | None:
        return self.albums.get(album_id)

    def list_albums(self, search: str | None = None) -> list[Album]:
        albums = [
            album
            for album in self.albums.values()
            if not search or search.lower() in album.couple_names.lower()
        ]
        return sorted(albums, key=lambda album: album.event_date, reverse=True)


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo repository that can reject chosen file names."""

    photos: dict[UUID, Photo] = field(default_factory=dict)
    reject_file_names: set[str] = field(default_factory=set)

    def create_photo(  # noqa: PLR0913
        self,
        album_id: UUID,
        drive_file_id: str,
        drive_file_url: str,
        thumbnail_url: str,
        file_name: str,
    ) -> Photo:
        if file_name in self.reject_file_names:
            raise PersistenceError("Failed to create photo metadata")
        photo = Photo(
            id=uuid4(),
            album_id=album_id,
            drive_file_id=drive_file_id,
            drive_file_url=drive_file_url,
            thumbnail_url=thumbnail_url,
            file_name=file_name,
        )
        self.photos[photo.id] = photo
        return photo

    def list_photos(self, album_id: UUID) -> list[Photo]:
        return [photo for photo in self.photos.values() if photo.album_id == album_id]

    def count_photos(self, album_id: UUID) -> int:
        return len(self.list_photos(album_id))


@dataclass
class FakeIdentityVerifier(IdentityVerifier):
    """Accepts only the well-known test session."""

    authorization: str | None

    def current_user(self) -> CallerIdentity:
        if self.authorization != VALID_AUTHORIZATION:
            raise UnauthorizedError("Unauthorized")
        return CALLER


@dataclass
class InMemoryMetadataStore(MetadataStore):
    identity: IdentityVerifier
    albums: AlbumRepository
    photos: PhotoRepository
    closed: bool = False

    def close(self) -> None:
        self.closed = True


@dataclass
class InMemoryMetadataStoreFactory(MetadataStoreFactory):
    """Hands out stores that share the same in-memory tables."""

    albums: InMemoryAlbumRepository
    photos: InMemoryPhotoRepository
    authorizations: list[str | None] = field(default_factory=list)
    stores: list[InMemoryMetadataStore] = field(default_factory=list)

    def for_caller(self, authorization: str | None) -> InMemoryMetadataStore:
        self.authorizations.append(authorization)
        store = InMemoryMetadataStore(
            identity=FakeIdentityVerifier(authorization),
            albums=self.albums,
            photos=self.photos,
        )
        self.stores.append(store)
        return store


@dataclass
class FakeTokenProvider(TokenProvider):
    """Token provider that counts calls and can fail on demand."""

    token: str = "drive-access-token"
    error: Exception | None = None
    calls: int = 0

    async def fetch_access_token(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.token


@dataclass
class FakeDriveClient(DriveClient):
    """Records Drive writes and fails uploads for chosen file names."""

    folders: list[tuple[str, str]] = field(default_factory=list)
    uploads: list[dict[str, object]] = field(default_factory=list)
    fail_file_names: set[str] = field(default_factory=set)
    folder_error: Exception | None = None

    @property
    def calls(self) -> int:
        return len(self.folders) + len(self.uploads)

    async def create_folder(
        self, access_token: str, name: str, parent_id: str | None = None
    ) -> str:
        if self.folder_error is not None:
            raise self.folder_error
        folder_id = f"folder-{len(self.folders) + 1}"
        self.folders.append((folder_id, name))
        return folder_id

    async def upload_file(  # noqa: PLR0913
        self,
        access_token: str,
        data: bytes,
        name: str,
        mime_type: str,
        folder_id: str | None = None,
    ) -> DriveFile:
        if name in self.fail_file_names:
            raise UpstreamWriteError("Failed to upload file to Google Drive")
        file_id = f"file-{len(self.uploads) + 1}"
        self.uploads.append(
            {
                "file_id": file_id,
                "name": name,
                "mime_type": mime_type,
                "folder_id": folder_id,
                "size": len(data),
                "access_token": access_token,
            }
        )
        return DriveFile(
            file_id=file_id,
            view_url=f"https://drive.google.com/file/d/{file_id}/view",
            content_url=public_content_url(file_id),
        )


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None
    count: int | None = None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": []}
    )
    insert_error: Exception | None = None
    insert_failures: dict[int, Exception] = field(default_factory=dict)
    inserts: int = 0
    echo_inserts: bool = False
    count: int | None = None
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    last_count_method: str | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args, count: str | None = None) -> "FakeTable":
        self._action = "select"
        self.last_count_method = count
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.inserts += 1
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def ilike(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        if action == "insert" and self.insert_error is not None:
            raise self.insert_error
        if action == "insert" and self.inserts in self.insert_failures:
            raise self.insert_failures[self.inserts]
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        if action == "insert" and not data and self.echo_inserts:
            data = [{"id": str(uuid4()), **self.last_payload}]  # type: ignore[dict-item]
        return FakeResponse(data=data, count=self.count)


@dataclass
class FakeAuth:
    users: dict[str, object] = field(default_factory=dict)
    seen_tokens: list[str] = field(default_factory=list)

    def get_user(self, jwt: str) -> SimpleNamespace:
        self.seen_tokens.append(jwt)
        return SimpleNamespace(user=self.users.get(jwt))


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)
    auth: FakeAuth = field(default_factory=FakeAuth)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def make_album(
    album_repository: InMemoryAlbumRepository,
    couple_names: str = "Sarah & James",
    event_date: date = date(2025, 1, 15),
    drive_folder_id: str | None = "folder-existing",
) -> Album:
    album = Album(
        id=uuid4(),
        couple_names=couple_names,
        event_date=event_date,
        cover_photo_url=public_content_url("cover"),
        cover_photo_drive_id="cover",
        drive_folder_id=drive_folder_id,
        access_code="ABCD1234",
        created_by=CALLER.id,
    )
    album_repository.albums[album.id] = album
    return album


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="anon-key",
        google_drive_client_id="client-id",
        google_drive_client_secret="client-secret",
        google_drive_refresh_token="refresh-token",
    )


@pytest.fixture
def album_repository() -> InMemoryAlbumRepository:
    return InMemoryAlbumRepository()


@pytest.fixture
def photo_repository() -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository()


@pytest.fixture
def store_factory(
    album_repository: InMemoryAlbumRepository,
    photo_repository: InMemoryPhotoRepository,
) -> InMemoryMetadataStoreFactory:
    return InMemoryMetadataStoreFactory(
        albums=album_repository, photos=photo_repository
    )


@pytest.fixture
def token_provider() -> FakeTokenProvider:
    return FakeTokenProvider()


@pytest.fixture
def drive_client() -> FakeDriveClient:
    return FakeDriveClient()


@pytest.fixture
def ingestion_service(
    store_factory: InMemoryMetadataStoreFactory,
    token_provider: FakeTokenProvider,
    drive_client: FakeDriveClient,
) -> IngestionService:
    return IngestionService(
        store_factory=store_factory,
        token_provider=token_provider,
        drive_client=drive_client,
    )


@pytest.fixture
def container(
    settings: Settings,
    store_factory: InMemoryMetadataStoreFactory,
    ingestion_service: IngestionService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        ingestion_service=ingestion_service,
        album_service=AlbumService(store_factory),
        close_resources=close_resources,
    )
