"""Domain models for the ingestion pipeline."""

from dataclasses import dataclass, field
from datetime import date

from wedding_gallery.domain.models import Photo


@dataclass(frozen=True)
class UploadedFile:
    """A file part received from the inbound multipart form."""

    name: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class DriveFile:
    """A file stored in Google Drive."""

    file_id: str
    view_url: str | None
    content_url: str
    shared: bool = True


@dataclass(frozen=True)
class CreateAlbumRequest:
    """Validated input for album creation."""

    couple_names: str
    event_date: date
    access_code: str
    cover_photo: UploadedFile

    @property
    def folder_name(self) -> str:
        return f"{self.couple_names} - {self.event_date.isoformat()}"


@dataclass(frozen=True)
class PhotoUploadOutcome:
    """Result of ingesting a single photo file."""

    file_name: str
    photo: Photo | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.photo is not None


@dataclass
class PhotoBatchResult:
    """Accumulated outcomes of an upload_photos request."""

    outcomes: list[PhotoUploadOutcome] = field(default_factory=list)

    def add(self, outcome: PhotoUploadOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def photos(self) -> list[Photo]:
        return [outcome.photo for outcome in self.outcomes if outcome.photo]

    @property
    def failures(self) -> list[PhotoUploadOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]
