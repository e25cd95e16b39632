"""Validation of the ingestion endpoint's multipart form."""

import re
from datetime import date
from typing import TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from starlette.datastructures import FormData, UploadFile

from wedding_gallery.domain.uploads import CreateAlbumRequest, UploadedFile
from wedding_gallery.errors import InvalidRequestError

DEFAULT_CONTENT_TYPE = "application/octet-stream"
ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

FormT = TypeVar("FormT", bound=BaseModel)


class CreateAlbumForm(BaseModel):
    """Text fields of a create_album request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    couple_names: str = Field(alias="coupleNames", min_length=1)
    event_date: date = Field(alias="eventDate")
    access_code: str = Field(alias="accessCode", min_length=1)

    @field_validator("event_date", mode="before")
    @classmethod
    def require_calendar_date(cls, value: object) -> object:
        """Accept only a plain YYYY-MM-DD date, never a timestamp."""
        if not isinstance(value, str) or not ISO_DATE.fullmatch(value.strip()):
            raise ValueError("expected a date in YYYY-MM-DD format")
        return value.strip()


class UploadPhotosForm(BaseModel):
    """Text fields of an upload_photos request."""

    album_id: UUID = Field(alias="albumId")


async def parse_create_album(form: FormData) -> CreateAlbumRequest:
    """Validate a create_album form and read its cover photo."""
    fields = _validate(
        CreateAlbumForm,
        {key: form.get(key) for key in ("coupleNames", "eventDate", "accessCode")},
    )
    cover = form.get("coverPhoto")
    if not isinstance(cover, UploadFile) or not cover.filename:
        raise InvalidRequestError("Missing required field: coverPhoto")
    cover_photo = await read_upload(cover)
    if not cover_photo.data:
        raise InvalidRequestError("Cover photo is empty")
    return CreateAlbumRequest(
        couple_names=fields.couple_names,
        event_date=fields.event_date,
        access_code=fields.access_code,
        cover_photo=cover_photo,
    )


async def parse_upload_photos(
    form: FormData, max_files: int
) -> tuple[UUID, list[UploadedFile]]:
    """Validate an upload_photos form and read its files."""
    fields = _validate(UploadPhotosForm, {"albumId": form.get("albumId")})
    uploads = [
        item
        for item in form.getlist("photos")
        if isinstance(item, UploadFile) and item.filename
    ]
    if not uploads:
        raise InvalidRequestError("Missing required field: photos")
    if len(uploads) > max_files:
        raise InvalidRequestError(f"Too many files: at most {max_files} per upload")
    return fields.album_id, [await read_upload(upload) for upload in uploads]


async def read_upload(upload: UploadFile) -> UploadedFile:
    """Read a form file part into memory."""
    return UploadedFile(
        name=upload.filename or "upload",
        content_type=upload.content_type or DEFAULT_CONTENT_TYPE,
        data=await upload.read(),
    )


def _validate(model: type[FormT], values: dict[str, object]) -> FormT:
    present = {key: value for key, value in values.items() if value is not None}
    try:
        return model.model_validate(present)
    except ValidationError as exc:
        raise InvalidRequestError(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"])
    if error["type"] == "missing":
        return f"Missing required field: {field}"
    return f"Invalid field {field}: {error['msg']}"
