"""Error types raised across the gallery service.

Every error carries the HTTP status the API layer answers with, so handlers
only need to catch ``GalleryError``.
"""

from http import HTTPStatus


class GalleryError(Exception):
    """Base class for expected, user-facing failures."""

    status_code: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(GalleryError):
    """The inbound form is missing fields or carries malformed values."""


class ConfigurationError(GalleryError):
    """A required secret is not configured."""


class UnauthorizedError(GalleryError):
    """The caller has no valid session."""

    status_code = HTTPStatus.UNAUTHORIZED


class NotFoundError(GalleryError):
    """A referenced record does not exist."""

    status_code = HTTPStatus.NOT_FOUND


class UpstreamAuthError(GalleryError):
    """The OAuth token endpoint refused to issue an access token."""


class UpstreamWriteError(GalleryError):
    """Google Drive rejected a folder or file write."""


class PersistenceError(GalleryError):
    """The metadata store failed to persist a row."""
