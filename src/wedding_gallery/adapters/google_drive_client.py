"""Google Drive folder and file client."""

import base64
import json
import logging
from dataclasses import dataclass

import httpx

from wedding_gallery.domain.uploads import DriveFile
from wedding_gallery.errors import UpstreamWriteError
from wedding_gallery.services.ingestion import DriveClient

_logger = logging.getLogger(__name__)

DRIVE_API_URL = "https://www.googleapis.com/drive/v3"
DRIVE_UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
MULTIPART_BOUNDARY = "-------314159265358979323846"


def public_content_url(file_id: str) -> str:
    """Direct-view URL for a publicly shared Drive file."""
    return f"https://drive.google.com/uc?export=view&id={file_id}"


def build_multipart_body(
    metadata: dict[str, object], data: bytes, mime_type: str
) -> bytes:
    """Build a multipart/related upload body with a base64 content part."""
    delimiter = f"\r\n--{MULTIPART_BOUNDARY}\r\n"
    close_delimiter = f"\r\n--{MULTIPART_BOUNDARY}--"
    metadata_part = (
        delimiter + "Content-Type: application/json\r\n\r\n" + json.dumps(metadata)
    )
    file_part = (
        delimiter
        + f"Content-Type: {mime_type}\r\n"
        + "Content-Transfer-Encoding: base64\r\n\r\n"
        + base64.b64encode(data).decode("ascii")
    )
    return (metadata_part + file_part + close_delimiter).encode("utf-8")


@dataclass
class HttpxGoogleDriveClient(DriveClient):
    """Drive client implemented with httpx."""

    http_client: httpx.AsyncClient
    api_url: str = DRIVE_API_URL
    upload_url: str = DRIVE_UPLOAD_URL
    timeout: float = 30

    @classmethod
    def create(
        cls,
        api_url: str = DRIVE_API_URL,
        upload_url: str = DRIVE_UPLOAD_URL,
        timeout: float = 30,
    ) -> "HttpxGoogleDriveClient":
        """Create a Drive client with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(),
            api_url=api_url,
            upload_url=upload_url,
            timeout=timeout,
        )

    async def create_folder(
        self, access_token: str, name: str, parent_id: str | None = None
    ) -> str:
        """Create a folder and return its id."""
        metadata: dict[str, object] = {"name": name, "mimeType": FOLDER_MIME_TYPE}
        if parent_id:
            metadata["parents"] = [parent_id]
        try:
            response = await self.http_client.post(
                f"{self.api_url}/files",
                headers=_auth_headers(access_token),
                json=metadata,
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise UpstreamWriteError("Failed to create folder") from exc
        if not response.is_success:
            _logger.error("Folder create error: %s", response.text)
            raise UpstreamWriteError("Failed to create folder")
        folder_id = _created_id(response)
        if folder_id is None:
            _logger.error("Folder create reply has no id: %s", response.text)
            raise UpstreamWriteError("Failed to create folder")
        return folder_id

    async def upload_file(  # noqa: PLR0913
        self,
        access_token: str,
        data: bytes,
        name: str,
        mime_type: str,
        folder_id: str | None = None,
    ) -> DriveFile:
        """Upload a file with a multipart request, then share it publicly."""
        metadata: dict[str, object] = {"name": name, "mimeType": mime_type}
        if folder_id:
            metadata["parents"] = [folder_id]
        headers = _auth_headers(access_token)
        headers["Content-Type"] = f"multipart/related; boundary={MULTIPART_BOUNDARY}"
        try:
            response = await self.http_client.post(
                f"{self.upload_url}/files",
                params={
                    "uploadType": "multipart",
                    "fields": "id,webViewLink,webContentLink",
                },
                headers=headers,
                content=build_multipart_body(metadata, data, mime_type),
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise UpstreamWriteError(
                f"Failed to upload file to Google Drive: {name}"
            ) from exc
        if not response.is_success:
            _logger.error("Upload error for %s: %s", name, response.text)
            raise UpstreamWriteError(_upload_error_text(response))
        file_id = _created_id(response)
        if file_id is None:
            _logger.error("Upload reply for %s has no id: %s", name, response.text)
            raise UpstreamWriteError(
                f"Failed to upload file to Google Drive: {name}"
            )
        shared = await self.grant_public_read(access_token, file_id)
        return DriveFile(
            file_id=file_id,
            view_url=response.json().get("webViewLink"),
            content_url=public_content_url(file_id),
            shared=shared,
        )

    async def grant_public_read(self, access_token: str, file_id: str) -> bool:
        """Let anyone with the link read the file.

        Failures are logged and reported through the return value only.
        """
        try:
            response = await self.http_client.post(
                f"{self.api_url}/files/{file_id}/permissions",
                headers=_auth_headers(access_token),
                json={"role": "reader", "type": "anyone"},
                timeout=self.timeout,
            )
        except httpx.HTTPError:
            _logger.warning("Failed to share file %s", file_id, exc_info=True)
            return False
        if not response.is_success:
            _logger.warning(
                "Failed to share file %s: %s %s",
                file_id,
                response.status_code,
                response.text,
            )
            return False
        return True

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _auth_headers(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def _created_id(response: httpx.Response) -> str | None:
    """Return the id of the created resource from a success reply."""
    try:
        payload = response.json()
    except ValueError:
        return None
    file_id = payload.get("id") if isinstance(payload, dict) else None
    return file_id if isinstance(file_id, str) and file_id else None


def _upload_error_text(response: httpx.Response) -> str:
    """Prefer Drive's own error message over a generic one."""
    try:
        payload = response.json()
    except ValueError:
        return "Failed to upload file to Google Drive"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return f"Failed to upload file to Google Drive: {error['message']}"
    return "Failed to upload file to Google Drive"
