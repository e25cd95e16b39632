"""Google OAuth2 refresh-token exchange."""

from dataclasses import dataclass

import httpx

from wedding_gallery.errors import ConfigurationError, UpstreamAuthError
from wedding_gallery.services.ingestion import TokenProvider

GOOGLE_OAUTH_TOKEN_URL = "https://oauth2.googleapis.com/token"


@dataclass
class GoogleOAuthTokenProvider(TokenProvider):
    """Fetches a fresh Drive access token for every call."""

    client_id: str | None
    client_secret: str | None
    refresh_token: str | None
    http_client: httpx.AsyncClient
    token_url: str = GOOGLE_OAUTH_TOKEN_URL
    timeout: float = 30

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        client_id: str | None,
        client_secret: str | None,
        refresh_token: str | None,
        token_url: str = GOOGLE_OAUTH_TOKEN_URL,
        timeout: float = 30,
    ) -> "GoogleOAuthTokenProvider":
        """Create a token provider with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            refresh_token=refresh_token,
            http_client=httpx.AsyncClient(),
            token_url=token_url,
            timeout=timeout,
        )

    async def fetch_access_token(self) -> str:
        """Exchange the refresh token for a bearer access token."""
        if not (self.client_id and self.client_secret and self.refresh_token):
            raise ConfigurationError("Missing Google Drive credentials")
        try:
            response = await self.http_client.post(
                self.token_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "refresh_token": self.refresh_token,
                    "grant_type": "refresh_token",
                },
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise UpstreamAuthError("Failed to refresh access token") from exc
        if not response.is_success:
            raise UpstreamAuthError(_error_text(response))
        access_token = response.json().get("access_token")
        if not access_token:
            raise UpstreamAuthError("Token endpoint returned no access token")
        return access_token

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _error_text(response: httpx.Response) -> str:
    """Extract the OAuth error description, if the body carries one."""
    try:
        payload = response.json()
    except ValueError:
        return "Failed to refresh access token"
    if isinstance(payload, dict):
        detail = payload.get("error_description") or payload.get("error")
        if detail:
            return f"Failed to refresh access token: {detail}"
    return "Failed to refresh access token"
