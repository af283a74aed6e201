"""Google OAuth 2.0 authorization code flow."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urlencode

import httpx

from inkwell.core.config import Settings
from inkwell.modules.accounts.models import PROVIDER_GOOGLE, FederatedProfile

logger = logging.getLogger(__name__)


class OAuthError(Exception):
    """The provider rejected the flow or could not be reached."""


class GoogleOAuthClient:
    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        redirect_uri: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GoogleOAuthClient":
        return cls(
            settings.oauth.google_client_id,
            settings.oauth.google_client_secret,
            settings.oauth.google_redirect_uri,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def get_authorize_url(self, state: str) -> str:
        if not self.is_configured:
            raise OAuthError("Google OAuth is not configured")
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "prompt": "select_account",
            "state": state,
        }
        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> dict[str, Any]:
        if not self.is_configured:
            raise OAuthError("Google OAuth is not configured")
        response = await self._request(
            "POST",
            self.TOKEN_URL,
            data={
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "code": code,
                "redirect_uri": self.redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        if response.status_code != 200:
            logger.error("Google token exchange failed: %s", response.text)
            raise OAuthError(f"Token exchange failed: {response.status_code}")
        return response.json()

    async def get_user_info(self, access_token: str) -> FederatedProfile:
        """Fetch the signed-in Google profile.

        The email is passed through as-is, possibly ``None``; deciding what a
        profile without an email means is left to the caller.
        """
        response = await self._request(
            "GET",
            self.USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.status_code != 200:
            logger.error("Google userinfo failed: %s", response.text)
            raise OAuthError(f"Failed to get user info: {response.status_code}")

        data = response.json()
        email = data.get("email") or None
        return FederatedProfile(
            provider=PROVIDER_GOOGLE,
            subject_id=str(data.get("id") or "") or None,
            email=email,
            display_name=data.get("name") or (email.split("@")[0] if email else None),
            picture_url=data.get("picture"),
        )

    async def authenticate(self, code: str) -> FederatedProfile:
        tokens = await self.exchange_code(code)
        access_token = tokens.get("access_token")
        if not access_token:
            raise OAuthError("Token response did not include an access token")
        return await self.get_user_info(access_token)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                return await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Google OAuth request to %s failed: %s", url, exc)
            raise OAuthError("Google is unreachable") from exc
