"""Google OAuth client against a mocked transport."""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from inkwell.infrastructure.oauth import GoogleOAuthClient, OAuthError


def _client(handler, client_id="client-id", client_secret="client-secret"):
    return GoogleOAuthClient(
        client_id,
        client_secret,
        "http://testserver/api/auth/google/callback",
        transport=httpx.MockTransport(handler),
    )


def _google(userinfo, token_status=200):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/token":
            if token_status != 200:
                return httpx.Response(token_status, json={"error": "invalid_grant"})
            assert b"code=the-code" in request.content
            return httpx.Response(200, json={"access_token": "google-access"})
        assert request.headers["Authorization"] == "Bearer google-access"
        return httpx.Response(200, json=userinfo)

    return handler


def test_authorize_url_carries_state():
    client = _client(_google({}))
    query = parse_qs(urlparse(client.get_authorize_url("xyz")).query)
    assert query["state"] == ["xyz"]
    assert query["client_id"] == ["client-id"]
    assert query["response_type"] == ["code"]


def test_unconfigured_client_refuses():
    client = _client(_google({}), client_secret=None)
    assert not client.is_configured
    with pytest.raises(OAuthError):
        client.get_authorize_url("xyz")


async def test_authenticate_returns_profile():
    client = _client(
        _google({"id": "1234", "email": "ana@example.com", "name": "Ana", "picture": "https://example.com/a.png"})
    )
    profile = await client.authenticate("the-code")
    assert profile.provider == "google"
    assert profile.subject_id == "1234"
    assert profile.email == "ana@example.com"
    assert profile.display_name == "Ana"
    assert profile.picture_url == "https://example.com/a.png"


async def test_profile_without_email_is_passed_through():
    profile = await _client(_google({"id": "1234", "name": "Ana"})).authenticate("the-code")
    assert profile.email is None


async def test_failed_exchange():
    with pytest.raises(OAuthError):
        await _client(_google({}, token_status=400)).authenticate("the-code")


async def test_network_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(OAuthError):
        await _client(handler).authenticate("the-code")
