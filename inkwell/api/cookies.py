"""Access-token cookie handling.

The cookie flags come from settings only, never from the request.
"""

from fastapi import Response

from inkwell.core.config import Settings

OAUTH_STATE_COOKIE = "oauth_state"


def set_access_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.security.cookie_name,
        value=token,
        max_age=settings.security.access_token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
    )


def clear_access_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.security.cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
    )


def set_state_cookie(response: Response, state: str, settings: Settings) -> None:
    response.set_cookie(
        key=OAUTH_STATE_COOKIE,
        value=state,
        max_age=10 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )
