"""Sign-up, sign-in and Google login endpoints."""

from __future__ import annotations

import logging
import secrets
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.api.cookies import OAUTH_STATE_COOKIE, set_access_cookie, set_state_cookie
from inkwell.api.deps import commit, get_container, get_current_identity, get_db_session
from inkwell.core.container import ApplicationContainer
from inkwell.core.errors import DomainError, InvalidInputError
from inkwell.core.security import Identity
from inkwell.infrastructure.oauth import OAuthError
from inkwell.modules.accounts import AccountService, FederatedProfile
from inkwell.modules.accounts.models import PROVIDER_GOOGLE
from inkwell.modules.auth import AuthResult, AuthService, SignupInput
from inkwell.schemas import (
    AccountResponse,
    AuthResponse,
    GoogleLoginRequest,
    SigninRequest,
    SignupRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(result: AuthResult, response: Response, container: ApplicationContainer) -> AuthResponse:
    set_access_cookie(response, result.access_token, container.settings)
    return AuthResponse(
        user=AccountResponse.model_validate(result.account),
        access_token=result.access_token,
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    response: Response,
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
):
    service = AuthService.with_session(db, container.tokens)
    result = await service.signup(
        SignupInput(
            username=payload.username,
            email=payload.email,
            password=payload.password,
            requested_role=payload.role,
        )
    )
    await commit(db)
    logger.info("New account signed up: %s", result.account.id)
    return _auth_response(result, response, container)


@router.post("/signin", response_model=AuthResponse)
async def signin(
    payload: SigninRequest,
    response: Response,
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
):
    service = AuthService.with_session(db, container.tokens)
    result = await service.signin(payload.email, payload.password)
    return _auth_response(result, response, container)


@router.get("/me", response_model=AccountResponse)
async def current_account(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    return await AccountService.with_session(db).require(identity.account_id)


@router.post("/google", response_model=AuthResponse)
async def google_login(
    payload: GoogleLoginRequest,
    response: Response,
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
):
    """Sign in with a Google profile obtained by the client."""
    profile = FederatedProfile(
        provider=PROVIDER_GOOGLE,
        subject_id=payload.google_id or None,
        email=payload.email or None,
        display_name=payload.name,
        picture_url=payload.photo_url,
    )
    result = await AuthService.with_session(db, container.tokens).federated_login(profile)
    await commit(db)
    return _auth_response(result, response, container)


@router.get("/google")
async def google_redirect(container: ApplicationContainer = Depends(get_container)):
    if not container.oauth.is_configured:
        logger.warning("Google login requested but OAuth is not configured")
        return _client_redirect(container, "/sign-in", error="google")

    state = secrets.token_urlsafe(24)
    response = RedirectResponse(container.oauth.get_authorize_url(state), status_code=status.HTTP_302_FOUND)
    set_state_cookie(response, state, container.settings)
    return response


@router.get("/google/callback")
async def google_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
):
    expected_state = request.cookies.get(OAUTH_STATE_COOKIE)
    if not code or not state or not expected_state or not secrets.compare_digest(state, expected_state):
        logger.warning("Google callback rejected: missing code or state mismatch")
        return _client_redirect(container, "/sign-in", error="google")

    try:
        profile = await container.oauth.authenticate(code)
        result = await AuthService.with_session(db, container.tokens).federated_login(profile)
        await commit(db)
    except OAuthError as exc:
        logger.warning("Google login failed: %s", exc)
        return _client_redirect(container, "/sign-in", error="google")
    except InvalidInputError as exc:
        await db.rollback()
        logger.warning("Google login without usable email: %s", exc)
        return _client_redirect(container, "/sign-in", error="google-no-email")
    except DomainError as exc:
        await db.rollback()
        logger.warning("Google login rejected: %s", exc)
        return _client_redirect(container, "/sign-in", error="google")

    response = _client_redirect(container, "/oauth-success", token=result.access_token)
    set_access_cookie(response, result.access_token, container.settings)
    return response


def _client_redirect(container: ApplicationContainer, path: str, **params: str) -> RedirectResponse:
    url = f"{container.settings.client_url.rstrip('/')}{path}"
    if params:
        url = f"{url}?{urlencode(params)}"
    response = RedirectResponse(url, status_code=status.HTTP_302_FOUND)
    response.delete_cookie(OAUTH_STATE_COOKIE, path="/")
    return response
