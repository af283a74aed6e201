"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.core.container import ApplicationContainer
from inkwell.core.errors import DomainError, StorageUnavailableError
from inkwell.core.security import Identity

logger = logging.getLogger(__name__)


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


async def get_db_session(
    container: ApplicationContainer = Depends(get_container),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session; handlers commit explicitly, anything left is rolled back."""
    async with container.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def commit(session: AsyncSession) -> None:
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        logger.error("Commit failed: %s", exc)
        await session.rollback()
        raise StorageUnavailableError() from exc


bearer_scheme = HTTPBearer(auto_error=False)


async def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    container: ApplicationContainer = Depends(get_container),
) -> Optional[str]:
    """Bearer header first, then the access-token cookie."""
    if credentials is not None:
        return credentials.credentials
    # The cookie name comes from settings, so the scheme is built per request.
    cookie_scheme = APIKeyCookie(name=container.settings.security.cookie_name, auto_error=False)
    return await cookie_scheme(request)


async def get_current_identity(
    request: Request,
    token: Optional[str] = Depends(extract_token),
    container: ApplicationContainer = Depends(get_container),
) -> Identity:
    identity = container.tokens.verify(token)
    request.state.identity = identity
    return identity


async def get_optional_identity(
    request: Request,
    token: Optional[str] = Depends(extract_token),
    container: ApplicationContainer = Depends(get_container),
) -> Optional[Identity]:
    if not token:
        return None
    try:
        identity = container.tokens.verify(token)
    except DomainError:
        # Public endpoints stay reachable with a stale cookie.
        return None
    request.state.identity = identity
    return identity


__all__ = [
    "commit",
    "extract_token",
    "get_container",
    "get_current_identity",
    "get_db_session",
    "get_optional_identity",
]
