"""Dependency container owning process-wide collaborators."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from inkwell.core.config import Settings, get_settings
from inkwell.core.security import TokenService
from inkwell.infrastructure.database import build_engine, build_session_factory, init_db
from inkwell.infrastructure.oauth import GoogleOAuthClient
from inkwell.infrastructure.storage import BlobStore, LocalBlobStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    """Built once by the app factory; torn down by the lifespan handler.

    Every collaborator can be swapped before ``startup`` (tests replace the
    blob store and the OAuth client this way).
    """

    settings: Settings
    engine: AsyncEngine = field(init=False)
    session_factory: async_sessionmaker[AsyncSession] = field(init=False)
    tokens: TokenService = field(init=False)
    blob_store: BlobStore = field(init=False)
    oauth: GoogleOAuthClient = field(init=False)
    create_tables: bool = True

    def __post_init__(self) -> None:
        self.engine = build_engine(self.settings)
        self.session_factory = build_session_factory(self.engine)
        self.tokens = TokenService.from_settings(self.settings)
        self.blob_store = LocalBlobStore.from_settings(self.settings)
        self.oauth = GoogleOAuthClient.from_settings(self.settings)

    async def startup(self) -> None:
        if self.create_tables:
            await init_db(self.engine)
        ensure_root = getattr(self.blob_store, "ensure_root", None)
        if ensure_root is not None:
            ensure_root()
        logger.info("%s started (%s)", self.settings.project_name, self.settings.environment)

    async def shutdown(self) -> None:
        await self.engine.dispose()
        logger.info("%s stopped", self.settings.project_name)


def build_container(settings: Optional[Settings] = None) -> ApplicationContainer:
    return ApplicationContainer(settings=settings or get_settings())


__all__ = ["ApplicationContainer", "build_container"]
