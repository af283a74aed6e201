"""Shared plumbing for SQLAlchemy repositories."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.core.errors import ConflictError, StorageUnavailableError

logger = logging.getLogger(__name__)


class SqlRepository:
    """Base repository exposing the session and translating driver errors.

    Uniqueness violations surface as :class:`ConflictError`, every other
    database failure as :class:`StorageUnavailableError`.
    """

    conflict_message = "Resource already exists"

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def _execute(self, stmt: Any):
        try:
            return await self._session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError(self.conflict_message) from exc
        except SQLAlchemyError as exc:
            logger.error("Database statement failed: %s", exc)
            raise StorageUnavailableError() from exc

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise ConflictError(self.conflict_message) from exc
        except SQLAlchemyError as exc:
            logger.error("Database flush failed: %s", exc)
            raise StorageUnavailableError() from exc

    async def _add(self, instance: Any) -> Any:
        self._session.add(instance)
        await self._flush()
        await self._session.refresh(instance)
        return instance
