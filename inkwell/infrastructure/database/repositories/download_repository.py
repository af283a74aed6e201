"""SQLAlchemy implementation of the download repository."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from sqlalchemy import delete, select, update

from inkwell.infrastructure.database.models import Download as DownloadModel, utc_now
from inkwell.modules.downloads.models import Download
from inkwell.modules.downloads.repository import DownloadRepository

from .base import SqlRepository


class SqlDownloadRepository(SqlRepository, DownloadRepository):
    conflict_message = "File is already registered"

    async def get_by_id(self, download_id: str) -> Download | None:
        return await self._first(select(DownloadModel).where(DownloadModel.id == download_id))

    async def list_downloads(self, *, published_only: bool = False) -> Sequence[Download]:
        stmt = select(DownloadModel).order_by(DownloadModel.created_at.desc())
        if published_only:
            stmt = stmt.where(DownloadModel.is_published.is_(True))
        result = await self._execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create_download(
        self,
        *,
        title: str,
        filename: str,
        mime_type: Optional[str],
        size_bytes: int,
        file_url: str,
        object_id: str,
        image_path: str,
        uploaded_by: Optional[str],
        is_published: bool,
    ) -> Download:
        model = DownloadModel(
            title=title,
            filename=filename,
            mime_type=mime_type,
            size_bytes=size_bytes,
            file_url=file_url,
            object_id=object_id,
            image_path=image_path,
            uploaded_by=uploaded_by,
            is_published=is_published,
        )
        await self._add(model)
        return self._to_domain(model)

    async def set_published(self, download_id: str, is_published: bool) -> Download | None:
        stmt = (
            update(DownloadModel)
            .where(DownloadModel.id == download_id)
            .values(is_published=is_published, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt)
        if result.rowcount == 0:
            return None
        stmt = (
            select(DownloadModel)
            .where(DownloadModel.id == download_id)
            .execution_options(populate_existing=True)
        )
        return await self._first(stmt)

    async def delete_download(self, download_id: str) -> bool:
        result = await self._execute(delete(DownloadModel).where(DownloadModel.id == download_id))
        return result.rowcount > 0

    async def _first(self, stmt: Any) -> Download | None:
        result = await self._execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    @staticmethod
    def _to_domain(model: DownloadModel) -> Download:
        return Download(
            id=str(model.id),
            title=model.title,
            filename=model.filename,
            file_url=model.file_url,
            object_id=model.object_id,
            image_path=model.image_path,
            size_bytes=int(model.size_bytes or 0),
            mime_type=model.mime_type,
            uploaded_by=model.uploaded_by,
            is_published=bool(model.is_published),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
