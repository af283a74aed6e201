"""Download use cases: upload, publication and removal of stored files.

Removing an entry touches two systems that share no transaction: the blob
store object goes first, then the database row. A blob failure leaves the
row in place and surfaces as a storage error; a row failure after the blob
is gone surfaces as :class:`PartialDeletionError` so that callers never see
success for a half-done deletion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.core.authorization import can_mutate, ensure_admin, ensure_can_mutate
from inkwell.core.errors import DomainError, PartialDeletionError
from inkwell.core.security import Identity
from inkwell.infrastructure.storage import BlobMetadata, BlobStore
from inkwell.infrastructure.storage.base import AsyncReadable

from .exceptions import DownloadNotFoundError, InvalidDownloadError
from .models import Download, DownloadUploadInput
from .repository import DownloadRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DownloadService:
    repository: DownloadRepository
    blob_store: BlobStore

    @classmethod
    def with_session(cls, session: AsyncSession, blob_store: BlobStore) -> "DownloadService":
        from inkwell.infrastructure.database.repositories.download_repository import SqlDownloadRepository

        return cls(SqlDownloadRepository(session), blob_store)

    async def upload(self, identity: Identity, stream: AsyncReadable, payload: DownloadUploadInput) -> Download:
        if not payload.title or not payload.image_path:
            raise InvalidDownloadError("Filename and image path are required")
        if not payload.filename:
            raise InvalidDownloadError("Please upload a file")

        stored = await self.blob_store.upload(
            stream,
            BlobMetadata(filename=payload.filename, content_type=payload.content_type),
        )
        try:
            download = await self.repository.create_download(
                title=payload.title,
                filename=payload.filename,
                mime_type=payload.content_type,
                size_bytes=stored.size_bytes,
                file_url=stored.url,
                object_id=stored.object_id,
                image_path=payload.image_path,
                uploaded_by=identity.account_id,
                is_published=identity.is_admin,
            )
        except DomainError:
            logger.warning("Record for blob %s could not be saved, removing the blob", stored.object_id)
            await self.blob_store.delete(stored.object_id)
            raise

        logger.info(
            "Account %s uploaded %s (%s)",
            identity.account_id,
            download.id,
            "published" if download.is_published else "pending",
        )
        return download

    async def list_published(self) -> list[Download]:
        return list(await self.repository.list_downloads(published_only=True))

    async def list_all(self, identity: Identity) -> list[Download]:
        ensure_admin(identity, "You are not allowed to see all files")
        return list(await self.repository.list_downloads())

    async def publish(self, identity: Identity, download_id: str) -> Download:
        ensure_admin(identity, "You are not allowed to publish files")
        updated = await self.repository.set_published(download_id, True)
        if updated is None:
            raise DownloadNotFoundError()
        logger.info("Account %s published download %s", identity.account_id, download_id)
        return updated

    async def resolve(self, identity: Optional[Identity], download_id: str) -> Download:
        """Return an entry the caller may download.

        Pending entries are hidden from everybody except their uploader and
        admins.
        """
        download = await self._require(download_id)
        if download.is_published:
            return download
        if identity is None or not can_mutate(identity.account_id, identity.role, download.uploaded_by):
            raise DownloadNotFoundError()
        return download

    async def delete(self, identity: Identity, download_id: str) -> None:
        download = await self._require(download_id)
        ensure_can_mutate(identity, download.uploaded_by, "You are not allowed to delete this file")

        await self.blob_store.delete(download.object_id)
        try:
            deleted = await self.repository.delete_download(download_id)
        except DomainError as exc:
            logger.error("Blob %s removed but record %s was kept: %s", download.object_id, download_id, exc)
            raise PartialDeletionError("File was removed from storage but its record could not be deleted") from exc
        if not deleted:
            logger.error("Blob %s removed but record %s had already vanished", download.object_id, download_id)
            raise PartialDeletionError("File was removed from storage but its record could not be deleted")
        logger.info("Account %s deleted download %s", identity.account_id, download_id)

    async def _require(self, download_id: str) -> Download:
        download = await self.repository.get_by_id(download_id)
        if download is None:
            raise DownloadNotFoundError()
        return download
