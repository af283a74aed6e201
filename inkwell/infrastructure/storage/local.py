"""Filesystem-backed blob store served through a static mount."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from inkwell.core.config import Settings
from inkwell.core.errors import InvalidInputError, StorageUnavailableError

from .base import AsyncReadable, BlobMetadata, StoredBlob

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class LocalBlobStore:
    def __init__(self, root: Path, base_url: str, max_bytes: Optional[int] = None) -> None:
        self.root = Path(root).resolve()
        self.base_url = base_url.rstrip("/")
        self.max_bytes = max_bytes

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalBlobStore":
        return cls(
            settings.storage.blob_dir,
            settings.storage.blob_base_url,
            max_bytes=settings.storage.max_upload_bytes,
        )

    def ensure_root(self) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailableError("Blob storage directory is not writable") from exc

    def url_for(self, object_id: str) -> str:
        return f"{self.base_url}/{object_id}"

    async def upload(self, stream: AsyncReadable, metadata: BlobMetadata) -> StoredBlob:
        self.ensure_root()
        # Keep the extension so the static mount serves a sensible content type.
        suffix = Path(_sanitize_filename(metadata.filename) or "").suffix.lower()
        object_id = f"{os.urandom(16).hex()}{suffix}"
        target = self.root / object_id

        total_size = 0
        try:
            with target.open("wb") as buffer:
                while True:
                    chunk = await stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    total_size += len(chunk)
                    if self.max_bytes is not None and total_size > self.max_bytes:
                        raise InvalidInputError("Uploaded file is too large")
                    buffer.write(chunk)
        except InvalidInputError:
            target.unlink(missing_ok=True)
            raise
        except OSError as exc:
            target.unlink(missing_ok=True)
            logger.error("Failed to write blob %s: %s", object_id, exc)
            raise StorageUnavailableError("Failed to store the uploaded file") from exc

        if total_size == 0:
            target.unlink(missing_ok=True)
            raise InvalidInputError("Uploaded file is empty")

        logger.info("Stored blob %s (%s bytes)", object_id, total_size)
        return StoredBlob(url=self.url_for(object_id), object_id=object_id, size_bytes=total_size)

    async def delete(self, object_id: str) -> None:
        target = self._resolve(object_id)
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Failed to delete blob %s: %s", object_id, exc)
            raise StorageUnavailableError("Failed to delete the stored file") from exc

    def _resolve(self, object_id: str) -> Path:
        target = (self.root / object_id).resolve()
        if target.parent != self.root:
            raise InvalidInputError("Invalid object id")
        return target


def _sanitize_filename(filename: Optional[str]) -> Optional[str]:
    if not filename:
        return None
    return os.path.basename(filename).replace("\0", "").strip()
