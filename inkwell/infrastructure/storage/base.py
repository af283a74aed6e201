"""Blob store contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


class AsyncReadable(Protocol):
    async def read(self, size: int = -1) -> bytes:
        ...


@dataclass(slots=True)
class BlobMetadata:
    filename: str
    content_type: Optional[str] = None


@dataclass(slots=True)
class StoredBlob:
    url: str
    object_id: str
    size_bytes: int


class BlobStore(Protocol):
    """Uploads and deletes opaque objects.

    Implementations raise :class:`~inkwell.core.errors.StorageUnavailableError`
    when the backend cannot be reached or written.
    """

    async def upload(self, stream: AsyncReadable, metadata: BlobMetadata) -> StoredBlob:
        ...

    async def delete(self, object_id: str) -> None:
        ...
