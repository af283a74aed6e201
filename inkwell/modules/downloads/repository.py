"""Repository protocol for download entries."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .models import Download


class DownloadRepository(Protocol):
    async def get_by_id(self, download_id: str) -> Download | None:
        ...

    async def list_downloads(self, *, published_only: bool = False) -> Sequence[Download]:
        ...

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
        ...

    async def set_published(self, download_id: str, is_published: bool) -> Download | None:
        ...

    async def delete_download(self, download_id: str) -> bool:
        ...
