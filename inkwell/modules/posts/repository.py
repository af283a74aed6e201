"""Repository protocol for posts."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from .models import Post, PostFilter


class PostRepository(Protocol):
    async def get_by_id(self, post_id: str) -> Post | None:
        ...

    async def get_by_slug(self, slug: str) -> Post | None:
        ...

    async def get_older(self, created_at: datetime) -> Post | None:
        ...

    async def get_newer(self, created_at: datetime) -> Post | None:
        ...

    async def find(self, criteria: PostFilter, *, skip: int, limit: int, ascending: bool) -> Sequence[Post]:
        ...

    async def count(self, criteria: Optional[PostFilter] = None, *, created_since: Optional[datetime] = None) -> int:
        ...

    async def create_post(
        self,
        *,
        user_id: str,
        author_name: str | None,
        title: str,
        content: str,
        category: str,
        image: str,
        slug: str,
    ) -> Post:
        ...

    async def update_post(self, post_id: str, values: dict[str, Any]) -> Post | None:
        ...

    async def delete_post(self, post_id: str) -> bool:
        ...
