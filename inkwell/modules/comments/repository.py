"""Repository protocol for comments."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .models import Comment, CommentWithAuthor


class CommentRepository(Protocol):
    async def get_by_id(self, comment_id: str) -> Comment | None:
        ...

    async def list_for_post(self, post_id: str) -> Sequence[CommentWithAuthor]:
        ...

    async def list_comments(self, *, skip: int, limit: int, ascending: bool) -> Sequence[Comment]:
        ...

    async def count(self, *, created_since: Optional[datetime] = None) -> int:
        ...

    async def create_comment(self, *, content: str, post_id: str, user_id: str) -> Comment:
        ...

    async def update_content(self, comment_id: str, content: str) -> Comment | None:
        ...

    async def toggle_like(self, comment_id: str, account_id: str) -> Comment | None:
        """Flip the account's like and return the comment, or None if it does not exist."""
        ...

    async def delete_comment(self, comment_id: str) -> bool:
        ...
