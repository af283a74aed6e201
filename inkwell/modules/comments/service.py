"""Comment use cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.core.authorization import ensure_admin, ensure_can_mutate
from inkwell.core.errors import ForbiddenError
from inkwell.core.security import Identity
from inkwell.modules.posts import PostNotFoundError
from inkwell.modules.posts.repository import PostRepository

from .exceptions import CommentNotFoundError, InvalidCommentError
from .models import Comment, CommentPage, CommentWithAuthor
from .repository import CommentRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommentService:
    repository: CommentRepository
    posts: PostRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "CommentService":
        from inkwell.infrastructure.database.repositories.comment_repository import SqlCommentRepository
        from inkwell.infrastructure.database.repositories.post_repository import SqlPostRepository

        return cls(SqlCommentRepository(session), SqlPostRepository(session))

    async def create_comment(
        self,
        identity: Identity,
        *,
        content: Optional[str],
        post_id: Optional[str],
        user_id: Optional[str] = None,
    ) -> Comment:
        if not content or not content.strip() or not post_id:
            raise InvalidCommentError("Content and postId are required")
        if user_id is not None and user_id != identity.account_id:
            raise ForbiddenError("You are not allowed to create this comment")
        if await self.posts.get_by_id(post_id) is None:
            raise PostNotFoundError()
        return await self.repository.create_comment(
            content=content,
            post_id=post_id,
            user_id=identity.account_id,
        )

    async def list_for_post(self, slug: str) -> list[CommentWithAuthor]:
        if not slug:
            raise InvalidCommentError("Slug is required")
        post = await self.posts.get_by_slug(slug)
        if post is None:
            raise PostNotFoundError()
        return list(await self.repository.list_for_post(post.id))

    async def toggle_like(self, identity: Identity, comment_id: str) -> Comment:
        comment = await self.repository.toggle_like(comment_id, identity.account_id)
        if comment is None:
            raise CommentNotFoundError()
        return comment

    async def edit_comment(self, identity: Identity, comment_id: str, content: Optional[str]) -> Comment:
        comment = await self._require(comment_id)
        if not content or not content.strip():
            raise InvalidCommentError("Comment content cannot be empty")
        ensure_can_mutate(identity, comment.user_id, "You are not allowed to edit this comment")
        updated = await self.repository.update_content(comment_id, content)
        if updated is None:
            raise CommentNotFoundError()
        return updated

    async def delete_comment(self, identity: Identity, comment_id: str) -> None:
        comment = await self._require(comment_id)
        ensure_can_mutate(identity, comment.user_id, "You are not allowed to delete this comment")
        if not await self.repository.delete_comment(comment_id):
            raise CommentNotFoundError()
        logger.info("Account %s deleted comment %s", identity.account_id, comment_id)

    async def list_comments(
        self,
        identity: Identity,
        *,
        skip: int = 0,
        limit: int = 9,
        ascending: bool = True,
    ) -> CommentPage:
        ensure_admin(identity, "You are not allowed to see all comments")
        if skip < 0 or limit < 0:
            raise InvalidCommentError("Invalid pagination parameters")
        comments = await self.repository.list_comments(skip=skip, limit=limit, ascending=ascending)
        total = await self.repository.count()
        one_month_ago = datetime.now(timezone.utc) - timedelta(days=30)
        last_month = await self.repository.count(created_since=one_month_ago)
        return CommentPage(comments=list(comments), total=total, last_month=last_month)

    async def _require(self, comment_id: str) -> Comment:
        comment = await self.repository.get_by_id(comment_id)
        if comment is None:
            raise CommentNotFoundError()
        return comment
