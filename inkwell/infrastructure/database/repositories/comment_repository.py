"""SQLAlchemy implementation of the comment repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import delete, func, insert, select, update

from inkwell.infrastructure.database.models import (
    Account as AccountModel,
    Comment as CommentModel,
    CommentLike as CommentLikeModel,
    utc_now,
)
from inkwell.modules.comments.models import Comment, CommentWithAuthor
from inkwell.modules.comments.repository import CommentRepository

from .base import SqlRepository


class SqlCommentRepository(SqlRepository, CommentRepository):
    conflict_message = "Comment was modified concurrently, try again"

    async def get_by_id(self, comment_id: str) -> Comment | None:
        stmt = (
            select(CommentModel)
            .where(CommentModel.id == comment_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        likes = await self._likes_for([model.id])
        return self._to_domain(model, likes.get(model.id, []))

    async def list_for_post(self, post_id: str) -> Sequence[CommentWithAuthor]:
        stmt = (
            select(CommentModel, AccountModel.username, AccountModel.profile_picture)
            .outerjoin(AccountModel, AccountModel.id == CommentModel.user_id)
            .where(CommentModel.post_id == post_id)
            .order_by(CommentModel.created_at.desc())
        )
        result = await self._execute(stmt)
        rows = result.all()
        likes = await self._likes_for([row[0].id for row in rows])
        return [
            CommentWithAuthor(
                comment=self._to_domain(model, likes.get(model.id, [])),
                username=username,
                profile_picture=profile_picture,
            )
            for model, username, profile_picture in rows
        ]

    async def list_comments(
        self,
        *,
        skip: int = 0,
        limit: int = 9,
        ascending: bool = True,
    ) -> Sequence[Comment]:
        order = CommentModel.created_at.asc() if ascending else CommentModel.created_at.desc()
        stmt = select(CommentModel).order_by(order).offset(skip).limit(limit)
        result = await self._execute(stmt)
        models = result.scalars().all()
        likes = await self._likes_for([model.id for model in models])
        return [self._to_domain(model, likes.get(model.id, [])) for model in models]

    async def count(self, *, created_since: Optional[datetime] = None) -> int:
        stmt = select(func.count()).select_from(CommentModel)
        if created_since is not None:
            stmt = stmt.where(CommentModel.created_at >= created_since)
        result = await self._execute(stmt)
        return int(result.scalar_one())

    async def create_comment(self, *, content: str, post_id: str, user_id: str) -> Comment:
        model = CommentModel(content=content, post_id=post_id, user_id=user_id, number_of_likes=0)
        await self._add(model)
        return self._to_domain(model, [])

    async def update_content(self, comment_id: str, content: str) -> Comment | None:
        stmt = (
            update(CommentModel)
            .where(CommentModel.id == comment_id)
            .values(content=content, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_by_id(comment_id)

    async def toggle_like(self, comment_id: str, account_id: str) -> Comment | None:
        # Statement order matters: the first statement is a write, so the
        # transaction holds the write lock before anything is read.
        removed = await self._execute(
            delete(CommentLikeModel).where(
                CommentLikeModel.comment_id == comment_id,
                CommentLikeModel.account_id == account_id,
            )
        )
        if removed.rowcount == 0:
            await self._execute(
                insert(CommentLikeModel).values(
                    comment_id=comment_id,
                    account_id=account_id,
                    created_at=utc_now(),
                )
            )

        # The count is derived from the like set in the same UPDATE, so the
        # two can never drift apart.
        like_count = (
            select(func.count())
            .select_from(CommentLikeModel)
            .where(CommentLikeModel.comment_id == comment_id)
            .scalar_subquery()
        )
        updated = await self._execute(
            update(CommentModel)
            .where(CommentModel.id == comment_id)
            .values(number_of_likes=like_count, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        if updated.rowcount == 0:
            return None
        return await self.get_by_id(comment_id)

    async def delete_comment(self, comment_id: str) -> bool:
        await self._execute(delete(CommentLikeModel).where(CommentLikeModel.comment_id == comment_id))
        result = await self._execute(delete(CommentModel).where(CommentModel.id == comment_id))
        return result.rowcount > 0

    async def _likes_for(self, comment_ids: list[str]) -> dict[str, list[str]]:
        if not comment_ids:
            return {}
        stmt = (
            select(CommentLikeModel.comment_id, CommentLikeModel.account_id)
            .where(CommentLikeModel.comment_id.in_(comment_ids))
            .order_by(CommentLikeModel.created_at)
        )
        result = await self._execute(stmt)
        likes: dict[str, list[str]] = {}
        for comment_id, account_id in result.all():
            likes.setdefault(comment_id, []).append(account_id)
        return likes

    @staticmethod
    def _to_domain(model: CommentModel, likes: list[str]) -> Comment:
        return Comment(
            id=str(model.id),
            content=model.content,
            post_id=model.post_id,
            user_id=model.user_id,
            likes=likes,
            number_of_likes=int(model.number_of_likes or 0),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
