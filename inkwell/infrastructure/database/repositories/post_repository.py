"""SQLAlchemy implementation of the post repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import delete, func, or_, select, update

from inkwell.infrastructure.database.models import (
    Comment as CommentModel,
    CommentLike as CommentLikeModel,
    Post as PostModel,
    utc_now,
)
from inkwell.modules.posts.models import Post, PostFilter
from inkwell.modules.posts.repository import PostRepository

from .base import SqlRepository


class SqlPostRepository(SqlRepository, PostRepository):
    conflict_message = "A post with this title already exists"

    async def get_by_id(self, post_id: str) -> Post | None:
        return await self._first(select(PostModel).where(PostModel.id == post_id))

    async def get_by_slug(self, slug: str) -> Post | None:
        return await self._first(select(PostModel).where(PostModel.slug == slug))

    async def get_older(self, created_at: datetime) -> Post | None:
        stmt = (
            select(PostModel)
            .where(PostModel.created_at < created_at)
            .order_by(PostModel.created_at.desc())
            .limit(1)
        )
        return await self._first(stmt)

    async def get_newer(self, created_at: datetime) -> Post | None:
        stmt = (
            select(PostModel)
            .where(PostModel.created_at > created_at)
            .order_by(PostModel.created_at.asc())
            .limit(1)
        )
        return await self._first(stmt)

    async def find(
        self,
        criteria: PostFilter,
        *,
        skip: int = 0,
        limit: int = 9,
        ascending: bool = False,
    ) -> Sequence[Post]:
        order = PostModel.updated_at.asc() if ascending else PostModel.updated_at.desc()
        stmt = (
            select(PostModel)
            .where(*self._conditions(criteria))
            .order_by(order)
            .offset(skip)
            .limit(limit)
        )
        result = await self._execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count(
        self,
        criteria: Optional[PostFilter] = None,
        *,
        created_since: Optional[datetime] = None,
    ) -> int:
        stmt = select(func.count()).select_from(PostModel)
        if criteria is not None:
            stmt = stmt.where(*self._conditions(criteria))
        if created_since is not None:
            stmt = stmt.where(PostModel.created_at >= created_since)
        result = await self._execute(stmt)
        return int(result.scalar_one())

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
        model = PostModel(
            user_id=user_id,
            author_name=author_name,
            title=title,
            content=content,
            category=category,
            image=image,
            slug=slug,
        )
        await self._add(model)
        return self._to_domain(model)

    async def update_post(self, post_id: str, values: dict[str, Any]) -> Post | None:
        stmt = (
            update(PostModel)
            .where(PostModel.id == post_id)
            .values(**values, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt)
        if result.rowcount == 0:
            return None
        stmt = select(PostModel).where(PostModel.id == post_id).execution_options(populate_existing=True)
        return await self._first(stmt)

    async def delete_post(self, post_id: str) -> bool:
        comment_ids = select(CommentModel.id).where(CommentModel.post_id == post_id)
        await self._execute(delete(CommentLikeModel).where(CommentLikeModel.comment_id.in_(comment_ids)))
        await self._execute(delete(CommentModel).where(CommentModel.post_id == post_id))
        result = await self._execute(delete(PostModel).where(PostModel.id == post_id))
        return result.rowcount > 0

    async def _first(self, stmt: Any) -> Post | None:
        result = await self._execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    @staticmethod
    def _conditions(criteria: PostFilter) -> list[Any]:
        conditions: list[Any] = []
        if criteria.user_id:
            conditions.append(PostModel.user_id == criteria.user_id)
        if criteria.category:
            conditions.append(PostModel.category == criteria.category)
        if criteria.slug:
            conditions.append(PostModel.slug == criteria.slug)
        if criteria.post_id:
            conditions.append(PostModel.id == criteria.post_id)
        if criteria.search_term:
            pattern = f"%{criteria.search_term.lower()}%"
            conditions.append(
                or_(
                    func.lower(PostModel.title).like(pattern),
                    func.lower(PostModel.content).like(pattern),
                )
            )
        return conditions

    @staticmethod
    def _to_domain(model: PostModel) -> Post:
        return Post(
            id=str(model.id),
            user_id=model.user_id,
            title=model.title,
            content=model.content,
            category=model.category,
            image=model.image,
            slug=model.slug,
            author_name=model.author_name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
