"""Post use cases: publishing, editing and browsing articles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.core.authorization import ensure_admin, ensure_can_mutate
from inkwell.core.security import Identity
from inkwell.modules.accounts import AccountNotFoundError, AccountService

from .exceptions import InvalidPostError, PostNotFoundError
from .models import (
    CATEGORIES,
    Post,
    PostCreateInput,
    PostFilter,
    PostLink,
    PostPage,
    PostUpdateInput,
    PostWithNeighbors,
    slugify,
)
from .repository import PostRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PostService:
    repository: PostRepository
    accounts: AccountService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "PostService":
        from inkwell.infrastructure.database.repositories.post_repository import SqlPostRepository

        return cls(SqlPostRepository(session), AccountService.with_session(session))

    async def create_post(self, identity: Identity, payload: PostCreateInput) -> Post:
        ensure_admin(identity, "You are not allowed to create a post")
        if not all((payload.title, payload.content, payload.category, payload.image)):
            raise InvalidPostError("Please provide all required fields, including image")
        _validate_category(payload.category)
        slug = _slug_for(payload.title)

        author = await self.accounts.get_by_id(identity.account_id)
        if author is None:
            raise AccountNotFoundError()

        post = await self.repository.create_post(
            user_id=identity.account_id,
            author_name=author.username,
            title=payload.title,
            content=payload.content,
            category=payload.category,
            image=payload.image,
            slug=slug,
        )
        logger.info("Account %s published post %s", identity.account_id, post.id)
        return post

    async def update_post(self, identity: Identity, post_id: str, payload: PostUpdateInput) -> Post:
        post = await self.get_post(post_id)
        ensure_can_mutate(identity, post.user_id, "You are not allowed to update this post")

        values = payload.provided()
        if not values:
            raise InvalidPostError("At least one field must be updated")
        if "category" in values:
            _validate_category(values["category"])
        if "title" in values:
            values["slug"] = _slug_for(values["title"])

        updated = await self.repository.update_post(post_id, values)
        if updated is None:
            raise PostNotFoundError()
        return updated

    async def delete_post(self, identity: Identity, post_id: str) -> None:
        post = await self.get_post(post_id)
        ensure_can_mutate(identity, post.user_id, "You are not allowed to delete this post")
        if not await self.repository.delete_post(post_id):
            raise PostNotFoundError()
        logger.info("Account %s deleted post %s", identity.account_id, post_id)

    async def get_post(self, post_id: str) -> Post:
        post = await self.repository.get_by_id(post_id)
        if post is None:
            raise PostNotFoundError()
        return post

    async def get_by_slug(self, slug: str) -> PostWithNeighbors:
        post = await self.repository.get_by_slug(slug)
        if post is None:
            raise PostNotFoundError()
        older = await self.repository.get_older(post.created_at)
        newer = await self.repository.get_newer(post.created_at)
        return PostWithNeighbors(
            post=post,
            previous=PostLink(title=older.title, slug=older.slug) if older else None,
            next=PostLink(title=newer.title, slug=newer.slug) if newer else None,
        )

    async def list_posts(
        self,
        criteria: PostFilter,
        *,
        skip: int = 0,
        limit: int = 9,
        ascending: bool = False,
    ) -> PostPage:
        if skip < 0 or limit < 0:
            raise InvalidPostError("Invalid pagination parameters")
        posts = await self.repository.find(criteria, skip=skip, limit=limit, ascending=ascending)
        total = await self.repository.count(criteria)
        one_month_ago = datetime.now(timezone.utc) - timedelta(days=30)
        last_month = await self.repository.count(created_since=one_month_ago)
        return PostPage(posts=list(posts), total=total, last_month=last_month)


def _validate_category(category: str) -> None:
    if category not in CATEGORIES:
        raise InvalidPostError("Invalid category")


def _slug_for(title: str) -> str:
    slug = slugify(title)
    if not slug:
        raise InvalidPostError("Title must contain letters or numbers")
    return slug
