"""Post endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.api.deps import commit, get_current_identity, get_db_session
from inkwell.core.security import Identity
from inkwell.modules.posts import PostCreateInput, PostFilter, PostService, PostUpdateInput
from inkwell.modules.posts.models import UNSET
from inkwell.schemas import (
    MessageResponse,
    PostDetailResponse,
    PostListResponse,
    PostResponse,
    PostWriteRequest,
)

router = APIRouter()


@router.post("/create", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostWriteRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    post = await PostService.with_session(db).create_post(
        identity,
        PostCreateInput(
            title=payload.title,
            content=payload.content,
            category=payload.category,
            image=payload.image,
        ),
    )
    await commit(db)
    return post


@router.get("/getposts", response_model=PostListResponse)
async def list_posts(
    user_id: Optional[str] = None,
    category: Optional[str] = None,
    slug: Optional[str] = None,
    post_id: Optional[str] = None,
    search_term: Optional[str] = None,
    start_index: int = 0,
    limit: int = 9,
    order: str = "desc",
    db: AsyncSession = Depends(get_db_session),
):
    page = await PostService.with_session(db).list_posts(
        PostFilter(
            user_id=user_id,
            category=category,
            slug=slug,
            post_id=post_id,
            search_term=search_term,
        ),
        skip=start_index,
        limit=limit,
        ascending=order == "asc",
    )
    return PostListResponse(
        posts=[PostResponse.model_validate(post) for post in page.posts],
        total_posts=page.total,
        last_month_posts=page.last_month,
    )


@router.get("/getpost/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, db: AsyncSession = Depends(get_db_session)):
    return await PostService.with_session(db).get_post(post_id)


@router.get("/post/{slug}", response_model=PostDetailResponse)
async def get_post_by_slug(slug: str, db: AsyncSession = Depends(get_db_session)):
    return await PostService.with_session(db).get_by_slug(slug)


@router.put("/update/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    payload: PostWriteRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    provided = payload.model_fields_set
    update = PostUpdateInput(
        title=payload.title if "title" in provided else UNSET,
        content=payload.content if "content" in provided else UNSET,
        category=payload.category if "category" in provided else UNSET,
        image=payload.image if "image" in provided else UNSET,
    )
    post = await PostService.with_session(db).update_post(identity, post_id, update)
    await commit(db)
    return post


@router.delete("/deleteposts/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    await PostService.with_session(db).delete_post(identity, post_id)
    await commit(db)
    return MessageResponse(message="The post has been deleted")
