"""Comment endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.api.deps import commit, get_current_identity, get_db_session
from inkwell.core.security import Identity
from inkwell.modules.comments import CommentService
from inkwell.schemas import (
    CommentCreateRequest,
    CommentEditRequest,
    CommentListResponse,
    CommentResponse,
    CommentWithAuthorResponse,
    MessageResponse,
)

router = APIRouter()


@router.post("/create", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: CommentCreateRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    comment = await CommentService.with_session(db).create_comment(
        identity,
        content=payload.content,
        post_id=payload.post_id,
        user_id=payload.user_id,
    )
    await commit(db)
    return comment


@router.get("/getPostComments/{slug}", response_model=list[CommentWithAuthorResponse])
async def list_post_comments(slug: str, db: AsyncSession = Depends(get_db_session)):
    entries = await CommentService.with_session(db).list_for_post(slug)
    return [
        CommentWithAuthorResponse(
            **CommentResponse.model_validate(entry.comment).model_dump(),
            username=entry.username,
            profile_picture=entry.profile_picture,
        )
        for entry in entries
    ]


@router.patch("/likeComment/{comment_id}", response_model=CommentResponse)
async def like_comment(
    comment_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    comment = await CommentService.with_session(db).toggle_like(identity, comment_id)
    await commit(db)
    return comment


@router.put("/editComment/{comment_id}", response_model=CommentResponse)
async def edit_comment(
    comment_id: str,
    payload: CommentEditRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    comment = await CommentService.with_session(db).edit_comment(identity, comment_id, payload.content)
    await commit(db)
    return comment


@router.delete("/deleteComment/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    await CommentService.with_session(db).delete_comment(identity, comment_id)
    await commit(db)
    return MessageResponse(message="Comment has been deleted")


@router.get("/comments", response_model=CommentListResponse)
async def list_comments(
    start_index: int = 0,
    limit: int = 9,
    sort: str = "asc",
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    page = await CommentService.with_session(db).list_comments(
        identity,
        skip=start_index,
        limit=limit,
        ascending=sort != "desc",
    )
    return CommentListResponse(
        comments=[CommentResponse.model_validate(comment) for comment in page.comments],
        total_comments=page.total,
        last_month_comments=page.last_month,
    )
