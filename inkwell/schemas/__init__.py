"""Pydantic schemas used across the HTTP layer.

Request bodies keep their fields optional on purpose: missing values reach the
services, which answer with the domain's own ``invalid_input`` message instead
of a generic validation error.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# ---------------------------------------------------------------- accounts


class AccountResponse(BaseModel):
    id: str
    username: str
    email: str
    profile_picture: Optional[str] = None
    role: str
    auth_provider: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SignupRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class SigninRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class GoogleLoginRequest(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    google_id: Optional[str] = None
    photo_url: Optional[str] = None


class AuthResponse(BaseModel):
    user: AccountResponse
    access_token: str
    token_type: str = "bearer"


class UserUpdateRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    profile_picture: Optional[str] = None


class RoleUpdateRequest(BaseModel):
    role: Optional[str] = None


class StatusUpdateRequest(BaseModel):
    is_active: bool


class AccountListResponse(BaseModel):
    users: list[AccountResponse]
    total_users: int
    last_month_users: int


# ------------------------------------------------------------------- posts


class PostWriteRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None


class PostResponse(BaseModel):
    id: str
    user_id: str
    author_name: Optional[str] = None
    title: str
    content: str
    category: str
    image: str
    slug: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PostLinkResponse(BaseModel):
    title: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class PostDetailResponse(BaseModel):
    post: PostResponse
    previous: Optional[PostLinkResponse] = None
    next: Optional[PostLinkResponse] = None

    model_config = ConfigDict(from_attributes=True)


class PostListResponse(BaseModel):
    posts: list[PostResponse]
    total_posts: int
    last_month_posts: int


# ---------------------------------------------------------------- comments


class CommentCreateRequest(BaseModel):
    content: Optional[str] = None
    post_id: Optional[str] = None
    user_id: Optional[str] = None


class CommentEditRequest(BaseModel):
    content: Optional[str] = None


class CommentResponse(BaseModel):
    id: str
    content: str
    post_id: str
    user_id: str
    likes: list[str] = Field(default_factory=list)
    number_of_likes: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CommentWithAuthorResponse(CommentResponse):
    username: Optional[str] = None
    profile_picture: Optional[str] = None


class CommentListResponse(BaseModel):
    comments: list[CommentResponse]
    total_comments: int
    last_month_comments: int


# --------------------------------------------------------------- downloads


class DownloadResponse(BaseModel):
    id: str
    title: str
    filename: str
    mime_type: Optional[str] = None
    size_bytes: int
    file_url: str
    image_path: str
    uploaded_by: Optional[str] = None
    is_published: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AdminDownloadResponse(DownloadResponse):
    object_id: str
