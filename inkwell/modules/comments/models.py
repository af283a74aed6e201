"""Domain models for comments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Comment:
    id: str
    content: str
    post_id: str
    user_id: str
    likes: list[str] = field(default_factory=list)
    number_of_likes: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class CommentWithAuthor:
    comment: Comment
    username: Optional[str] = None
    profile_picture: Optional[str] = None


@dataclass(slots=True)
class CommentPage:
    comments: list[Comment]
    total: int
    last_month: int
