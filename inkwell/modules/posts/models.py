"""Domain models for posts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

CATEGORIES = ("pendidikan", "sosial", "ekonomi", "politik", "cerpen", "puisi")

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def slugify(title: str) -> str:
    """``"Hello, World! 2024"`` -> ``"hello-world-2024"``."""
    cleaned = _NON_SLUG_CHARS.sub("", title.lower())
    return _WHITESPACE.sub("-", cleaned.strip())


@dataclass(slots=True)
class Post:
    id: str
    user_id: str
    title: str
    content: str
    category: str
    image: str
    slug: str
    author_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class PostCreateInput:
    title: str
    content: str
    category: str
    image: str


UNSET = object()


@dataclass(slots=True)
class PostUpdateInput:
    title: Optional[str] | object = UNSET
    content: Optional[str] | object = UNSET
    category: Optional[str] | object = UNSET
    image: Optional[str] | object = UNSET

    def provided(self) -> dict[str, str]:
        """Fields that were supplied with a non-empty value."""
        values = {
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "image": self.image,
        }
        return {key: value for key, value in values.items() if value is not UNSET and value}


@dataclass(slots=True)
class PostFilter:
    user_id: Optional[str] = None
    category: Optional[str] = None
    slug: Optional[str] = None
    post_id: Optional[str] = None
    search_term: Optional[str] = None


@dataclass(slots=True)
class PostPage:
    posts: list[Post]
    total: int
    last_month: int


@dataclass(slots=True)
class PostLink:
    title: str
    slug: str


@dataclass(slots=True)
class PostWithNeighbors:
    post: Post
    previous: Optional[PostLink] = None
    next: Optional[PostLink] = None
