"""Post domain exports."""

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
from .service import PostService

__all__ = [
    "CATEGORIES",
    "InvalidPostError",
    "Post",
    "PostCreateInput",
    "PostFilter",
    "PostLink",
    "PostNotFoundError",
    "PostPage",
    "PostService",
    "PostUpdateInput",
    "PostWithNeighbors",
    "slugify",
]
