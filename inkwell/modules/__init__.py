"""Domain modules and their public exports."""

from . import accounts, auth, comments, downloads, posts

__all__ = [
    "accounts",
    "auth",
    "comments",
    "downloads",
    "posts",
]
