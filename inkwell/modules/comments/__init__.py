"""Comment domain exports."""

from .exceptions import CommentNotFoundError, InvalidCommentError
from .models import Comment, CommentPage, CommentWithAuthor
from .service import CommentService

__all__ = [
    "Comment",
    "CommentNotFoundError",
    "CommentPage",
    "CommentService",
    "CommentWithAuthor",
    "InvalidCommentError",
]
