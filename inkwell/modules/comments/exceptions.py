"""Comment domain specific exceptions."""

from inkwell.core.errors import InvalidInputError, NotFoundError


class CommentNotFoundError(NotFoundError):
    default_message = "Comment not found"


class InvalidCommentError(InvalidInputError):
    """Raised when comment content is blank or references are missing."""
