"""Post domain specific exceptions."""

from inkwell.core.errors import InvalidInputError, NotFoundError


class PostNotFoundError(NotFoundError):
    default_message = "Post not found"


class InvalidPostError(InvalidInputError):
    """Raised for missing fields, unknown categories or unusable titles."""
