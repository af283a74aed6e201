"""Download domain specific exceptions."""

from inkwell.core.errors import InvalidInputError, NotFoundError


class DownloadNotFoundError(NotFoundError):
    default_message = "File not found"


class InvalidDownloadError(InvalidInputError):
    pass
