"""Download domain exports."""

from .exceptions import DownloadNotFoundError, InvalidDownloadError
from .models import Download, DownloadUploadInput
from .service import DownloadService

__all__ = [
    "Download",
    "DownloadNotFoundError",
    "DownloadService",
    "DownloadUploadInput",
    "InvalidDownloadError",
]
