"""Blob storage backends for uploaded files."""

from .base import BlobMetadata, BlobStore, StoredBlob
from .local import LocalBlobStore

__all__ = ["BlobMetadata", "BlobStore", "LocalBlobStore", "StoredBlob"]
