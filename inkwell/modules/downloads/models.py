"""Domain models for downloadable files."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Download:
    id: str
    title: str
    filename: str
    file_url: str
    object_id: str
    image_path: str
    size_bytes: int = 0
    mime_type: Optional[str] = None
    uploaded_by: Optional[str] = None
    is_published: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class DownloadUploadInput:
    title: Optional[str]
    image_path: Optional[str]
    filename: Optional[str]
    content_type: Optional[str] = None
