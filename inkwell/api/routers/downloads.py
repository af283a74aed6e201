"""Downloadable file endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.api.deps import (
    commit,
    get_container,
    get_current_identity,
    get_db_session,
    get_optional_identity,
)
from inkwell.core.container import ApplicationContainer
from inkwell.core.errors import PartialDeletionError, StorageUnavailableError
from inkwell.core.security import Identity
from inkwell.modules.downloads import DownloadService, DownloadUploadInput
from inkwell.schemas import AdminDownloadResponse, DownloadResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _service(db: AsyncSession, container: ApplicationContainer) -> DownloadService:
    return DownloadService.with_session(db, container.blob_store)


@router.post("/upload", response_model=DownloadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    filename: Optional[str] = Form(None),
    image_path: Optional[str] = Form(None),
    identity: Identity = Depends(get_current_identity),
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
):
    service = _service(db, container)
    payload = DownloadUploadInput(
        title=filename,
        image_path=image_path,
        filename=file.filename if file is not None else None,
        content_type=file.content_type if file is not None else None,
    )
    try:
        download = await service.upload(identity, file, payload)
    finally:
        if file is not None:
            await file.close()
    try:
        await commit(db)
    except StorageUnavailableError:
        await container.blob_store.delete(download.object_id)
        raise
    return download


@router.get("/published", response_model=list[DownloadResponse])
async def list_published(
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
):
    return await _service(db, container).list_published()


@router.get("/", response_model=list[AdminDownloadResponse])
async def list_all(
    identity: Identity = Depends(get_current_identity),
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
):
    return await _service(db, container).list_all(identity)


@router.patch("/{download_id}/publish", response_model=DownloadResponse)
async def publish_file(
    download_id: str,
    identity: Identity = Depends(get_current_identity),
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
):
    download = await _service(db, container).publish(identity, download_id)
    await commit(db)
    return download


@router.get("/download/{download_id}")
async def download_file(
    download_id: str,
    identity: Optional[Identity] = Depends(get_optional_identity),
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
):
    download = await _service(db, container).resolve(identity, download_id)
    return RedirectResponse(download.file_url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.delete("/{download_id}", response_model=MessageResponse)
async def delete_file(
    download_id: str,
    identity: Identity = Depends(get_current_identity),
    container: ApplicationContainer = Depends(get_container),
    db: AsyncSession = Depends(get_db_session),
):
    await _service(db, container).delete(identity, download_id)
    try:
        await commit(db)
    except StorageUnavailableError as exc:
        logger.error("Blob for download %s removed but the record delete was not committed", download_id)
        raise PartialDeletionError("File was removed from storage but its record could not be deleted") from exc
    return MessageResponse(message="File has been deleted")
