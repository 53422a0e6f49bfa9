"""Image upload and file serving routes"""

import logging
from uuid import UUID

import anyio
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from api.dependencies import get_db, require_identity
from api.responses import DeletedResponse, ERROR_RESPONSES
from domain.schemas import UploadResultResponse, UploadUrlResponse
from services.image_service import check_upload_size
from services.storage_service import StorageService

router = APIRouter(prefix="/storage", tags=["Storage"], responses=ERROR_RESPONSES)
logger = logging.getLogger("lechef.api.storage")


async def read_limited_body(request: Request) -> bytes:
    """Request body, refused once it passes ``settings.max_upload_bytes``"""
    declared = request.headers.get("content-length")
    if declared and declared.isdigit():
        check_upload_size(int(declared))

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        check_upload_size(len(body))
    return bytes(body)


@router.post("/upload-url", response_model=UploadUrlResponse)
def generate_upload_url(
    identity: str = Depends(require_identity), db: Session = Depends(get_db)
):
    """Issue a single-use URL the client PUTs the image bytes to"""
    return UploadUrlResponse(**StorageService.generate_upload_url(db, identity))


@router.put("/upload/{token}", response_model=UploadResultResponse)
async def upload_file(token: str, request: Request, db: Session = Depends(get_db)):
    """
    Receive the raw image body for an issued upload URL.

    The image is validated, downsized and recompressed before it is stored.
    """
    data = await read_limited_body(request)
    # Pillow work and the DB session stay off the event loop
    stored = await anyio.to_thread.run_sync(
        StorageService.complete_upload, db, token, data, request.headers.get("content-type")
    )
    return UploadResultResponse(
        storage_id=stored.storage_id,
        content_type=stored.content_type,
        size_bytes=stored.size_bytes,
        url=StorageService.file_url(stored.storage_id),
    )


@router.get("/files/{storage_id}")
def get_file(storage_id: UUID, db: Session = Depends(get_db)):
    data, content_type = StorageService.read_file(db, storage_id)
    return Response(content=data, media_type=content_type)


@router.delete("/files/{storage_id}", response_model=DeletedResponse)
def delete_file(
    storage_id: UUID,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    StorageService.delete_file(db, identity, storage_id)
    return DeletedResponse(removed=str(storage_id))
