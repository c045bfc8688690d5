"""
PhotoShare Backend — Photo Route Handlers
===========================================

What:  Upload, list, edit, like and delete photos.
How:   Every route depends on `require_user_id` (the auth gate) and a
       per-request database session, then delegates to PhotoService.
Who:   Called by the frontend gallery.

Upload Flow:
    1. Auth gate resolves the caller (401/403 before the body is used)
    2. Media relay validates and uploads the file, returns a public URL
    3. PhotoService persists the Photo with the caller as owner
    A failed upload (step 2) never reaches step 3.
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from photoshare.database import get_db_session
from photoshare.dependencies import require_user_id
from photoshare.schemas.common import ErrorResponse, MessageResponse
from photoshare.schemas.photo import (
    DescriptionUpdate,
    LikeResponse,
    PhotoResponse,
    PhotoUpdateResponse,
    UploadResponse,
)
from photoshare.services.media_service import media_relay
from photoshare.services.photo_service import photo_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Photos"])

AUTH_RESPONSES = {
    401: {"description": "No token provided", "model": ErrorResponse},
    403: {"description": "Invalid token or not the owner", "model": ErrorResponse},
}


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        **AUTH_RESPONSES,
        400: {"description": "Missing, empty, oversized or unsupported file", "model": ErrorResponse},
        500: {"description": "Media host or database failure", "model": ErrorResponse},
    },
    summary="Upload a photo",
)
async def upload_photo(
    file: UploadFile = File(..., alias="photo", description="Image file (png, jpg, jpeg, gif, webp)"),
    description: str = Form(default=""),
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> UploadResponse:
    content = await file.read()
    logger.info(
        "Received upload: filename=%s, size=%d bytes",
        file.filename or "unknown",
        len(content),
    )
    try:
        url = await media_relay.store(file.filename or "", content)
    finally:
        await file.close()

    photo = await photo_service.create(db, owner_id=user_id, url=url, description=description)
    return UploadResponse(photo=photo)


@router.get(
    "/photos",
    response_model=List[PhotoResponse],
    responses={**AUTH_RESPONSES, 500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all photos, newest first",
)
async def list_photos(
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[PhotoResponse]:
    return await photo_service.list_photos(db)


@router.put(
    "/photos/{photo_id}/description",
    response_model=PhotoUpdateResponse,
    responses={**AUTH_RESPONSES, 404: {"description": "Photo not found", "model": ErrorResponse}},
    summary="Edit a photo's description (owner only)",
)
async def update_description(
    photo_id: uuid.UUID,
    body: DescriptionUpdate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> PhotoUpdateResponse:
    photo = await photo_service.update_description(
        db,
        photo_id=photo_id,
        caller_id=user_id,
        description=body.description,
    )
    return PhotoUpdateResponse(photo=photo)


@router.post(
    "/photos/{photo_id}/like",
    response_model=LikeResponse,
    responses={**AUTH_RESPONSES, 404: {"description": "Photo not found", "model": ErrorResponse}},
    summary="Like or unlike a photo",
)
async def toggle_like(
    photo_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> LikeResponse:
    likes = await photo_service.toggle_like(db, photo_id=photo_id, caller_id=user_id)
    return LikeResponse(likes=likes)


@router.delete(
    "/photos/{photo_id}",
    response_model=MessageResponse,
    responses={**AUTH_RESPONSES, 404: {"description": "Photo not found", "model": ErrorResponse}},
    summary="Delete a photo and its comments (owner only)",
)
async def delete_photo(
    photo_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await photo_service.delete(db, photo_id=photo_id, caller_id=user_id)
    return MessageResponse(message="Photo deleted")
