"""
PhotoShare Backend — Comment Route Handlers
=============================================

What:  POST /photos/{id}/comment and DELETE /photos/{photoId}/comment/{commentId}.
How:   Auth gate, then CommentService. Comment creation is registered once.
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from photoshare.database import get_db_session
from photoshare.dependencies import require_user_id
from photoshare.routes.photos import AUTH_RESPONSES
from photoshare.schemas.common import ErrorResponse, MessageResponse
from photoshare.schemas.photo import CommentCreate, CommentsResponse
from photoshare.services.comment_service import comment_service

router = APIRouter(tags=["Comments"])


@router.post(
    "/photos/{photo_id}/comment",
    response_model=CommentsResponse,
    responses={**AUTH_RESPONSES, 404: {"description": "Photo not found", "model": ErrorResponse}},
    summary="Comment on a photo",
)
async def add_comment(
    photo_id: uuid.UUID,
    body: CommentCreate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> CommentsResponse:
    comments = await comment_service.add(db, photo_id=photo_id, caller_id=user_id, text=body.text)
    return CommentsResponse(comments=comments)


@router.delete(
    "/photos/{photo_id}/comment/{comment_id}",
    response_model=MessageResponse,
    responses={
        **AUTH_RESPONSES,
        404: {"description": "Photo or comment not found", "model": ErrorResponse},
    },
    summary="Delete your own comment",
)
async def delete_comment(
    photo_id: uuid.UUID,
    comment_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await comment_service.remove(db, photo_id=photo_id, comment_id=comment_id, caller_id=user_id)
    return MessageResponse(message="Comment deleted")
