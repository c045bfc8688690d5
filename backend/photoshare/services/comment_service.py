"""
PhotoShare Backend — Comment Service
======================================

What:  Append comments to a photo's thread and remove them again.
How:   Comments are part of the Photo aggregate. They are appended to
       `Photo.comments` (an ordering_list, so position = append index) and
       removed from it (delete-orphan drops the row). A comment is never
       loaded or written on its own.
Who:   Called by the comment route handlers.
"""

import logging
import uuid
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photoshare.exceptions import NotFoundError, PersistenceError, PhotoShareError
from photoshare.models.photo import Comment
from photoshare.models.user import User
from photoshare.schemas.photo import CommentResponse
from photoshare.services.ownership import ensure_owner
from photoshare.services.photo_service import load_photo

logger = logging.getLogger(__name__)


class CommentService:
    """Business logic for comments embedded in photos."""

    async def add(
        self,
        db: AsyncSession,
        photo_id: uuid.UUID,
        caller_id: uuid.UUID,
        text: str,
    ) -> List[CommentResponse]:
        """
        Append a comment by the caller to the end of a photo's thread.

        Returns:
            The photo's full comment sequence, oldest first, authors resolved

        Raises:
            NotFoundError: photo absent, or caller's account no longer exists (→ 404)
        """
        try:
            photo = await load_photo(db, photo_id)

            author = await db.get(User, caller_id)
            if author is None:
                raise NotFoundError(resource="user", resource_id=str(caller_id))

            photo.comments.append(Comment(text=text, author=author))
            await db.commit()

            logger.info("Comment added to photo %s by %s", photo_id, caller_id)
            return [CommentResponse.model_validate(c) for c in photo.comments]

        except PhotoShareError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error adding comment to %s: %s", photo_id, str(e), exc_info=True)
            raise PersistenceError(context={"photo_id": str(photo_id)})

    async def remove(
        self,
        db: AsyncSession,
        photo_id: uuid.UUID,
        comment_id: uuid.UUID,
        caller_id: uuid.UUID,
    ) -> None:
        """
        Delete one of the caller's own comments.

        Raises:
            NotFoundError: photo or comment absent (→ 404)
            ForbiddenError: caller did not write the comment (→ 403)
        """
        try:
            photo = await load_photo(db, photo_id)

            comment = next((c for c in photo.comments if c.id == comment_id), None)
            if comment is None:
                raise NotFoundError(resource="comment", resource_id=str(comment_id))

            ensure_owner("comment", comment.author_id, caller_id)

            photo.comments.remove(comment)
            await db.commit()

            logger.info("Comment %s removed from photo %s", comment_id, photo_id)

        except PhotoShareError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error removing comment %s: %s", comment_id, str(e), exc_info=True)
            raise PersistenceError(context={"comment_id": str(comment_id)})


comment_service = CommentService()
