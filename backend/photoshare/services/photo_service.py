"""
PhotoShare Backend — Photo Service
====================================

What:  Create, list, edit, like and delete photos.
How:   Each method receives the request's AsyncSession, loads the Photo
       aggregate (owner, likes, comments with authors) under a row lock on the
       photo, applies the change, and commits before returning. A failed
       commit is a PersistenceError like any other database failure.
Who:   Called by the photo route handlers.

Authorization:
    Mutations that are restricted to the uploader go through
    `ensure_owner`; liking is open to every authenticated user.

Error Handling Strategy:
    Application errors (NotFoundError, ForbiddenError) propagate unchanged.
    SQLAlchemy errors are wrapped in PersistenceError so no query text or
    schema detail reaches the client.
"""

import logging
import uuid
from typing import List

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from photoshare.exceptions import NotFoundError, PersistenceError, PhotoShareError
from photoshare.models.photo import Comment, Photo, PhotoLike
from photoshare.models.user import User
from photoshare.schemas.photo import PhotoResponse
from photoshare.services.ownership import ensure_owner

logger = logging.getLogger(__name__)

# Loader options that materialise everything PhotoResponse reads
PHOTO_AGGREGATE = (
    selectinload(Photo.owner),
    selectinload(Photo.likes),
    selectinload(Photo.comments).selectinload(Comment.author),
)


def locked_photo_query(photo_id: uuid.UUID) -> Select:
    """
    SELECT the photo row FOR UPDATE, with its aggregate loader options.

    Every caller mutates the aggregate, so concurrent like toggles and
    comment appends on one photo queue behind the row lock until the holder
    commits. SQLite has no row locks and compiles the clause away.
    """
    return (
        select(Photo)
        .where(Photo.id == photo_id)
        .options(*PHOTO_AGGREGATE)
        .with_for_update()
    )


async def load_photo(db: AsyncSession, photo_id: uuid.UUID) -> Photo:
    """
    Fetch and lock a photo with its full aggregate loaded.

    Raises:
        NotFoundError: no photo with this ID (→ 404)
    """
    result = await db.execute(locked_photo_query(photo_id))
    photo = result.scalar_one_or_none()
    if photo is None:
        raise NotFoundError(resource="photo", resource_id=str(photo_id))
    return photo


class PhotoService:
    """Business logic for Photo aggregates."""

    async def create(
        self,
        db: AsyncSession,
        owner_id: uuid.UUID,
        url: str,
        description: str = "",
    ) -> PhotoResponse:
        """
        Persist a newly uploaded photo owned by the caller.

        Called only after the media relay returned `url`.

        Raises:
            NotFoundError: owner account no longer exists (→ 404)
            PersistenceError: database failure (→ 500)
        """
        try:
            owner = await db.get(User, owner_id)
            if owner is None:
                raise NotFoundError(resource="user", resource_id=str(owner_id))

            photo = Photo(
                url=url,
                description=description or "",
                owner=owner,
                likes=[],
                comments=[],
            )
            db.add(photo)
            await db.commit()

            logger.info("Photo %s created by %s", photo.id, owner_id)
            return PhotoResponse.model_validate(photo)

        except PhotoShareError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error creating photo: %s", str(e), exc_info=True)
            raise PersistenceError(context={"error_type": type(e).__name__})

    async def list_photos(self, db: AsyncSession) -> List[PhotoResponse]:
        """
        Return every photo, newest first, with owner and comment-author
        usernames resolved.
        """
        try:
            result = await db.execute(
                select(Photo)
                .options(*PHOTO_AGGREGATE)
                .order_by(Photo.created_at.desc(), Photo.id)
            )
            photos = result.scalars().all()
            return [PhotoResponse.model_validate(photo) for photo in photos]

        except SQLAlchemyError as e:
            logger.error("Database error listing photos: %s", str(e), exc_info=True)
            raise PersistenceError(context={"error_type": type(e).__name__})

    async def update_description(
        self,
        db: AsyncSession,
        photo_id: uuid.UUID,
        caller_id: uuid.UUID,
        description: str,
    ) -> PhotoResponse:
        """
        Replace the description of a photo the caller owns.

        Raises:
            NotFoundError: photo absent (→ 404)
            ForbiddenError: caller is not the owner (→ 403)
        """
        try:
            photo = await load_photo(db, photo_id)
            ensure_owner("photo", photo.owner_id, caller_id)

            photo.description = description
            await db.commit()

            logger.info("Photo %s description updated", photo_id)
            return PhotoResponse.model_validate(photo)

        except PhotoShareError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating photo %s: %s", photo_id, str(e), exc_info=True)
            raise PersistenceError(context={"photo_id": str(photo_id)})

    async def toggle_like(
        self,
        db: AsyncSession,
        photo_id: uuid.UUID,
        caller_id: uuid.UUID,
    ) -> int:
        """
        Add the caller to the photo's like set, or remove them if present.

        Returns:
            Like count after the toggle

        Raises:
            NotFoundError: photo absent (→ 404)
        """
        try:
            photo = await load_photo(db, photo_id)

            existing = next((like for like in photo.likes if like.user_id == caller_id), None)
            if existing is not None:
                photo.likes.remove(existing)  # delete-orphan removes the row
            else:
                photo.likes.append(PhotoLike(user_id=caller_id))
            await db.commit()

            count = len(photo.likes)
            logger.info(
                "Photo %s %s by %s (likes=%d)",
                photo_id,
                "unliked" if existing is not None else "liked",
                caller_id,
                count,
            )
            return count

        except PhotoShareError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error toggling like on %s: %s", photo_id, str(e), exc_info=True)
            raise PersistenceError(context={"photo_id": str(photo_id)})

    async def delete(
        self,
        db: AsyncSession,
        photo_id: uuid.UUID,
        caller_id: uuid.UUID,
    ) -> None:
        """
        Delete a photo the caller owns, together with its likes and comments.

        Raises:
            NotFoundError: photo absent (→ 404)
            ForbiddenError: caller is not the owner (→ 403)
        """
        try:
            photo = await load_photo(db, photo_id)
            ensure_owner("photo", photo.owner_id, caller_id)

            comment_count = len(photo.comments)
            await db.delete(photo)
            await db.commit()

            logger.info("Photo %s deleted (%d comments removed)", photo_id, comment_count)

        except PhotoShareError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting photo %s: %s", photo_id, str(e), exc_info=True)
            raise PersistenceError(context={"photo_id": str(photo_id)})


photo_service = PhotoService()
