"""
PhotoShare Backend — Photo Aggregate Models
=============================================

What:  ORM models for a Photo and the records it owns: likes and comments.
How:   Photo is the aggregate root. `PhotoLike` and `Comment` rows only exist
       through `Photo.likes` / `Photo.comments`, both declared with
       cascade="all, delete-orphan", so removing one from the collection
       deletes the row and deleting the Photo deletes all of them.

Table Design:
    photos:
        - owner_id: NOT NULL FK; a photo always has exactly one owner
        - created_at index: the feed is always listed newest-first
    photo_likes:
        - composite primary key (photo_id, user_id): a user can appear in a
          photo's like set at most once, enforced by the database
    comments:
        - position: maintained by `ordering_list`, records append order so
          the comment sequence reads back exactly as it was written
        - ON DELETE CASCADE on photo_id mirrors the ORM cascade for rows
          deleted outside the ORM (e.g. manual SQL)
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from photoshare.database import Base
from photoshare.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Photo(Base):
    """
    An uploaded photo with its like set and comment thread.

    Lifecycle:
        1. Created after the media relay returns a URL (never before)
        2. Description edited by the owner only
        3. Likes toggled by any authenticated user
        4. Deleted by the owner; likes and comments go with it
    """

    __tablename__ = "photos"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Public URL returned by the media host
    url: Mapped[str] = mapped_column(String(1024), nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    owner: Mapped[User] = relationship(User, lazy="raise")

    likes: Mapped[List["PhotoLike"]] = relationship(
        back_populates="photo",
        cascade="all, delete-orphan",
        lazy="raise",
    )

    comments: Mapped[List["Comment"]] = relationship(
        back_populates="photo",
        cascade="all, delete-orphan",
        order_by="Comment.position",
        collection_class=ordering_list("position"),
        lazy="raise",
    )

    __table_args__ = (
        Index("idx_photos_created_at", "created_at"),
    )

    @property
    def liker_ids(self) -> List[uuid.UUID]:
        return [like.user_id for like in self.likes]

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, owner_id={self.owner_id})>"


class PhotoLike(Base):
    """Membership of one user in one photo's like set."""

    __tablename__ = "photo_likes"

    photo_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("photos.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        primary_key=True,
    )

    photo: Mapped[Photo] = relationship(back_populates="likes")


class Comment(Base):
    """A comment embedded in a photo's thread. Has no lifecycle of its own."""

    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    photo_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("photos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    # Index within the photo's thread; assigned by ordering_list on append
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    photo: Mapped[Photo] = relationship(back_populates="comments")
    author: Mapped[User] = relationship(User, lazy="raise")

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, photo_id={self.photo_id}, position={self.position})>"
