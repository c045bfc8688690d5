"""
PhotoShare Backend — Photo & Comment Schemas
==============================================

What:  Pydantic models defining the API contract for photos and comments.
How:   Services build these from ORM objects (`from_attributes`) while the
       session is still open, so route handlers only ever return plain data.

Enrichment:
    The feed never returns bare user IDs for people: photo owners and comment
    authors are resolved to `UserSummary` objects carrying the username.
    Likes stay a list of user IDs; clients only need membership and count.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, computed_field, field_validator


class UserSummary(BaseModel):
    """Public projection of a User; never includes the password hash."""
    id: uuid.UUID
    username: str

    model_config = {"from_attributes": True}


class OwnerSummary(UserSummary):
    email: str


class CommentResponse(BaseModel):
    id: uuid.UUID
    text: str
    author: UserSummary
    created_at: datetime

    model_config = {"from_attributes": True}


class PhotoResponse(BaseModel):
    """
    What:  Full representation of a photo with its owner, likes and comments.
    Who:   Returned by GET /photos (as a list), POST /upload and
           PUT /photos/{id}/description.
    """
    id: uuid.UUID
    url: str = Field(description="Public URL on the media host")
    description: str
    owner: OwnerSummary
    likes: List[uuid.UUID] = Field(
        default_factory=list,
        validation_alias="liker_ids",
        description="IDs of users who liked this photo",
    )
    comments: List[CommentResponse] = Field(
        default_factory=list,
        description="Comments in the order they were posted",
    )
    created_at: datetime

    model_config = {"from_attributes": True, "populate_by_name": True}

    @computed_field
    @property
    def like_count(self) -> int:
        return len(self.likes)


# ══════════════════════════════════════════════════════════════════════════
# Request bodies
# ══════════════════════════════════════════════════════════════════════════


class CommentCreate(BaseModel):
    text: str = Field(min_length=1, max_length=2000)

    @field_validator("text")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment text must not be blank")
        return v


class DescriptionUpdate(BaseModel):
    description: str = Field(max_length=2000)


# ══════════════════════════════════════════════════════════════════════════
# Response envelopes
# ══════════════════════════════════════════════════════════════════════════


class UploadResponse(BaseModel):
    success: bool = True
    photo: PhotoResponse


class PhotoUpdateResponse(BaseModel):
    success: bool = True
    photo: PhotoResponse


class CommentsResponse(BaseModel):
    success: bool = True
    comments: List[CommentResponse]


class LikeResponse(BaseModel):
    success: bool = True
    likes: int = Field(description="Like count after the toggle")
