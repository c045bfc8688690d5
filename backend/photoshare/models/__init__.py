"""ORM models. Importing this package registers every table on Base.metadata."""

from photoshare.models.user import User
from photoshare.models.photo import Comment, Photo, PhotoLike

__all__ = ["User", "Photo", "PhotoLike", "Comment"]
