"""
PhotoShare Backend — Ownership Policy
=======================================

What:  The single authorization rule for mutations: only the user who created
       a resource may change or delete it.
Who:   Called by every mutating PhotoService and CommentService operation
       (edit description, delete photo, delete comment).
"""

import logging
import uuid

from photoshare.exceptions import ForbiddenError

logger = logging.getLogger(__name__)


def ensure_owner(resource: str, owner_id: uuid.UUID, caller_id: uuid.UUID) -> None:
    """
    Raise ForbiddenError unless `caller_id` is the resource's owner.

    Args:
        resource: Resource kind for logging ("photo", "comment")
        owner_id: Owner (photo) or author (comment) recorded on the resource
        caller_id: Identity resolved from the caller's token

    Raises:
        ForbiddenError: caller is not the owner (→ 403)
    """
    if owner_id != caller_id:
        logger.warning(
            "Ownership check failed on %s: owner=%s caller=%s",
            resource,
            owner_id,
            caller_id,
        )
        raise ForbiddenError(
            message="Not allowed",
            context={"resource": resource, "owner_id": str(owner_id), "caller_id": str(caller_id)},
        )
