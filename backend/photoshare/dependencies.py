"""
PhotoShare Backend — Auth Gate
================================

What:  FastAPI dependency guarding every protected route.
How:   Reads the Authorization header, verifies the token, and records the
       caller's user ID on `request.state.user_id` before the handler runs.
       It keeps no state of its own.

Accepted header forms:
    Authorization: Bearer <token>
    Authorization: <token>          (bare token, as older clients send it)

Outcomes:
    no header / empty     → MissingTokenError  → 401
    bad signature/expired → InvalidTokenError  → 403
    valid                 → handler receives the caller's UUID
"""

import uuid
from typing import Optional

from fastapi import Header, Request

from photoshare.services.token_service import token_service


def extract_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, credentials = authorization.strip().partition(" ")
    if credentials and scheme.lower() == "bearer":
        return credentials.strip() or None
    return authorization.strip() or None


async def require_user_id(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> uuid.UUID:
    """Resolve the caller's identity or short-circuit with 401/403."""
    user_id = token_service.verify(extract_token(authorization))
    request.state.user_id = user_id
    return user_id
