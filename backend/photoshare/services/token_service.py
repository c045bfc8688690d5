"""
PhotoShare Backend — Token Issuer/Verifier
============================================

What:  Issues and validates signed session tokens (JWT, HS256 by default).
How:   python-jose signs `{sub: <user id>, iat, exp}` with JWT_SECRET.
       Tokens are self-contained: there is no server-side session table and
       no revocation list, so a token stays valid until `exp`.
Who:   `issue` is called by POST /login; `verify` by the auth gate on every
       protected request.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from photoshare.config import settings
from photoshare.exceptions import InvalidTokenError, MissingTokenError

logger = logging.getLogger(__name__)


class TokenService:
    """Stateless JWT signer/verifier bound to one secret and algorithm."""

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        lifetime: Optional[timedelta] = None,
    ):
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.lifetime = lifetime or timedelta(minutes=settings.access_token_expire_minutes)

    def issue(self, user_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
        """Create a signed token for `user_id` that expires after the lifetime window."""
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + (expires_delta if expires_delta is not None else self.lifetime),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> uuid.UUID:
        """
        Validate a token and return the user ID it was issued for.

        Raises:
            MissingTokenError: token is None or empty (→ 401)
            InvalidTokenError: bad signature, expired, or malformed claims (→ 403)
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise InvalidTokenError(reason="expired")
        except JWTError as e:
            logger.debug("Token rejected: %s", str(e))
            raise InvalidTokenError(reason="signature")

        try:
            return uuid.UUID(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenError(reason="claims")


token_service = TokenService()
