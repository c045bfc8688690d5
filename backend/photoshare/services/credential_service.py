"""
PhotoShare Backend — Credential Store
=======================================

What:  Account registration and password verification.
How:   Passwords are hashed with bcrypt (adaptive, salted, cost factor from
       BCRYPT_ROUNDS). bcrypt runs in the threadpool so a login never blocks
       the event loop for other requests.
Who:   Called by POST /signup and POST /login.

Password pipeline:
    plaintext ─▶ SHA-256 ─▶ base64 (44 ASCII bytes) ─▶ bcrypt(salt, rounds)

    bcrypt only reads the first 72 bytes of its input. Pre-hashing makes every
    byte of a long password significant, and base64 keeps the input free of
    NUL bytes.

Timing:
    `bcrypt.checkpw` compares in constant time. For an unknown email we
    still run one checkpw against a fixed dummy hash, so "no such account"
    and "wrong password" cost the same and return the same 400 body.
"""

import base64
import hashlib
import logging
import uuid

import bcrypt
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from photoshare.config import settings
from photoshare.exceptions import (
    DuplicateEmailError,
    InvalidCredentialError,
    PersistenceError,
    PhotoShareError,
    UnknownEmailError,
)
from photoshare.models.user import User

logger = logging.getLogger(__name__)


def _pre_hash_password(password: str) -> bytes:
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password for storage. Returns the bcrypt string ($2b$...)."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_pre_hash_password(password), salt).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Verify a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_pre_hash_password(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash; treat as a mismatch rather than a 500
        logger.error("Stored password hash is not a valid bcrypt hash")
        return False


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialService:
    """
    Owns user identity: who exists and whether they know their password.

    Responsibilities:
        - register(): create a User, rejecting duplicate emails
        - verify(): check a login attempt and return the matching User
    """

    def __init__(self, rounds: int = settings.bcrypt_rounds):
        self.rounds = rounds
        # Compared against when the email is unknown (see module docstring)
        self._dummy_hash = hash_password("photoshare-timing-equalizer", rounds)

    async def register(
        self,
        db: AsyncSession,
        username: str,
        email: str,
        password: str,
    ) -> uuid.UUID:
        """
        Create a new account.

        Returns:
            The new user's ID

        Raises:
            DuplicateEmailError: email already registered (→ 400)
            PersistenceError: database failure (→ 500)
        """
        email = _normalize_email(email)
        try:
            result = await db.execute(select(User.id).where(User.email == email))
            if result.scalar_one_or_none() is not None:
                raise DuplicateEmailError(email)

            password_hash = await run_in_threadpool(hash_password, password, self.rounds)
            user = User(username=username, email=email, password_hash=password_hash)
            db.add(user)
            # The unique index rejects a concurrent signup here (IntegrityError)
            await db.commit()

            logger.info("Registered user %s", user.id)
            return user.id

        except PhotoShareError:
            raise
        except IntegrityError:
            logger.info("Signup lost a race on the unique email index")
            raise DuplicateEmailError(email)
        except SQLAlchemyError as e:
            logger.error("Database error during signup: %s", str(e), exc_info=True)
            raise PersistenceError(context={"error_type": type(e).__name__})

    async def verify(self, db: AsyncSession, email: str, password: str) -> User:
        """
        Check a login attempt.

        Returns:
            The authenticated User

        Raises:
            UnknownEmailError: no account for this email (→ 400)
            InvalidCredentialError: password does not match (→ 400)
            PersistenceError: database failure (→ 500)
        """
        email = _normalize_email(email)
        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise PersistenceError(context={"error_type": type(e).__name__})

        if user is None:
            await run_in_threadpool(check_password, password, self._dummy_hash)
            raise UnknownEmailError(email)

        if not await run_in_threadpool(check_password, password, user.password_hash):
            raise InvalidCredentialError(context={"user_id": str(user.id)})

        return user


credential_service = CredentialService()
