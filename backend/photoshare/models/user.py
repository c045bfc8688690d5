"""
PhotoShare Backend — User SQLAlchemy Model
============================================

What:  ORM model for the `users` table.
Who:   Written by the credential service at signup; read by login and by
       the photo/comment services to resolve usernames.

Table Design:
    - UUID primary key: non-sequential, safe to expose in URLs and tokens
    - email: unique index; the duplicate-email rule is enforced here as well
      as in the service, so concurrent signups cannot both succeed
    - password_hash: bcrypt output, never serialized by any response schema
    - Rows are immutable after signup
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from photoshare.database import Base


class User(Base):
    """A registered account."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(String(50), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    # bcrypt hash ($2b$...), 60 chars; never the plaintext
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
