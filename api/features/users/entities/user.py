"""User account entity."""
from sqlalchemy import Index, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from api.shared.entities.base import BaseEntity

USERNAME_MAX_LENGTH = 10


def normalize_username(username: str) -> str:
    """Case-folded key under which usernames are compared ("STRASSE" == "straße")."""
    return username.casefold()


class User(BaseEntity):
    """Account with its bcrypt hash and the salt appended before hashing."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(USERNAME_MAX_LENGTH), nullable=False)
    # Lower-cased copy carrying the uniqueness constraint
    username_key: Mapped[str] = mapped_column(String(4 * USERNAME_MAX_LENGTH), nullable=False)
    hash: Mapped[bytes] = mapped_column(LargeBinary(60), nullable=False)
    salt: Mapped[bytes] = mapped_column(LargeBinary(32), nullable=False)

    __table_args__ = (
        Index("ix_users_username_key", "username_key", unique=True),
    )
