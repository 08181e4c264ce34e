"""Message and message metadata entities."""
from enum import Enum
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from api.shared.entities.base import BaseEntity

CONTENT_MAX_BYTES = 255
SOURCE_MAX_LENGTH = 16


class MessageType(str, Enum):
    """Message type enumeration."""

    PLAINTEXT = "plaintext"
    IMAGE_LINK = "image_link"
    VIDEO_LINK = "video_link"


class MessageMetadata(BaseEntity):
    """Optional per-message metadata, kept out of the messages table.

    Image links fill ``width``/``height``; video links fill ``length``/``source``.
    The row is only ever read through its owning message.
    """

    __tablename__ = "messages_metadata"

    width: Mapped[Optional[int]] = mapped_column(SmallInteger)
    height: Mapped[Optional[int]] = mapped_column(SmallInteger)
    length: Mapped[Optional[int]] = mapped_column(SmallInteger)
    source: Mapped[Optional[str]] = mapped_column(String(SOURCE_MAX_LENGTH))


class Message(BaseEntity):
    """A message between two users. Immutable once stored."""

    __tablename__ = "messages"

    # Ids rather than usernames so a username change would not rewrite history
    sender_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    recipient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    message_type: Mapped[MessageType] = mapped_column(
        SQLEnum(
            MessageType,
            name="message_type",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
    )
    message_content: Mapped[str] = mapped_column(String(CONTENT_MAX_BYTES), nullable=False)
    message_metadata_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("messages_metadata.id")
    )

    __table_args__ = (
        Index("sender_recipient_idx", "sender_id", "recipient_id"),
        CheckConstraint(
            "(message_type = 'plaintext') = (message_metadata_id IS NULL)",
            name="ck_messages_metadata_matches_type",
        ),
    )
