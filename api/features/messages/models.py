"""Domain models for the Messages feature.

Metadata is a sum type keyed by the message type: ``ImageMetadata`` for image
links, ``VideoMetadata`` for video links, ``None`` for plaintext. Payloads are
decoded only once the type is known, so a plaintext message can never carry
``width``/``height``.
"""
from typing import Any, Dict, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from api.features.messages.entities.message import (
    SOURCE_MAX_LENGTH,
    Message as MessageEntity,
    MessageMetadata as MessageMetadataEntity,
    MessageType,
)
from api.shared.exceptions import InternalError, ValidationError

SMALLINT_MAX = 32767


class ImageMetadata(BaseModel):
    """Dimensions of a linked image."""

    model_config = ConfigDict(extra="forbid")

    width: int = Field(ge=0, le=SMALLINT_MAX, description="Image width in pixels")
    height: int = Field(ge=0, le=SMALLINT_MAX, description="Image height in pixels")

    def to_entity(self) -> MessageMetadataEntity:
        return MessageMetadataEntity(width=self.width, height=self.height)

    @classmethod
    def from_entity(cls, entity: MessageMetadataEntity) -> "ImageMetadata":
        return cls(width=entity.width, height=entity.height)


class VideoMetadata(BaseModel):
    """Length and hosting source of a linked video."""

    model_config = ConfigDict(extra="forbid")

    length: int = Field(ge=0, le=SMALLINT_MAX, description="Video length in seconds")
    source: str = Field(min_length=1, max_length=SOURCE_MAX_LENGTH, description="Video host")

    def to_entity(self) -> MessageMetadataEntity:
        return MessageMetadataEntity(length=self.length, source=self.source)

    @classmethod
    def from_entity(cls, entity: MessageMetadataEntity) -> "VideoMetadata":
        return cls(length=entity.length, source=entity.source)


MetadataVariant = Union[ImageMetadata, VideoMetadata]

METADATA_VARIANTS: Dict[MessageType, Type[MetadataVariant]] = {
    MessageType.IMAGE_LINK: ImageMetadata,
    MessageType.VIDEO_LINK: VideoMetadata,
}


def parse_message_type(value: Any) -> MessageType:
    """Map a wire value onto ``MessageType`` or raise ``ValidationError``."""
    try:
        return MessageType(value)
    except ValueError:
        raise ValidationError(
            f"invalid messageType {value}",
            {"allowed": [member.value for member in MessageType]},
        )


def decode_metadata(
    message_type: MessageType, payload: Optional[Dict[str, Any]]
) -> Optional[MetadataVariant]:
    """Decode a caller-supplied metadata payload for the given message type.

    Returns ``None`` for plaintext and for media messages without a payload
    (the store then falls back to the configured defaults).
    """
    if message_type == MessageType.PLAINTEXT:
        if payload:
            raise ValidationError("plaintext messages cannot carry metadata")
        return None
    if payload is None:
        return None
    variant = METADATA_VARIANTS[message_type]
    try:
        return variant.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(
            f"invalid metadata for {message_type.value}",
            {"errors": e.errors(include_url=False, include_context=False)},
        )


def metadata_from_entity(
    message_type: MessageType, entity: Optional[MessageMetadataEntity]
) -> Optional[MetadataVariant]:
    """Rebuild the stored metadata variant for a row read back from the store."""
    if message_type == MessageType.PLAINTEXT:
        return None
    if entity is None:
        raise InternalError(
            f"{message_type.value} message has no metadata row",
            {"message_type": message_type.value},
        )
    return METADATA_VARIANTS[message_type].from_entity(entity)


class MessageModel(BaseModel):
    """Domain model for a stored message, with usernames instead of ids."""

    id: int = Field(description="Message identifier, increasing in send order")
    sender: str = Field(description="Sender username")
    recipient: str = Field(description="Recipient username")
    message_type: MessageType = Field(description="Message type")
    content: str = Field(description="Message text")
    metadata: Optional[MetadataVariant] = Field(
        default=None, description="Type-specific metadata, None for plaintext"
    )

    @model_validator(mode="after")
    def check_metadata_matches_type(self) -> "MessageModel":
        expected = METADATA_VARIANTS.get(self.message_type)
        if expected is None and self.metadata is not None:
            raise ValueError("plaintext messages cannot carry metadata")
        if expected is not None and not isinstance(self.metadata, expected):
            raise ValueError(f"{self.message_type.value} requires {expected.__name__}")
        return self

    @classmethod
    def from_entity(
        cls,
        entity: MessageEntity,
        metadata: Optional[MessageMetadataEntity],
        *,
        usernames: Dict[int, str],
    ) -> "MessageModel":
        """Create model from a message row and its (outer-joined) metadata row."""
        return cls(
            id=entity.id,
            sender=usernames[entity.sender_id],
            recipient=usernames[entity.recipient_id],
            message_type=entity.message_type,
            content=entity.message_content,
            metadata=metadata_from_entity(entity.message_type, metadata),
        )
