"""DTOs for the Messages feature.

Field names on the wire follow the chat clients: ``messageType`` rather than
``message_type``.
"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from api.features.messages.models import MessageModel, MetadataVariant
from api.shared.dtos import BaseDTO


class SendMessageRequest(BaseDTO):
    """Send a message from one user to another."""

    sender: str = Field(description="Sender username")
    recipient: str = Field(description="Recipient username")
    message_type: str = Field(
        alias="messageType", description="One of plaintext, image_link, video_link"
    )
    content: str = Field(description="Message text, at most 255 bytes")
    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        description="{width, height} for image_link, {length, source} for video_link",
    )


class SendMessageResponse(BaseDTO):
    message_id: int = Field(description="Stored message identifier")
    sender: str = Field(description="Sender username")
    recipient: str = Field(description="Recipient username")


class MessageDTO(BaseDTO):
    """A message as returned to clients."""

    sender: str = Field(description="Sender username")
    recipient: str = Field(description="Recipient username")
    message_type: str = Field(alias="messageType", description="Message type")
    content: str = Field(description="Message text")
    metadata: Optional[MetadataVariant] = Field(
        default=None, description="Type-specific metadata, null for plaintext"
    )

    @classmethod
    def from_model(cls, model: MessageModel) -> "MessageDTO":
        return cls(
            sender=model.sender,
            recipient=model.recipient,
            message_type=model.message_type.value,
            content=model.content,
            metadata=model.metadata,
        )


class MessagesResponse(BaseDTO):
    """Messages list response."""

    items: List[MessageDTO] = Field(description="Messages in send order")
    total: int = Field(description="Total messages returned")
