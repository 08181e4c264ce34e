"""Controller for the Messages feature."""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.features.messages.dtos import (
    MessageDTO,
    MessagesResponse,
    SendMessageRequest,
    SendMessageResponse,
)
from api.features.messages.service import MessageService


class MessageController:
    """Controller for sending messages and reading conversations."""

    def __init__(self, message_service: MessageService):
        self.message_service = message_service

    async def send_message(
        self, request: SendMessageRequest, *, db_session: AsyncSession
    ) -> SendMessageResponse:
        message_id = await self.message_service.send_message(
            request.sender,
            request.recipient,
            request.message_type,
            request.content,
            request.metadata,
            db_session=db_session,
        )
        return SendMessageResponse(
            message_id=message_id, sender=request.sender, recipient=request.recipient
        )

    async def get_conversation(
        self,
        *,
        sender: str,
        recipient: str,
        page_size: Optional[int],
        page_index: Optional[int],
        db_session: AsyncSession,
    ) -> MessagesResponse:
        messages = await self.message_service.fetch_conversation(
            sender, recipient, page_size, page_index, db_session=db_session
        )
        items = [MessageDTO.from_model(m) for m in messages]
        return MessagesResponse(items=items, total=len(items))
