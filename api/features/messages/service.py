"""Service layer for the Messages feature."""
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.features.messages.entities.message import MessageType
from api.features.messages.fetcher import ConversationFetcher
from api.features.messages.models import (
    ImageMetadata,
    MessageModel,
    MetadataVariant,
    VideoMetadata,
    decode_metadata,
    parse_message_type,
)
from api.features.messages.repository import MessageStore
from api.features.users.repository import AccountStore
from api.shared.exceptions import ValidationError
from core.settings import MessageSettings


def default_metadata_from_settings(
    settings: MessageSettings,
) -> Dict[MessageType, MetadataVariant]:
    return {
        MessageType.IMAGE_LINK: ImageMetadata(
            width=settings.IMAGE_WIDTH, height=settings.IMAGE_HEIGHT
        ),
        MessageType.VIDEO_LINK: VideoMetadata(
            length=settings.VIDEO_LENGTH, source=settings.VIDEO_SOURCE
        ),
    }


class MessageService:
    """Sends messages and reads conversations; one store pair per session."""

    def __init__(self, message_settings: MessageSettings):
        self.default_metadata = default_metadata_from_settings(message_settings)
        self.max_page_size = message_settings.MAX_PAGE_SIZE

    def _stores(self, db_session: AsyncSession) -> tuple[AccountStore, MessageStore]:
        accounts = AccountStore(db_session)
        messages = MessageStore(
            db_session, accounts=accounts, default_metadata=self.default_metadata
        )
        return accounts, messages

    async def send_message(
        self,
        sender: str,
        recipient: str,
        message_type: str,
        content: str,
        metadata: Optional[Dict[str, Any]] = None,
        *,
        db_session: AsyncSession,
    ) -> int:
        parsed_type = parse_message_type(message_type)
        variant = decode_metadata(parsed_type, metadata)
        _, messages = self._stores(db_session)
        return await messages.add_message(sender, recipient, parsed_type, content, variant)

    async def fetch_conversation(
        self,
        first: str,
        second: str,
        page_size: Optional[int] = None,
        page_index: Optional[int] = None,
        *,
        db_session: AsyncSession,
    ) -> List[MessageModel]:
        if page_size is not None and page_size > self.max_page_size:
            raise ValidationError(
                f"messagesPerPage must be at most {self.max_page_size}",
                {"page_size": page_size},
            )
        accounts, messages = self._stores(db_session)
        fetcher = ConversationFetcher(accounts, messages)
        return await fetcher.fetch_conversation(first, second, page_size, page_index)
