"""Message persistence.

Media messages are written as two rows: the metadata row first, then the
message row referencing it. Both inserts share the session's transaction and
are committed together, so readers never see metadata without its message or
a message pointing at missing metadata.
"""
from typing import Any, Dict, List, Optional, Tuple

import structlog
from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.messages.entities.message import (
    Message,
    MessageMetadata,
    MessageType,
)
from api.features.messages.models import (
    METADATA_VARIANTS,
    MetadataVariant,
    parse_message_type,
)
from api.features.messages.pagination import PageWindow
from api.features.messages.validators import MessageValidator
from api.features.users.repository import AccountStore
from api.shared.base import BaseRepository
from api.shared.exceptions import InternalError, ValidationError

logger = structlog.get_logger("chat.messages.repository")

ConversationRow = Tuple[Message, Optional[MessageMetadata]]


class MessageStore(BaseRepository[Message]):
    """Repository for messages and their metadata rows."""

    model = Message

    def __init__(
        self,
        session: AsyncSession,
        *,
        accounts: Optional[AccountStore] = None,
        default_metadata: Optional[Dict[MessageType, MetadataVariant]] = None,
    ):
        super().__init__(session)
        self.accounts = accounts or AccountStore(session)
        self.default_metadata = default_metadata or {}

    def _resolve_metadata(
        self, message_type: MessageType, metadata: Optional[MetadataVariant]
    ) -> Optional[MetadataVariant]:
        expected = METADATA_VARIANTS.get(message_type)
        if expected is None:
            if metadata is not None:
                raise ValidationError("plaintext messages cannot carry metadata")
            return None
        if metadata is None:
            metadata = self.default_metadata.get(message_type)
            if metadata is None:
                raise ValidationError(
                    f"{message_type.value} messages require metadata",
                    {"message_type": message_type.value},
                )
        if not isinstance(metadata, expected):
            raise ValidationError(
                f"{message_type.value} messages require {expected.__name__}",
                {"message_type": message_type.value},
            )
        return metadata

    async def _insert_metadata(self, metadata: MetadataVariant) -> int:
        entity = await self.create(metadata.to_entity())
        return entity.id

    async def _insert_message(
        self,
        sender_id: int,
        recipient_id: int,
        message_type: MessageType,
        content: str,
        metadata_id: Optional[int],
    ) -> int:
        entity = await self.create(
            Message(
                sender_id=sender_id,
                recipient_id=recipient_id,
                message_type=message_type,
                message_content=content,
                message_metadata_id=metadata_id,
            )
        )
        return entity.id

    async def add_message(
        self,
        sender: str,
        recipient: str,
        message_type: Any,
        content: str,
        metadata: Optional[MetadataVariant] = None,
    ) -> int:
        """Store a message from ``sender`` to ``recipient`` and return its id.

        Senders may message themselves. Media messages without explicit
        metadata get the configured defaults for their type.
        """
        message_type = parse_message_type(message_type)
        MessageValidator.validate_content(content)
        metadata = self._resolve_metadata(message_type, metadata)

        sender_id = await self.accounts.resolve_id(sender)
        recipient_id = await self.accounts.resolve_id(recipient)

        try:
            metadata_id = None
            if metadata is not None:
                metadata_id = await self._insert_metadata(metadata)
            message_id = await self._insert_message(
                sender_id, recipient_id, message_type, content, metadata_id
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "message_insert_rolled_back",
                sender=sender,
                recipient=recipient,
                message_type=message_type.value,
                error=str(e),
            )
            raise InternalError("could not store message", {"error": str(e)}) from e

        logger.info(
            "message_stored",
            message_id=message_id,
            message_type=message_type.value,
            metadata_id=metadata_id,
        )
        return message_id

    @staticmethod
    def _between(first_id: int, second_id: int):
        return or_(
            and_(Message.sender_id == first_id, Message.recipient_id == second_id),
            and_(Message.sender_id == second_id, Message.recipient_id == first_id),
        )

    async def count_conversation(self, first_id: int, second_id: int) -> int:
        stmt = select(func.count(Message.id)).where(self._between(first_id, second_id))
        result = await self._execute(stmt)
        return int(result.scalar() or 0)

    async def fetch_conversation_rows(
        self, first_id: int, second_id: int, window: Optional[PageWindow] = None
    ) -> List[ConversationRow]:
        """Messages between two ids in either direction, oldest first.

        Metadata rows are LEFT JOINed, so plaintext rows come back with
        ``None`` in the second slot.
        """
        stmt = (
            select(Message, MessageMetadata)
            .outerjoin(MessageMetadata, MessageMetadata.id == Message.message_metadata_id)
            .where(self._between(first_id, second_id))
            .order_by(Message.id.asc())
        )
        if window is not None:
            stmt = stmt.offset(window.start).limit(window.page_size)

        result = await self._execute(stmt)
        return [(row[0], row[1]) for row in result.all()]
