"""Conversation retrieval: identity resolution, ordered fetch, page slicing."""
from typing import Dict, List, Optional

import structlog

from api.features.messages.models import MessageModel
from api.features.messages.pagination import PageWindow
from api.features.messages.repository import MessageStore
from api.features.users.repository import AccountStore

logger = structlog.get_logger("chat.messages.fetcher")


class ConversationFetcher:
    """Builds the ordered, optionally paginated history between two users."""

    def __init__(self, accounts: AccountStore, messages: MessageStore):
        self.accounts = accounts
        self.messages = messages

    async def fetch_conversation(
        self,
        first: str,
        second: str,
        page_size: Optional[int] = None,
        page_index: Optional[int] = None,
    ) -> List[MessageModel]:
        """Return the messages exchanged between ``first`` and ``second``.

        The order of the two usernames does not matter. Messages come back in
        send order; with a window, only ``[start, min(end, total))``.
        """
        window = PageWindow.from_params(page_size, page_index)

        first_id = await self.accounts.resolve_id(first)
        second_id = await self.accounts.resolve_id(second)

        if window is not None:
            total = await self.messages.count_conversation(first_id, second_id)
            window.check_available(total)

        rows = await self.messages.fetch_conversation_rows(first_id, second_id, window)

        usernames: Dict[int, str] = {}
        for account_id in {first_id, second_id}:
            usernames[account_id] = await self.accounts.resolve_username(account_id)

        conversation = [
            MessageModel.from_entity(message, metadata, usernames=usernames)
            for message, metadata in rows
        ]
        logger.info(
            "conversation_fetched",
            count=len(conversation),
            page_size=window.page_size if window else None,
            page_index=window.page_index if window else None,
        )
        return conversation
