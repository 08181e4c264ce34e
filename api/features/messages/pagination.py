"""Pagination window over a conversation's ordered messages."""
from typing import Optional

from pydantic import BaseModel, ConfigDict

from api.shared.exceptions import ValidationError


class PageWindow(BaseModel):
    """A 0-indexed ``(page_size, page_index)`` selection.

    Page ``i`` covers positions ``[i * page_size, (i + 1) * page_size)``; the
    last page may be short.
    """

    model_config = ConfigDict(frozen=True)

    page_size: int
    page_index: int

    @classmethod
    def from_params(
        cls, page_size: Optional[int], page_index: Optional[int]
    ) -> Optional["PageWindow"]:
        """Build a window from optional request parameters.

        Both parameters or neither: ``None`` means the whole conversation.
        """
        if page_size is None and page_index is None:
            return None
        if page_size is None or page_index is None:
            raise ValidationError(
                "expect messagesPerPage and pageToLoad to be supplied together",
                {"page_size": page_size, "page_index": page_index},
            )
        if page_size <= 0:
            raise ValidationError(
                "messagesPerPage must be positive", {"page_size": page_size}
            )
        if page_index < 0:
            raise ValidationError(
                "pageToLoad must not be negative", {"page_index": page_index}
            )
        return cls(page_size=page_size, page_index=page_index)

    @property
    def start(self) -> int:
        return self.page_index * self.page_size

    @property
    def end(self) -> int:
        return self.start + self.page_size

    def check_available(self, total: int) -> None:
        """Reject windows that start past the last message.

        Page 0 of an empty conversation is valid and yields nothing.
        """
        if self.start > 0 and self.start >= total:
            raise ValidationError(
                "bad messagesPerPage or pageToLoad, no results found for desired page",
                {
                    "page_size": self.page_size,
                    "page_index": self.page_index,
                    "total": total,
                },
            )
