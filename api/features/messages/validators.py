"""Validators for message operations."""
from api.features.messages.entities.message import CONTENT_MAX_BYTES
from api.shared.exceptions import ValidationError


class MessageValidator:

    MAX_CONTENT_BYTES = CONTENT_MAX_BYTES

    @classmethod
    def validate_content(cls, content: str) -> str:
        if not content:
            raise ValidationError("rejecting empty message")
        size = len(content.encode("utf-8"))
        if size > cls.MAX_CONTENT_BYTES:
            raise ValidationError(
                f"message content must be at most {cls.MAX_CONTENT_BYTES} bytes",
                {"max_bytes": cls.MAX_CONTENT_BYTES, "actual_bytes": size},
            )
        return content
