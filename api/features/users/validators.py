"""Validators for user operations."""
from api.features.users.entities.user import USERNAME_MAX_LENGTH
from api.shared.exceptions import ValidationError


class UserValidator:
    """Boundary checks for account input; raise before any storage access."""

    @classmethod
    def validate_username(cls, username: str) -> str:
        if not username or len(username) > USERNAME_MAX_LENGTH:
            raise ValidationError(
                f"username should be between 1 and {USERNAME_MAX_LENGTH} characters",
                {"username": username},
            )
        if username != username.strip():
            raise ValidationError(
                "username cannot start or end with whitespace", {"username": username}
            )
        return username
