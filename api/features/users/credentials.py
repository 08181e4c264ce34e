"""Password credential handling.

Passwords are hashed with bcrypt over ``password || salt``, where the salt is
a random per-account value stored next to the hash. Verification is then a
pure function of (password, salt, hash).

bcrypt only reads the first 72 bytes of its input. The salt is appended in
base64 form (24 bytes for a 16-byte salt), so the usable password length is
``72 - 24 = 48`` UTF-8 bytes. Longer passwords are rejected up front instead
of being silently truncated or failing inside the hashing primitive.
"""
import base64
import secrets
from typing import Tuple

import bcrypt
import structlog

from api.shared.exceptions import InternalError, ValidationError

logger = structlog.get_logger("chat.users.credentials")

BCRYPT_MAX_INPUT_BYTES = 72
DEFAULT_SALT_BYTES = 16
DEFAULT_ROUNDS = 14


def _encoded_salt_length(salt_bytes: int) -> int:
    return len(base64.b64encode(b"\x00" * salt_bytes))


class CredentialService:
    """Derives and verifies salted bcrypt password hashes."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS, salt_bytes: int = DEFAULT_SALT_BYTES):
        self.rounds = rounds
        self.salt_bytes = salt_bytes
        self.max_password_bytes = BCRYPT_MAX_INPUT_BYTES - _encoded_salt_length(salt_bytes)

    def _salted(self, password: str, salt: bytes) -> bytes:
        return password.encode("utf-8") + base64.b64encode(salt)

    def validate_password(self, password: str) -> None:
        """Raise ``ValidationError`` unless the password fits bcrypt's input."""
        if not password:
            raise ValidationError("password must not be empty")
        size = len(password.encode("utf-8"))
        if size > self.max_password_bytes:
            raise ValidationError(
                f"password must be at most {self.max_password_bytes} bytes",
                {"max_bytes": self.max_password_bytes, "actual_bytes": size},
            )

    def derive_credential(self, password: str) -> Tuple[bytes, bytes]:
        """Return ``(hash, salt)`` for a new password."""
        self.validate_password(password)
        salt = secrets.token_bytes(self.salt_bytes)
        try:
            hashed = bcrypt.hashpw(self._salted(password, salt), bcrypt.gensalt(self.rounds))
        except ValueError as e:
            raise InternalError(f"password hashing failed: {e}")
        return hashed, salt

    def verify_credential(self, password: str, hashed: bytes, salt: bytes) -> bool:
        """Check a password attempt against a stored hash.

        Returns False on any mismatch, including attempts that could never have
        been stored (empty or over-long). Raises ``InternalError`` only when
        the stored hash itself is malformed.
        """
        if not password or len(password.encode("utf-8")) > self.max_password_bytes:
            return False
        try:
            # checkpw compares digests in constant time
            return bcrypt.checkpw(self._salted(password, salt), bytes(hashed))
        except ValueError as e:
            logger.error("stored_hash_corrupt", error=str(e))
            raise InternalError("stored password hash is corrupt")
