"""Service layer for the Users feature."""
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from api.features.users.credentials import CredentialService
from api.features.users.repository import AccountStore
from api.features.users.validators import UserValidator
from api.shared.exceptions import ConflictError

logger = logging.getLogger("chat.users.service")


class UserService:
    """Account creation and password checks on top of ``AccountStore``."""

    def __init__(self, credentials: CredentialService):
        self.credentials = credentials

    async def create_account(
        self, username: str, password: str, *, db_session: AsyncSession
    ) -> int:
        """Create an account and return its id."""
        UserValidator.validate_username(username)
        self.credentials.validate_password(password)

        store = AccountStore(db_session)
        # Checked before hashing so duplicates don't pay the bcrypt cost
        if await store.account_exists(username):
            raise ConflictError(
                f"username {username} already exists", {"username": username}
            )

        # bcrypt is CPU bound; keep it off the event loop
        password_hash, salt = await asyncio.to_thread(
            self.credentials.derive_credential, password
        )
        return await store.create_account(username, password_hash, salt)

    async def account_exists(self, username: str, *, db_session: AsyncSession) -> bool:
        return await AccountStore(db_session).account_exists(username)

    async def authenticate(
        self, username: str, password: str, *, db_session: AsyncSession
    ) -> bool:
        """Check a login attempt. Unknown usernames raise ``NotFoundError``."""
        password_hash, salt = await AccountStore(db_session).get_credential(username)
        verified = await asyncio.to_thread(
            self.credentials.verify_credential, password, password_hash, salt
        )
        if not verified:
            logger.info(f"Failed login for {username}")
        return verified
