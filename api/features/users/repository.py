"""Account persistence: creation, existence, credentials and id lookups."""
from typing import Optional, Tuple

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from api.features.users.entities.user import User, normalize_username
from api.features.users.validators import UserValidator
from api.shared.base import BaseRepository
from api.shared.exceptions import ConflictError, InternalError, NotFoundError

logger = structlog.get_logger("chat.users.repository")


def no_such_user(username: str) -> NotFoundError:
    return NotFoundError(f"no such user {username}", {"username": username})


class AccountStore(BaseRepository[User]):
    """Repository for user accounts. Usernames compare case-insensitively."""

    model = User

    async def get_by_username(self, username: str) -> Optional[User]:
        entities = await self.get_by_field(
            "username_key", normalize_username(username), limit=1
        )
        return entities[0] if entities else None

    async def account_exists(self, username: str) -> bool:
        return await self.get_by_username(username) is not None

    async def create_account(self, username: str, password_hash: bytes, salt: bytes) -> int:
        """Insert a new account and commit. Returns the assigned id."""
        UserValidator.validate_username(username)
        if await self.account_exists(username):
            raise ConflictError(
                f"username {username} already exists", {"username": username}
            )

        entity = User(
            username=username,
            username_key=normalize_username(username),
            hash=password_hash,
            salt=salt,
        )
        try:
            entity = await self.create(entity)
            account_id = entity.id
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race against a concurrent signup for the same name
            await self.session.rollback()
            raise ConflictError(
                f"username {username} already exists", {"username": username}
            ) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("account_insert_failed", username=username, error=str(e))
            raise InternalError("could not create account", {"error": str(e)}) from e

        logger.info("account_created", username=username, account_id=account_id)
        return account_id

    async def get_credential(self, username: str) -> Tuple[bytes, bytes]:
        """Return the stored ``(hash, salt)`` pair."""
        entity = await self.get_by_username(username)
        if entity is None:
            raise no_such_user(username)
        return bytes(entity.hash), bytes(entity.salt)

    async def resolve_id(self, username: str) -> int:
        entity = await self.get_by_username(username)
        if entity is None:
            raise no_such_user(username)
        return entity.id

    async def resolve_username(self, account_id: int) -> str:
        entity = await self.get_by_id(account_id)
        if entity is None:
            raise NotFoundError(
                f"no user with id {account_id}", {"account_id": account_id}
            )
        return entity.username
