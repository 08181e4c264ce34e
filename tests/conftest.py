"""Shared fixtures: an in-memory SQLite database built from the entity metadata."""
import pytest
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from api.features.messages.entities.message import MessageType
from api.features.messages.models import ImageMetadata, VideoMetadata
from api.features.messages.repository import MessageStore
from api.features.users.credentials import CredentialService
from api.features.users.repository import AccountStore
from api.shared.entities.registry import BaseEntity

FAKE_HASH = b"$2b$04$" + b"x" * 53
FAKE_SALT = b"s" * 16


@pytest.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(eng.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with eng.begin() as conn:
        await conn.run_sync(BaseEntity.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def credentials():
    # Minimum bcrypt cost keeps the suite fast
    return CredentialService(rounds=4)


@pytest.fixture
def default_metadata():
    return {
        MessageType.IMAGE_LINK: ImageMetadata(width=100, height=200),
        MessageType.VIDEO_LINK: VideoMetadata(length=300, source="YouTube"),
    }


@pytest.fixture
def accounts(session):
    return AccountStore(session)


@pytest.fixture
def messages(session, accounts, default_metadata):
    return MessageStore(session, accounts=accounts, default_metadata=default_metadata)


@pytest.fixture
async def users(accounts):
    """Two accounts, ``user1`` and ``user2``, plus a bystander ``user3``."""
    ids = {}
    for name in ("user1", "user2", "user3"):
        ids[name] = await accounts.create_account(name, FAKE_HASH, FAKE_SALT)
    return ids


@pytest.fixture
def count_rows(session_factory):
    """Count rows of an entity through a fresh session."""

    async def _count(entity) -> int:
        async with session_factory() as fresh:
            return int(await fresh.scalar(select(func.count()).select_from(entity)))

    return _count
