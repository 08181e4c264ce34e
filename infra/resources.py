"""Infrastructure resources: the chat database.

This module is part of the infra layer and must not import from application features.
"""
from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


class DatabaseResource:
    """Owns the connection pool for the chat database.

    Stores never see the engine; they receive sessions handed out here.
    """

    def __init__(self, database_url: str, pool_size: int = 5, statement_timeout_ms: int = 8000):
        self.database_url = database_url
        self.pool_size = pool_size
        self.statement_timeout_ms = statement_timeout_ms
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def ready(self) -> bool:
        return self.session_factory is not None

    async def init(self) -> "DatabaseResource":
        self.engine = create_async_engine(
            self.database_url,
            pool_size=self.pool_size,
            pool_pre_ping=True,
            pool_recycle=3600,
            connect_args={
                "server_settings": {"statement_timeout": str(self.statement_timeout_ms)}
            },
        )
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        return self

    async def ping(self) -> None:
        """Round-trip ``SELECT 1``; raises if the database is unreachable."""
        if self.engine is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    def get_session(self) -> AsyncSession:
        if self.session_factory is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self.session_factory()

    async def shutdown(self):
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
