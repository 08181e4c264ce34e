"""Per-request session dependency for the feature routers."""
from typing import AsyncIterator

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from di.container import ApplicationContainer
from infra.resources import DatabaseResource


@inject
async def get_db_session(
    db: DatabaseResource = Depends(
        Provide[ApplicationContainer.infrastructure.database]
    ),
) -> AsyncIterator[AsyncSession]:
    """One session per request.

    Stores commit their own writes; anything left uncommitted when the request
    ends is rolled back when the session closes.
    """
    async with db.get_session() as session:
        yield session
