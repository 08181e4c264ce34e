"""Controller for the Users feature."""
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.users.dtos import (
    CreateUserRequest,
    CreateUserResponse,
    LoginRequest,
    LoginResponse,
    UserExistsResponse,
)
from api.features.users.service import UserService


class UserController:
    """Controller handling account creation and password checks."""

    def __init__(self, user_service: UserService):
        self.user_service = user_service

    async def create_user(
        self, request: CreateUserRequest, *, db_session: AsyncSession
    ) -> CreateUserResponse:
        account_id = await self.user_service.create_account(
            request.username, request.password, db_session=db_session
        )
        return CreateUserResponse(id=account_id, username=request.username)

    async def user_exists(
        self, username: str, *, db_session: AsyncSession
    ) -> UserExistsResponse:
        exists = await self.user_service.account_exists(username, db_session=db_session)
        return UserExistsResponse(username=username, exists=exists)

    async def login(
        self, request: LoginRequest, *, db_session: AsyncSession
    ) -> LoginResponse:
        authenticated = await self.user_service.authenticate(
            request.username, request.password, db_session=db_session
        )
        return LoginResponse(username=request.username, authenticated=authenticated)
