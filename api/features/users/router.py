"""Router for the Users feature."""
import logging

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.users.controller import UserController
from api.features.users.dtos import (
    CreateUserRequest,
    CreateUserResponse,
    LoginRequest,
    LoginResponse,
    UserExistsResponse,
)
from api.shared.db import get_db_session
from api.shared.exceptions import AuthenticationError
from api.shared.response import ResponseModel
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()
logger = logging.getLogger("chat.users.router")


@router.post("", response_model=ResponseModel[CreateUserResponse])
@inject
async def create_user(
    request: CreateUserRequest,
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """Create an account."""
    logger.info(f"Received account creation for user {request.username}")
    result = await controller.create_user(request, db_session=db_session)
    return ResponseModel.success(data=result, message="User created")


@router.get("/{username}/exists", response_model=ResponseModel[UserExistsResponse])
@inject
async def user_exists(
    username: str,
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    result = await controller.user_exists(username, db_session=db_session)
    return ResponseModel.success(data=result, message="User lookup complete")


@router.post("/login", response_model=ResponseModel[LoginResponse])
@inject
async def login(
    request: LoginRequest,
    controller: UserController = Depends(
        Provide[DependencyContainer.controllers.user_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """Check a password. Issuing session tokens is out of scope."""
    result = await controller.login(request, db_session=db_session)
    if not result.authenticated:
        raise AuthenticationError(
            "invalid credentials", {"username": request.username}
        )
    return ResponseModel.success(data=result, message="Credentials verified")
