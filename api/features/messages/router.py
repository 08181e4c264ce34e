"""Router for the Messages feature."""
import logging
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.messages.controller import MessageController
from api.features.messages.dtos import (
    MessagesResponse,
    SendMessageRequest,
    SendMessageResponse,
)
from api.shared.db import get_db_session
from api.shared.response import ResponseModel
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()
logger = logging.getLogger("chat.messages.router")


@router.post("", response_model=ResponseModel[SendMessageResponse])
@inject
async def send_message(
    request: SendMessageRequest,
    controller: MessageController = Depends(
        Provide[DependencyContainer.controllers.message_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """Send a message. Users may message themselves."""
    logger.info(
        f"Received message for sender {request.sender} and recipient {request.recipient}"
    )
    result = await controller.send_message(request, db_session=db_session)
    return ResponseModel.success(data=result, message="Message sent")


@router.get("", response_model=ResponseModel[MessagesResponse])
@inject
async def get_messages(
    sender: str = Query(..., description="One participant's username"),
    recipient: str = Query(..., description="The other participant's username"),
    page_size: Optional[int] = Query(
        None, alias="messagesPerPage", description="Messages per page"
    ),
    page_index: Optional[int] = Query(
        None, alias="pageToLoad", description="0-indexed page to load"
    ),
    controller: MessageController = Depends(
        Provide[DependencyContainer.controllers.message_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    """Fetch the conversation between two users, oldest first.

    The order of ``sender`` and ``recipient`` does not matter.
    """
    result = await controller.get_conversation(
        sender=sender,
        recipient=recipient,
        page_size=page_size,
        page_index=page_index,
        db_session=db_session,
    )
    return ResponseModel.success(data=result, message="Messages fetched")
