"""Chat router: thin HTTP layer, delegates all logic to chat_controller."""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.api.deps import get_current_user, get_db, get_provider_gateway
from chatbot_platform.controllers import chat_controller
from chatbot_platform.core.provider import OpenRouterGateway
from chatbot_platform.models.user import User
from chatbot_platform.schemas.chat import (
    ChatHistory,
    ChatRequest,
    ChatResponse,
    ChatTurnRead,
    ChatTurnSummary,
)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def send_message(
    payload: ChatRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    gateway: OpenRouterGateway = Depends(get_provider_gateway),
):
    """Send a chat message and get the model's reply."""
    exchange = await chat_controller.handle_user_message(
        user, payload.project_id, payload.message, db, gateway
    )
    return ChatResponse(
        message=exchange.assistant_turn.content,
        user_message=ChatTurnSummary.model_validate(exchange.user_turn),
        assistant_message=ChatTurnSummary.model_validate(exchange.assistant_turn),
    )


@router.get("/{project_id}", response_model=ChatHistory)
async def get_history(
    project_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the full chat history for a project, oldest first."""
    turns = await chat_controller.get_history(user, project_id, db)
    return ChatHistory(messages=[ChatTurnRead.model_validate(turn) for turn in turns])
