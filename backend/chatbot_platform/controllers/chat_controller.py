"""
Chat controller: turn orchestration for a project's conversation.

Per user message:

1. resolve the project owned by the caller (404 otherwise),
2. commit the ``user`` turn before the model is called,
3. read back the latest turns (including the new one),
4. prepend the system prompt,
5. call the provider,
6. commit the ``assistant`` turn.

A provider failure propagates unchanged after step 2, so the user's input is
kept and no assistant turn is written. Calls are not deduplicated: sending
the same message twice yields two independent turn pairs.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Protocol, Sequence

from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.controllers import project_controller
from chatbot_platform.core.config import settings
from chatbot_platform.core.context import ContextMessage, build_context
from chatbot_platform.core.exceptions import NotFoundError
from chatbot_platform.db import conversation_store
from chatbot_platform.models.chat_turn import ChatTurn, TurnRole
from chatbot_platform.models.user import User

logger = logging.getLogger(__name__)


class CompletionGateway(Protocol):
    async def complete(self, model_id: str | None, context: Sequence[ContextMessage]) -> str: ...


@dataclass
class ChatExchange:
    user_turn: ChatTurn
    assistant_turn: ChatTurn


async def handle_user_message(
    user: User,
    project_id: uuid.UUID | str,
    message: str,
    db: AsyncSession,
    gateway: CompletionGateway,
    context_turns: int | None = None,
) -> ChatExchange:
    """Record *message*, ask the model for a reply and record the reply."""
    if context_turns is None:
        context_turns = settings.CHAT_CONTEXT_TURNS

    project = await project_controller.find_owned_project(
        project_controller.parse_project_id(project_id), user.id, db
    )
    if project is None:
        raise NotFoundError("Project not found")

    user_turn = await conversation_store.append_turn(
        project.id, user.id, TurnRole.user, message, db
    )

    turns = await conversation_store.recent_turns(project.id, context_turns, db)
    context = build_context(project, turns)

    try:
        reply = await gateway.complete(project.model, context)
    except Exception:
        logger.warning(
            "Completion failed for project %s; user turn %s kept without reply",
            project.id, user_turn.id,
        )
        raise

    assistant_turn = await conversation_store.append_turn(
        project.id, user.id, TurnRole.assistant, reply, db
    )
    logger.info(
        "Chat exchange recorded for project %s (context=%d messages)",
        project.id, len(context),
    )
    return ChatExchange(user_turn=user_turn, assistant_turn=assistant_turn)


async def get_history(
    user: User,
    project_id: uuid.UUID | str,
    db: AsyncSession,
) -> list[ChatTurn]:
    """Return every turn for *project_id*, oldest first. 404 if not owned."""
    project = await project_controller.get_project(user, project_id, db)
    return await conversation_store.all_turns(project.id, db)
