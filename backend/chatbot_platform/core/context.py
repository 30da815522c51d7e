from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel

from chatbot_platform.core.config import settings
from chatbot_platform.models.chat_turn import ChatTurn
from chatbot_platform.models.project import Project


class ContextMessage(BaseModel):
    """One role/content pair sent to the provider."""

    role: Literal["system", "user", "assistant"]
    content: str


def build_context(project: Project, prior_turns: Iterable[ChatTurn]) -> list[ContextMessage]:
    """Prepend the project's system prompt to *prior_turns*, preserving their order.

    Pure: it neither fetches nor caps turns; the caller decides how many to pass.
    """
    system_prompt = project.system_prompt or settings.DEFAULT_SYSTEM_PROMPT
    context = [ContextMessage(role="system", content=system_prompt)]
    context.extend(ContextMessage(role=turn.role, content=turn.content) for turn in prior_turns)
    return context
