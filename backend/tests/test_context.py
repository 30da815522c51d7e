"""Tests for context assembly."""
import uuid

from chatbot_platform.core.context import build_context
from chatbot_platform.models.chat_turn import ChatTurn
from chatbot_platform.models.project import DEFAULT_SYSTEM_PROMPT, Project


def _project(system_prompt: str = "You are a pirate.") -> Project:
    return Project(user_id=uuid.uuid4(), name="p", system_prompt=system_prompt)


def _turn(role: str, content: str) -> ChatTurn:
    return ChatTurn(project_id=uuid.uuid4(), user_id=uuid.uuid4(), role=role, content=content)


class TestBuildContext:

    def test_system_prompt_leads(self):
        """Context should start with exactly one system entry."""
        context = build_context(_project(), [_turn("user", "Ahoy")])

        assert context[0].role == "system"
        assert context[0].content == "You are a pirate."
        assert [m.role for m in context].count("system") == 1

    def test_preserves_turn_order(self):
        turns = [
            _turn("user", "one"),
            _turn("assistant", "two"),
            _turn("user", "three"),
        ]

        context = build_context(_project(), turns)

        assert [(m.role, m.content) for m in context[1:]] == [
            ("user", "one"),
            ("assistant", "two"),
            ("user", "three"),
        ]

    def test_no_prior_turns(self):
        context = build_context(_project(), [])

        assert len(context) == 1
        assert context[0].role == "system"

    def test_does_not_cap_turns(self):
        """Truncation belongs to the caller, not the assembler."""
        turns = [_turn("user", str(i)) for i in range(25)]

        context = build_context(_project(), turns)

        assert len(context) == 26

    def test_blank_system_prompt_falls_back_to_default(self):
        context = build_context(_project(system_prompt=""), [])

        assert context[0].content == DEFAULT_SYSTEM_PROMPT

    def test_serializes_to_provider_shape(self):
        context = build_context(_project(), [_turn("user", "Hello")])

        assert [m.model_dump() for m in context] == [
            {"role": "system", "content": "You are a pirate."},
            {"role": "user", "content": "Hello"},
        ]
