# Import all models so SQLModel.metadata registers them for Alembic autogenerate.
from chatbot_platform.models.base import BaseUUIDModel  # noqa: F401
from chatbot_platform.models.user import User  # noqa: F401
from chatbot_platform.models.refresh_token import RefreshToken  # noqa: F401
from chatbot_platform.models.project import Project, Prompt, ProjectFile  # noqa: F401
from chatbot_platform.models.chat_turn import ChatTurn  # noqa: F401
