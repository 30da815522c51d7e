from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base for request/response bodies: camelCase on the wire, snake_case in code."""

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class MessageResponse(APIModel):
    message: str
