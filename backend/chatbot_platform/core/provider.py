"""
OpenRouter chat-completion gateway.

Stateless: each ``complete`` call opens its own HTTPS request with the
configured timeout. No retries; failures surface to the caller immediately.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from chatbot_platform.core.config import Settings, settings
from chatbot_platform.core.context import ContextMessage
from chatbot_platform.core.exceptions import (
    GENERIC_UPSTREAM_MESSAGE,
    ConfigurationError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

MISSING_CREDENTIAL_MESSAGE = "LLM provider API key not configured"


@dataclass(frozen=True)
class ProviderConfig:
    api_key: str
    base_url: str = "https://openrouter.ai/api/v1"
    timeout: float = 60.0
    default_model: str = "openai/gpt-3.5-turbo"
    referer: str = "http://localhost:3000"
    title: str = "Chatbot Platform"

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "ProviderConfig":
        return cls(
            api_key=config.OPENROUTER_API_KEY,
            base_url=config.OPENROUTER_BASE_URL.rstrip("/"),
            timeout=config.PROVIDER_TIMEOUT_SECONDS,
            default_model=config.DEFAULT_MODEL,
            referer=config.OPENROUTER_APP_URL,
            title=config.OPENROUTER_APP_TITLE,
        )

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    def require_credential(self) -> None:
        if not self.has_credential:
            raise ConfigurationError(MISSING_CREDENTIAL_MESSAGE)


def _upstream_message(payload: Any) -> str:
    """Pull ``error.message`` out of a provider error payload, if there is one."""
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
            return error["message"]
        if isinstance(error, str) and error:
            return error
    return GENERIC_UPSTREAM_MESSAGE


class OpenRouterGateway:
    """Sends an assembled context to the chat-completion endpoint."""

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    @property
    def config(self) -> ProviderConfig:
        return self._config

    async def complete(self, model_id: str | None, context: Sequence[ContextMessage]) -> str:
        """Return the generated text for *context* on *model_id*.

        Raises:
            ConfigurationError: no API key is configured (checked before any I/O).
            UpstreamError: transport failure, non-2xx status, or a payload
                without ``choices[0].message.content``.
        """
        self._config.require_credential()

        model = model_id or self._config.default_model
        body = {
            "model": model,
            "messages": [message.model_dump() for message in context],
        }
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self._config.referer,
            "X-Title": self._config.title,
        }

        logger.info("Requesting completion: model=%s messages=%d", model, len(body["messages"]))
        try:
            async with httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=httpx.Timeout(self._config.timeout, connect=10.0),
                transport=self._transport,
            ) as client:
                response = await client.post("/chat/completions", json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("Provider request failed: %s", e)
            raise UpstreamError(GENERIC_UPSTREAM_MESSAGE) from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            message = _upstream_message(payload)
            logger.warning("Provider returned HTTP %d: %s", response.status_code, message)
            raise UpstreamError(message, upstream_status=response.status_code, payload=payload)

        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

        if not isinstance(content, str) or not content.strip():
            logger.warning("Provider response for model %s had no generated text", model)
            raise UpstreamError(
                _upstream_message(payload),
                upstream_status=response.status_code,
                payload=payload,
            )

        return content
