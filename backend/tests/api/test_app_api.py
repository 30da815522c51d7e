"""Health endpoint and startup configuration checks."""
import logging

import pytest

from chatbot_platform.api import deps
from chatbot_platform.core.config import ModeEnum, settings
from chatbot_platform.core.exceptions import ConfigurationError
from chatbot_platform.main import validate_provider_config


@pytest.fixture
def provider_settings(monkeypatch):
    """Patch settings and drop the cached provider config around the test."""
    deps.get_provider_config.cache_clear()

    def apply(**values):
        for key, value in values.items():
            monkeypatch.setattr(settings, key, value)
        deps.get_provider_config.cache_clear()

    yield apply
    deps.get_provider_config.cache_clear()


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "OK", "message": "Server is running"}


@pytest.mark.asyncio
async def test_unknown_route_renders_message(client):
    response = await client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_missing_key_fails_startup_in_production(provider_settings):
    provider_settings(MODE=ModeEnum.production, OPENROUTER_API_KEY="")

    with pytest.raises(ConfigurationError):
        validate_provider_config()


def test_missing_key_only_warns_in_development(provider_settings, caplog):
    provider_settings(MODE=ModeEnum.development, OPENROUTER_API_KEY="")

    with caplog.at_level(logging.WARNING):
        validate_provider_config()

    assert "OPENROUTER_API_KEY is not set" in caplog.text


def test_configured_key_passes(provider_settings):
    provider_settings(MODE=ModeEnum.production, OPENROUTER_API_KEY="sk-or-test")

    validate_provider_config()
