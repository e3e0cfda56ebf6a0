"""Pytest configuration and fixtures."""

import json
from typing import Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from fridge_check.api.dependencies import get_chat_model
from fridge_check.core.config import Settings, get_settings
from fridge_check.main import app


# Sample test image (1x1 red pixel PNG)
TINY_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIAX8jx0gAAAABJRU5ErkJggg=="
)

FRIED_RICE_REPLY = (
    '{"ingredients":["chicken","rice"],'
    '"recipes":[{"name":"Fried Rice","description":"d","instructions":["step1"]}]}'
)


def make_ai_message(
    content: str,
    input_tokens: int | None = 120,
    output_tokens: int | None = 80,
) -> AIMessage:
    """Build an AIMessage as a chat model would return it."""
    if input_tokens is None:
        return AIMessage(content=content)
    return AIMessage(
        content=content,
        usage_metadata={
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
        },
    )


@pytest.fixture
def settings() -> Settings:
    """Settings with a configured upstream credential."""
    return Settings(
        _env_file=None,
        llm_provider="anthropic",
        anthropic_api_key="test-key",
        llm_timeout=5.0,
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Settings without any upstream credential."""
    return Settings(
        _env_file=None,
        llm_provider="anthropic",
        anthropic_api_key="",
    )


@pytest.fixture
def fake_llm() -> MagicMock:
    """
    Stub chat model.

    Usage:
        fake_llm.ainvoke.return_value = make_ai_message('{"recipes": []}')
    """
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=make_ai_message(FRIED_RICE_REPLY))
    return llm


@pytest.fixture
def override_app() -> Generator[Callable[..., None], None, None]:
    """Install dependency overrides on the app, cleared after the test."""

    def _override(settings: Settings, llm: MagicMock | None = None) -> None:
        app.dependency_overrides[get_settings] = lambda: settings
        if llm is not None:
            app.dependency_overrides[get_chat_model] = lambda: llm

    yield _override
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_app, settings, fake_llm) -> TestClient:
    """
    Test client wired to the stub chat model.

    Usage:
        def test_endpoint(client: TestClient):
            response = client.post("/api/analyze", json={...})
            assert response.status_code == 200
    """
    override_app(settings, fake_llm)
    return TestClient(app)


@pytest.fixture
def fried_rice_reply() -> dict:
    return json.loads(FRIED_RICE_REPLY)
