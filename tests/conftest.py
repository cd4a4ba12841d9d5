"""Shared pytest fixtures."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from config.config_loader import AppConfig, Credentials, ProviderConfig
from src.models import CallResult, ModelSpec, ProviderKind
from src.providers.base import AIProvider, ProviderError
from src.router import Router


class MockProvider(AIProvider):
    """Test double AIProvider."""

    def __init__(self, provider_name: str = "mock", response_content: str = "Mock response") -> None:
        self._name = provider_name
        self._response_content = response_content
        # Shadow the class method with an AsyncMock at the instance level.
        # ABC check passes because generate is defined in the class body below.
        self.generate = AsyncMock(return_value=response_content)  # type: ignore[assignment]

    def name(self) -> str:
        return self._name

    async def generate(self, model: str, prompt: str, api_key: str, timeout_sec: float) -> str:  # type: ignore[override]
        """Default implementation; replaced by AsyncMock in __init__."""
        return self._response_content


def per_model(replies: dict[str, object], delays: dict[str, float] | None = None):
    """Build a generate side_effect that answers per model.

    A reply that is an exception instance is raised instead of returned.
    """
    delays = delays or {}

    async def _generate(model: str, prompt: str, api_key: str, timeout_sec: float) -> str:
        await asyncio.sleep(delays.get(model, 0))
        reply = replies[model]
        if isinstance(reply, Exception):
            raise reply
        return reply  # type: ignore[return-value]

    return _generate


@pytest.fixture
def sample_specs() -> tuple[ModelSpec, ...]:
    return (
        ModelSpec("gpt-4o-2024-08-06", ProviderKind.OPENAI),
        ModelSpec("o3-mini", ProviderKind.OPENAI),
        ModelSpec("o1-mini", ProviderKind.OPENAI),
        ModelSpec("gemini-2.0-flash", ProviderKind.GEMINI),
        ModelSpec("claude-3-7-sonnet-20250219", ProviderKind.CLAUDE),
    )


@pytest.fixture
def sample_credentials() -> Credentials:
    return Credentials(openai="sk-openai", gemini="gm-key", claude="sk-ant")


@pytest.fixture
def sample_provider_configs() -> dict[ProviderKind, ProviderConfig]:
    return {
        ProviderKind.OPENAI: ProviderConfig(name="openai", api_key_env="OPENAI_API_KEY"),
        ProviderKind.GEMINI: ProviderConfig(name="gemini", api_key_env="GEMINI_API_KEY"),
        ProviderKind.CLAUDE: ProviderConfig(name="claude", api_key_env="CLAUDE_API_KEY", max_tokens=1000),
    }


@pytest.fixture
def sample_app_config(sample_specs, sample_credentials, sample_provider_configs) -> AppConfig:
    return AppConfig(
        system_prompt="Process the following input:",
        synthesizer_model="o1-mini",
        timeout_sec=30,
        models=sample_specs,
        providers=sample_provider_configs,
        credentials=sample_credentials,
    )


@pytest.fixture
def mock_providers() -> dict[ProviderKind, MockProvider]:
    return {
        ProviderKind.OPENAI: MockProvider("openai", "OpenAI says hi"),
        ProviderKind.GEMINI: MockProvider("gemini", "Gemini says hi"),
        ProviderKind.CLAUDE: MockProvider("claude", "Claude says hi"),
    }


@pytest.fixture
def router(sample_specs, mock_providers, sample_credentials) -> Router:
    return Router(sample_specs, mock_providers, sample_credentials)


@pytest.fixture
def sample_results() -> list[CallResult]:
    return [
        CallResult(model="gpt-4o-2024-08-06", latency_sec=1.234, content="Answer one."),
        CallResult(
            model="gemini-2.0-flash",
            latency_sec=0.5,
            error=ProviderError("gemini", "connection reset"),
        ),
        CallResult(model="claude-3-7-sonnet-20250219", latency_sec=2.0, content="Answer three."),
    ]
