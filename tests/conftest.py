"""Pytest configuration and shared fixtures."""
import asyncio
import json
import os
from typing import Any

import pytest

from termchat.chat import ChatSession, CompletionGateway, ResponseChannel
from termchat.llm import ChatMessage, LLMProvider, LLMResponse


class FakeProvider(LLMProvider):
    """In-process provider that records requests instead of calling an API.

    Args:
        reply: Content returned for every request
        role: Role reported for the reply
        error: Exception raised instead of replying
        gate: Event that must be set before the reply is returned
    """

    def __init__(
        self,
        reply: str = "Hi there!",
        role: str = "assistant",
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.reply = reply
        self.role = role
        self.error = error
        self.gate = gate
        self.calls: list[list[ChatMessage]] = []
        self.options: list[dict[str, Any]] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append(list(messages))
        self.options.append({"model": model, "temperature": temperature, "max_tokens": max_tokens})
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, role=self.role, model=model or self.model)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
        "deepseek": os.getenv("DEEPSEEK_API_KEY")
    }


@pytest.fixture
def make_provider():
    """Factory for fake providers with custom behaviour."""
    return FakeProvider


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def channel():
    return ResponseChannel()


@pytest.fixture
def gateway(fake_provider, channel):
    return CompletionGateway(provider=fake_provider, channel=channel)


@pytest.fixture
def session():
    """A session with a known viewport."""
    chat = ChatSession()
    chat.resize(120, 30)
    return chat


@pytest.fixture
def config_file(tmp_path):
    """Write a config file and return its path."""
    def _write(data: Any) -> Any:
        path = tmp_path / "config.json"
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture(autouse=True)
def _clear_termchat_env(monkeypatch):
    """Keep developer environment overrides out of tests."""
    for name in ("TERMCHAT_PROVIDER", "TERMCHAT_MODEL", "TERMCHAT_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
