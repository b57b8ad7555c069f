"""Unit tests for the llm module."""
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from hypothesis import given
from hypothesis import strategies as st

from termchat.exceptions import ProviderError
from termchat.llm import (
    ChatMessage,
    DeepSeekProvider,
    LLMProvider,
    OpenAIProvider,
    create_llm_provider,
)


def fake_completion(content: str | None, role: str = "assistant"):
    """Build an object shaped like an OpenAI chat completion."""
    return SimpleNamespace(
        model="gpt-4o-mini",
        choices=[
            SimpleNamespace(message=SimpleNamespace(role=role, content=content)),
            SimpleNamespace(message=SimpleNamespace(role=role, content="ignored")),
        ],
        usage=SimpleNamespace(prompt_tokens=3, completion_tokens=2, total_tokens=5),
    )


class TestLLMProviderInterface:
    """Tests for the abstract LLMProvider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestOpenAIProvider:
    """Tests for OpenAIProvider."""

    def test_default_model(self):
        assert OpenAIProvider(api_key="fake-key").model == "gpt-4o-mini"

    async def test_chat_completion_uses_first_choice(self):
        provider = OpenAIProvider(api_key="fake-key")
        create = AsyncMock(return_value=fake_completion("Hi there!"))
        provider._client.chat.completions.create = create

        response = await provider.chat_completion(
            [ChatMessage(role="system", content="Be brief."), ChatMessage(role="user", content="Hello")],
            temperature=0.3,
        )

        assert response.content == "Hi there!"
        assert response.role == "assistant"
        assert response.usage == {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5}
        kwargs = create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.3
        assert kwargs["messages"] == [
            {"role": "system", "content": "Be brief."},
            {"role": "user", "content": "Hello"},
        ]
        assert "max_tokens" not in kwargs

    async def test_chat_completion_empty_content(self):
        provider = OpenAIProvider(api_key="fake-key")
        provider._client.chat.completions.create = AsyncMock(return_value=fake_completion(None))

        response = await provider.chat_completion([ChatMessage(role="user", content="Hello")])

        assert response.content == ""

    async def test_context_manager_closes_client(self):
        provider = OpenAIProvider(api_key="fake-key")
        provider._client.close = AsyncMock()

        async with provider:
            pass

        provider._client.close.assert_awaited_once()

    @pytest.mark.integration
    async def test_chat_completion_real_api(self, api_keys):
        """Integration test: one round trip with the real API."""
        if not api_keys["openai"]:
            pytest.skip("OPENAI_API_KEY not set")

        async with OpenAIProvider(api_key=api_keys["openai"]) as provider:
            response = await provider.chat_completion(
                [ChatMessage(role="user", content="Reply with the single word: pong")]
            )

        assert response.content


class TestDeepSeekProvider:
    """Tests for DeepSeekProvider."""

    def test_defaults(self):
        provider = DeepSeekProvider(api_key="fake-key")

        assert provider.model == "deepseek-chat"
        assert str(provider._client.base_url).startswith("https://api.deepseek.com")

    def test_custom_base_url(self):
        provider = DeepSeekProvider(api_key="fake-key", base_url="http://localhost:9000/v1")
        assert str(provider._client.base_url).startswith("http://localhost:9000/v1")


class TestLLMFactory:
    """Tests for the provider factory function."""

    def test_create_openai_provider(self):
        provider = create_llm_provider("openai", api_key="test-key", model="gpt-4o")

        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o"

    def test_create_deepseek_provider(self):
        assert isinstance(create_llm_provider("DeepSeek", api_key="test-key"), DeepSeekProvider)

    def test_create_provider_unknown_type(self):
        with pytest.raises(ProviderError, match="Unsupported provider"):
            create_llm_provider("unknown", api_key="test-key")

    def test_unknown_type_is_value_error(self):
        with pytest.raises(ValueError):
            create_llm_provider("unknown", api_key="test-key")

    def test_create_provider_missing_api_key(self):
        with pytest.raises(TypeError, match="requires 'api_key'"):
            create_llm_provider("openai")

    @given(st.text(min_size=1))
    def test_factory_with_random_provider_names(self, provider_name: str):
        """Property test: Factory should only accept known providers."""
        if provider_name.lower() in ("openai", "deepseek"):
            provider = create_llm_provider(provider_name, api_key="fake")
            assert isinstance(provider, OpenAIProvider)
        else:
            with pytest.raises(ProviderError):
                create_llm_provider(provider_name, api_key="fake")
