"""Unit tests for the completion gateway and response channel."""
import asyncio

import pytest

from termchat.chat import (
    CompletionGateway,
    CompletionResult,
    Message,
    ResponseChannel,
    Role,
    to_wire_messages,
)
from termchat.llm import ChatMessage

CONVERSATION = (
    Message(role=Role.SYSTEM, content="Be brief."),
    Message(role=Role.USER, content="Hello"),
    Message(role=Role.ASSISTANT, content="Hi there!"),
    Message(role=Role.USER, content="How are you?"),
)


class TestWireConversion:
    """Tests for message conversion."""

    def test_preserves_order_and_roles(self):
        assert to_wire_messages(CONVERSATION) == [
            ChatMessage(role="system", content="Be brief."),
            ChatMessage(role="user", content="Hello"),
            ChatMessage(role="assistant", content="Hi there!"),
            ChatMessage(role="user", content="How are you?"),
        ]

    def test_empty_request(self):
        assert to_wire_messages(()) == []


class TestCompletionGateway:
    """Tests for CompletionGateway."""

    async def test_submit_sends_full_conversation(self, gateway, fake_provider):
        await gateway.submit(CONVERSATION)

        assert len(fake_provider.calls) == 1
        assert [m.content for m in fake_provider.calls[0]] == [m.content for m in CONVERSATION]

    async def test_submit_delivers_to_channel(self, gateway, channel):
        result = await gateway.submit(CONVERSATION)

        assert result == CompletionResult(content="Hi there!", role=Role.ASSISTANT)
        assert channel.get_nowait() == result
        assert channel.get_nowait() is None

    async def test_returned_role_is_kept(self, channel, make_provider):
        gateway = CompletionGateway(make_provider(reply="note", role="system"), channel)

        result = await gateway.submit(CONVERSATION)

        assert result.role is Role.SYSTEM

    async def test_unknown_role_falls_back_to_assistant(self, channel, make_provider):
        gateway = CompletionGateway(make_provider(role="tool"), channel)

        result = await gateway.submit(CONVERSATION)

        assert result.role is Role.ASSISTANT

    async def test_provider_error_is_captured(self, channel, make_provider):
        provider = make_provider(error=ConnectionError("connection refused"))
        gateway = CompletionGateway(provider, channel)

        result = await gateway.submit(CONVERSATION)

        assert not result.ok
        assert result.content == ""
        assert result.error.message == "connection refused"
        assert result.error.kind == "ConnectionError"
        assert await channel.get() == result
        assert len(provider.calls) == 1

    async def test_error_without_message_uses_class_name(self, channel, make_provider):
        gateway = CompletionGateway(make_provider(error=RuntimeError()), channel)

        result = await gateway.submit(CONVERSATION)

        assert result.error.message == "RuntimeError"

    async def test_timeout_becomes_error(self, channel, make_provider):
        provider = make_provider(gate=asyncio.Event())
        gateway = CompletionGateway(provider, channel, timeout=0.01)

        result = await gateway.submit(CONVERSATION)

        assert result.error is not None
        assert result.error.kind == "TimeoutError"
        assert "0.01s" in result.error.message

    async def test_provider_timeout_without_deadline_is_captured(self, channel, make_provider):
        provider = make_provider(error=TimeoutError("read timed out"))
        gateway = CompletionGateway(provider, channel, timeout=None)

        result = await gateway.submit(CONVERSATION)

        assert result.error.kind == "TimeoutError"
        assert result.error.message == "read timed out"
        assert await channel.get() == result

    async def test_provider_timeout_is_not_reported_as_deadline(self, channel, make_provider):
        provider = make_provider(error=TimeoutError("read timed out"))
        gateway = CompletionGateway(provider, channel, timeout=120)

        result = await gateway.submit(CONVERSATION)

        assert result.error.message == "read timed out"
        assert "No response after" not in result.error.message

    async def test_max_tokens_forwarded(self, channel, fake_provider):
        gateway = CompletionGateway(fake_provider, channel, max_tokens=256)

        await gateway.submit(CONVERSATION)

        assert fake_provider.options == [{"model": None, "temperature": 0.7, "max_tokens": 256}]

    async def test_model_name(self, fake_provider, channel):
        assert CompletionGateway(fake_provider, channel).model_name == "fake-model"
        assert CompletionGateway(fake_provider, channel, model="other").model_name == "other"

    async def test_close_closes_provider(self, gateway, fake_provider):
        await gateway.close()
        assert fake_provider.closed


class TestResponseChannel:
    """Tests for ResponseChannel."""

    async def test_get_waits_for_delivery(self, channel):
        waiter = asyncio.create_task(channel.get())
        await asyncio.sleep(0)
        assert not waiter.done()

        await channel.put(CompletionResult(content="late"))

        assert (await waiter).content == "late"

    async def test_single_slot_blocks_second_put(self, channel):
        await channel.put(CompletionResult(content="first"))

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(channel.put(CompletionResult(content="second")), timeout=0.01)

        assert (await channel.get()).content == "first"
        assert channel.get_nowait() is None

    async def test_deliveries_in_order(self, channel):
        async def produce():
            for text in ["one", "two", "three"]:
                await channel.put(CompletionResult(content=text))

        producer = asyncio.create_task(produce())
        received = [(await channel.get()).content for _ in range(3)]
        await producer

        assert received == ["one", "two", "three"]

    def test_get_nowait_on_empty_channel(self, channel):
        assert channel.get_nowait() is None
