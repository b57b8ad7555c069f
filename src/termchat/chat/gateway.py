"""Boundary between the chat session and the remote completion service.

Hides the design decisions about:
- Conversion of transcript messages to the provider wire format
- Capturing transport and provider failures as results
- Request timeout handling
"""

import asyncio
import logging
from collections.abc import Sequence

from ..llm import ChatMessage, LLMProvider
from .channel import ResponseChannel
from .models import CompletionResult, Message, Role

logger = logging.getLogger(__name__)


def to_wire_messages(request: Sequence[Message]) -> list[ChatMessage]:
    """Convert transcript messages to provider messages, preserving order and role."""
    return [ChatMessage(role=msg.role.value, content=msg.content) for msg in request]


def _parse_role(role: str | None) -> Role:
    try:
        return Role(role) if role else Role.ASSISTANT
    except ValueError:
        logger.warning("Provider returned unknown role %r, using assistant", role)
        return Role.ASSISTANT


class CompletionGateway:
    """Issues one completion request per submission.

    The gateway does not guard against concurrent submissions; the chat
    session only dispatches while it is idle. Every call produces exactly
    one result on the response channel, failures included, and nothing is
    retried.
    """

    def __init__(
        self,
        provider: LLMProvider,
        channel: ResponseChannel,
        model: str | None = None,
        temperature: float = 0.7,
        timeout: float | None = None,
        max_tokens: int | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            provider: LLM provider used for the completion call
            channel: Channel that receives every result
            model: Model override (None uses the provider default)
            temperature: Sampling temperature
            timeout: Seconds to wait for the provider (None waits forever)
            max_tokens: Reply length limit (None uses the service default)
        """
        self._provider = provider
        self._channel = channel
        self._model = model
        self._temperature = temperature
        self._timeout = timeout
        self._max_tokens = max_tokens

    @property
    def channel(self) -> ResponseChannel:
        return self._channel

    @property
    def model_name(self) -> str:
        if self._model:
            return self._model
        return getattr(self._provider, "model", "unknown")

    async def submit(self, request: Sequence[Message]) -> CompletionResult:
        """Send the conversation and deliver the result to the channel.

        Args:
            request: Snapshot of the conversation to send

        Returns:
            The result that was delivered
        """
        result = await self._complete(request)
        await self._channel.put(result)
        return result

    async def _complete(self, request: Sequence[Message]) -> CompletionResult:
        messages = to_wire_messages(request)
        logger.debug("Sending %d message(s) to %s", len(messages), self.model_name)

        deadline = asyncio.timeout(self._timeout)
        try:
            async with deadline:
                response = await self._provider.chat_completion(
                    messages,
                    model=self._model,
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                )
        except TimeoutError as e:
            if not deadline.expired():
                # Raised by the provider, not by the deadline
                logger.warning("Completion failed: %s", e)
                return CompletionResult.failure(e)
            logger.warning("Completion timed out after %ss", self._timeout)
            return CompletionResult.failure(
                TimeoutError(f"No response after {self._timeout:g}s")
            )
        except Exception as e:
            logger.warning("Completion failed: %s", e)
            return CompletionResult.failure(e)

        logger.debug("Received %d character(s), usage=%s", len(response.content), response.usage)
        return CompletionResult(content=response.content, role=_parse_role(response.role))

    async def close(self) -> None:
        """Close the underlying provider."""
        await self._provider.close()
