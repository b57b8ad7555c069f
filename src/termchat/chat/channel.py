"""Single-slot handoff between the completion worker and the render loop.

Hides how completion results cross from the background request into the
UI event loop. Only one result can be waiting at a time; a producer
blocks until the previous result has been consumed.
"""

import asyncio
import logging

from .models import CompletionResult

logger = logging.getLogger(__name__)


class ResponseChannel:
    """Bounded rendezvous queue for completion results.

    Usage:
        channel = ResponseChannel()
        # worker side
        await channel.put(result)
        # render loop side, re-armed after every delivery
        while True:
            result = await channel.get()
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[CompletionResult] = asyncio.Queue(maxsize=1)

    async def put(self, result: CompletionResult) -> None:
        """Deliver a result, waiting while an earlier one is undelivered."""
        await self._queue.put(result)
        logger.debug("Result queued (ok=%s)", result.ok)

    async def get(self) -> CompletionResult:
        """Wait for the next delivered result."""
        result = await self._queue.get()
        self._queue.task_done()
        return result

    def get_nowait(self) -> CompletionResult | None:
        """Return the waiting result, or None if the slot is empty."""
        try:
            result = self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None
        self._queue.task_done()
        return result
