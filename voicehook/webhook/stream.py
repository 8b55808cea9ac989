"""Outbound response channel for one webhook call.

The handler writes to a ResponseStream (speak / data / end) while the
HTTP layer drains it as Server-Sent Events. The two sides are joined by
an asyncio queue so the handler never waits on the client.
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import suppress
from typing import Any

from sse_starlette.sse import EventSourceResponse

from voicehook.observability.logging import get_logger
from voicehook.webhook.models import DataEvent, EndEvent, StreamEvent, TTSEvent

logger = get_logger(__name__)


class StreamClosedError(RuntimeError):
    """Raised when writing to a stream after end()."""


class ResponseStream:
    """Collects outbound events for a single turn.

    end() may be called exactly once, and nothing may be written after it.
    """

    def __init__(self, turn_id: str) -> None:
        self._turn_id = turn_id
        self._queue: asyncio.Queue[StreamEvent | None] = asyncio.Queue()
        self._ended = False
        self._closed = False

    @property
    def turn_id(self) -> str:
        return self._turn_id

    @property
    def ended(self) -> bool:
        return self._ended

    def _put(self, event: StreamEvent) -> None:
        if self._ended or self._closed:
            raise StreamClosedError(f"Stream for turn {self._turn_id} is closed")
        self._queue.put_nowait(event)

    def speak(self, text: str) -> None:
        """Queue text to be synthesized and spoken."""
        self._put(TTSEvent(content=text, turn_id=self._turn_id))

    def data(self, payload: Any) -> None:
        """Queue a JSON payload forwarded verbatim to the client."""
        self._put(DataEvent(content=payload, turn_id=self._turn_id))

    async def speak_stream(self, fragments: AsyncIterator[str]) -> int:
        """speak() every fragment as it arrives; returns the fragment count."""
        count = 0
        async for fragment in fragments:
            self.speak(fragment)
            count += 1
        return count

    def end(self) -> None:
        """Signal that this turn's content is complete."""
        self._put(EndEvent(turn_id=self._turn_id))
        self._ended = True

    def close(self) -> None:
        """Stop the event feed without an end marker (handler aborted)."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(None)

    async def events(self) -> AsyncIterator[StreamEvent]:
        """Yield queued events until end() or close()."""
        while True:
            event = await self._queue.get()
            if event is None:
                return
            yield event
            if isinstance(event, EndEvent):
                return


StreamHandler = Callable[[ResponseStream], Awaitable[None]]


def stream_response(turn_id: str, handler: StreamHandler) -> EventSourceResponse:
    """Run handler in the background and stream what it writes as SSE.

    Each event is sent as a bare ``data: {json}`` message. If the client
    goes away before the turn ends, the handler task is cancelled.
    """
    stream = ResponseStream(turn_id)

    async def run_handler() -> None:
        try:
            await handler(stream)
        except Exception as e:
            # The HTTP status is already committed; all that is left is to log.
            logger.error(
                "stream_handler_failed",
                turn_id=turn_id,
                error=str(e),
                error_type=type(e).__name__,
            )
        finally:
            stream.close()

    async def event_generator() -> AsyncIterator[dict[str, str]]:
        task = asyncio.create_task(run_handler())
        try:
            async for event in stream.events():
                yield {"data": event.model_dump_json()}
            await task
        finally:
            if not task.done():
                logger.info("stream_client_disconnected", turn_id=turn_id)
                task.cancel()
                with suppress(asyncio.CancelledError):
                    await task

    return EventSourceResponse(event_generator())
