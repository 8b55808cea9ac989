"""Turn orchestration for voice sessions.

One webhook event is one turn. The orchestrator serializes turns per
session, either speaks the canned welcome (session.start) or streams a
model reply, and commits the user/assistant pair to history only once
the reply has completed.
"""

import asyncio
import time
from collections.abc import Callable

from structlog.contextvars import bound_contextvars

from voicehook.config.models.agent import AgentConfig
from voicehook.config.secrets import Secrets
from voicehook.conversation.models import EventType, Turn, event_type_label
from voicehook.conversation.store import SessionLockTimeout, SessionStore
from voicehook.observability.logging import get_logger
from voicehook.observability.metrics import (
    ACTIVE_SESSIONS,
    PROVIDER_ERRORS,
    STREAMED_FRAGMENTS,
    TURN_LATENCY,
)
from voicehook.providers.llm import LLMMessage, LLMProvider, ProviderError
from voicehook.webhook.models import WebhookEvent
from voicehook.webhook.stream import ResponseStream

logger = get_logger(__name__)

ProviderFactory = Callable[[str], LLMProvider]


class TurnFailedError(Exception):
    """A turn ended without a committed reply.

    Raised after end() has been signalled, so the caller only needs to
    record the failure.
    """

    def __init__(self, session_id: str, turn_id: str, reason: str) -> None:
        self.session_id = session_id
        self.turn_id = turn_id
        self.reason = reason
        super().__init__(f"Turn {turn_id} in session {session_id} failed: {reason}")


class TurnOrchestrator:
    """Drives one conversational turn per inbound webhook event.

    Guarantees per event:
    - end() is called exactly once, after every speak()/data() call,
      including when the provider, the store or the session lock fails
    - history gains the user turn and the assistant turn together, or
      nothing at all
    - only one event per session is processed at a time

    If the surrounding task is cancelled (client disconnect) the provider
    stream is abandoned, nothing is committed and end() is not sent.
    """

    def __init__(
        self,
        session_store: SessionStore,
        provider_factory: ProviderFactory,
        config: AgentConfig | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            session_store: Turn history storage
            provider_factory: Builds an LLM provider from the request's API key
            config: System prompt, welcome text and optional UI payload
        """
        self._store = session_store
        self._provider_factory = provider_factory
        self._config = config or AgentConfig()

    @property
    def config(self) -> AgentConfig:
        return self._config

    async def handle(
        self,
        event: WebhookEvent,
        stream: ResponseStream,
        secrets: Secrets,
    ) -> None:
        """Process one event, writing the reply to stream.

        Raises:
            TurnFailedError: If the session was busy, the provider failed or
                the store could not be read or written
        """
        start_time = time.perf_counter()
        outcome = "failed"

        with bound_contextvars(session_id=event.session_id, turn_id=event.turn_id):
            try:
                async with self._store.lock(event.session_id):
                    history = await self._store.get(event.session_id)
                    user_turn = Turn.user(event.text, turn_id=event.turn_id)

                    if event.type == EventType.SESSION_START.value:
                        assistant_turn = self._greet(event, stream)
                    else:
                        assistant_turn = await self._reply(
                            event, stream, secrets, [*history, user_turn]
                        )

                    total = await self._store.append(
                        event.session_id, user_turn, assistant_turn
                    )
                    await self._log_history(event.session_id)
                    stream.end()
                outcome = "completed"
                logger.debug("turn_committed", history_turns=total)

            except SessionLockTimeout as e:
                self._fail(stream, event, e)
            except ProviderError as e:
                PROVIDER_ERRORS.labels(error_type=type(e).__name__).inc()
                self._fail(stream, event, e)
            except asyncio.CancelledError:
                outcome = "cancelled"
                raise
            except Exception as e:
                logger.exception("turn_unexpected_error", error_type=type(e).__name__)
                self._fail(stream, event, e)
            finally:
                elapsed = time.perf_counter() - start_time
                TURN_LATENCY.labels(
                    event_type=event_type_label(event.type), outcome=outcome
                ).observe(elapsed)
                logger.info(
                    "turn_finished",
                    event_type=event.type,
                    outcome=outcome,
                    latency_ms=round(elapsed * 1000, 2),
                )

        # Only a committed turn can change the number of sessions held
        ACTIVE_SESSIONS.set(await self._store.count())

    def _greet(self, event: WebhookEvent, stream: ResponseStream) -> Turn:
        welcome = self._config.welcome_message
        stream.speak(welcome)
        logger.debug("session_started")
        return Turn.assistant(welcome, turn_id=event.turn_id)

    async def _reply(
        self,
        event: WebhookEvent,
        stream: ResponseStream,
        secrets: Secrets,
        history: list[Turn],
    ) -> Turn:
        provider = self._provider_factory(secrets.llm_api_key.get_secret_value())
        messages = [
            LLMMessage(role=turn.role.value, content=turn.text) for turn in history
        ]

        generation = provider.stream(messages, system_prompt=self._config.system_prompt)

        if self._config.ui_data is not None:
            stream.data(self._config.ui_data)

        fragments = await stream.speak_stream(generation)
        STREAMED_FRAGMENTS.inc(fragments)

        reply = generation.response
        logger.debug(
            "model_reply_completed",
            provider=provider.provider_name,
            model=reply.model,
            fragments=fragments,
            reply_length=len(reply.content),
        )
        return Turn.assistant(reply.content, turn_id=event.turn_id)

    async def _log_history(self, session_id: str) -> None:
        history = await self._store.get(session_id)
        logger.debug(
            "session_history",
            turns=[{"role": t.role.value, "text": t.text} for t in history],
        )

    def _fail(
        self, stream: ResponseStream, event: WebhookEvent, error: Exception
    ) -> None:
        logger.warning(
            "turn_failed",
            event_type=event.type,
            error=str(error),
            error_type=type(error).__name__,
        )
        if not stream.ended:
            stream.end()
        raise TurnFailedError(event.session_id, event.turn_id, str(error)) from error
