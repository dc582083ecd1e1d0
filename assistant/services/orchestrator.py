"""Turn orchestrator — drives one conversation, one turn at a time.

States: IDLE -> SENDING -> RESOLVED | FAILED -> IDLE. The transcript, the
loading flag and the widget flags (open/minimized) live here as explicit state;
observers subscribe to receive a snapshot after every change.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

from assistant.config import settings
from assistant.services.completion_client import CompletionResult
from assistant.services.intent_router import IntentRouter, PatternIntentRouter, SessionSwitch

logger = logging.getLogger(__name__)


class TurnState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(frozen=True)
class ChatMessage:
    id: str
    role: str  # "user" or "assistant"
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ConversationTurn:
    """Transient record of the in-flight turn."""

    user_input: str
    loading: bool = True
    result: CompletionResult | None = None


@dataclass(frozen=True)
class ConversationSnapshot:
    state: TurnState
    loading: bool
    is_open: bool
    is_minimized: bool
    session_id: str | None
    messages: tuple[ChatMessage, ...]

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "loading": self.loading,
            "is_open": self.is_open,
            "is_minimized": self.is_minimized,
            "session_id": self.session_id,
            "messages": [m.to_dict() for m in self.messages],
        }


def switch_acknowledgement(name: str) -> str:
    return f'I\'ll switch you to the "{name}" session. Let me find that for you!'


class TurnOrchestrator:
    """Conversation state machine.

    ``responder`` is anything with ``async reply(message, user_id, session_id)``
    returning a CompletionResult: ChatService in-process, or AssistantClient
    against a running API.
    """

    def __init__(
        self,
        user_id: str,
        responder,
        router: IntentRouter | None = None,
        on_session_switch: Callable[[str], None] | None = None,
        notify: Callable[[str], None] | None = None,
        session_id: str | None = None,
        assistant_name: str | None = None,
    ):
        self.user_id = user_id
        self.responder = responder
        self.router = router or PatternIntentRouter()
        self.on_session_switch = on_session_switch
        self.notify = notify or (lambda text: logger.warning(text))
        self.assistant_name = assistant_name or settings.assistant_name

        self._state = TurnState.IDLE
        self._turn: ConversationTurn | None = None
        self._messages: list[ChatMessage] = []
        self._session_id = session_id
        self._is_open = False
        self._is_minimized = False
        self._listeners: list[Callable[[ConversationSnapshot], None]] = []

    # ─── Observation ──────────────────────────────────────────────────────

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state is TurnState.SENDING

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def current_turn(self) -> ConversationTurn | None:
        return self._turn

    @property
    def session_id(self) -> str | None:
        return self._session_id

    def snapshot(self) -> ConversationSnapshot:
        return ConversationSnapshot(
            state=self._state,
            loading=self.loading,
            is_open=self._is_open,
            is_minimized=self._is_minimized,
            session_id=self._session_id,
            messages=tuple(self._messages),
        )

    def subscribe(self, listener: Callable[[ConversationSnapshot], None]) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self):
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ─── Widget state ─────────────────────────────────────────────────────

    def open(self):
        self._is_open = True
        self._emit()

    def close(self):
        self._is_open = False
        self._emit()

    def toggle_minimized(self):
        self._is_minimized = not self._is_minimized
        self._emit()

    def set_session(self, session_id: str | None):
        self._session_id = session_id
        self._emit()

    def clear(self):
        """Empty the transcript entirely."""
        self._messages.clear()
        self._emit()

    # ─── Turns ────────────────────────────────────────────────────────────

    def _append(self, role: str, content: str) -> ChatMessage:
        message = ChatMessage(id=uuid.uuid4().hex, role=role, content=content)
        self._messages.append(message)
        self._emit()
        return message

    async def submit(self, text: str) -> ConversationTurn | None:
        """Run one turn.

        Returns None without side effects when text is blank or a turn is
        already in flight. The user's message is appended before any await.
        """
        user_input = (text or "").strip()
        if not user_input or self._state is not TurnState.IDLE:
            return None

        turn = ConversationTurn(user_input=user_input)
        self._turn = turn
        self._state = TurnState.SENDING
        try:
            self._append("user", user_input)
            result = await self._resolve(user_input)
            turn.result = result

            if result.success:
                self._append("assistant", result.text)
                self._state = TurnState.RESOLVED
            else:
                if result.error:
                    logger.error(f"Chat turn failed for user {self.user_id} ({result.failure}): {result.error}")
                self._state = TurnState.FAILED
                self.notify(f"Failed to get {self.assistant_name}'s response")
            self._emit()
        finally:
            # Resolved/Failed always fall back to Idle, even if an observer raised
            turn.loading = False
            self._state = TurnState.IDLE
            self._turn = None
            self._emit()
        return turn

    async def _resolve(self, user_input: str) -> CompletionResult:
        """Route the message and produce its result; never raises."""
        try:
            intent = self.router.classify(user_input)
            if isinstance(intent, SessionSwitch) and self.on_session_switch is not None:
                logger.info(f"Session switch requested: {intent.name!r}")
                self.on_session_switch(intent.name)
                return CompletionResult(success=True, text=switch_acknowledgement(intent.name))
            return await self.responder.reply(user_input, self.user_id, self._session_id)
        except Exception as e:
            return CompletionResult(success=False, error=str(e))
