"""Chat session: runs one turn at a time against the assistant gateway.

Holds the current ConversationState for the lifetime of the process. Data is
lost when the application exits.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from ..assistant.gateway import AssistantGateway
from ..assistant.interpreter import Interpretation, interpret_response
from ..models import Message, Task
from .state import ConversationState, abort_turn, begin_turn, complete_turn


class ChatSession:
    """Single-flight turn processing over an in-memory conversation.

    Usage:
        session = ChatSession(AssistantGateway(llm))
        outcome = await session.submit("remind me to call mom tomorrow")
        print(outcome.reply, session.tasks)
    """

    def __init__(
        self,
        gateway: AssistantGateway,
        state: ConversationState | None = None,
        debug_callback: Any = None,
        state_callback: Callable[[ConversationState], None] | None = None,
    ) -> None:
        self._gateway = gateway
        self._state = state or ConversationState()
        self._debug_callback = debug_callback
        self._state_callback = state_callback
        if debug_callback is not None:
            gateway.set_debug_callback(debug_callback)

    @property
    def state(self) -> ConversationState:
        return self._state

    @property
    def gateway(self) -> AssistantGateway:
        return self._gateway

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._state.messages

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._state.tasks

    @property
    def is_sending(self) -> bool:
        return self._state.is_sending

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for this session and its gateway.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        self._gateway.set_debug_callback(callback)

    def set_state_callback(self, callback: Callable[[ConversationState], None] | None) -> None:
        """Set a callable invoked with the new state after every transition."""
        self._state_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def _set_state(self, state: ConversationState) -> None:
        self._state = state
        if self._state_callback:
            self._state_callback(state)

    async def submit(self, text: str) -> Interpretation | None:
        """Process one user turn.

        Blank input is ignored and returns None. Otherwise the user message is
        appended, the gateway is called with the transcript that preceded it,
        and the interpreted reply (plus any task) is appended.

        Any error escaping the gateway returns the session to idle before
        it propagates.

        Raises:
            TurnInProgressError: If another turn is still outstanding
        """
        if not text.strip():
            return None

        history = self._state.messages
        self._set_state(begin_turn(self._state, text))
        self._debug("info", "Session", f"Turn started ({len(history)} prior messages)")

        try:
            raw = await self._gateway.ask(text, history)
        except asyncio.CancelledError:
            self._set_state(abort_turn(self._state))
            self._debug("warning", "Session", "Turn cancelled")
            raise
        except BaseException as e:
            self._set_state(abort_turn(self._state))
            self._debug("error", "Session", f"Turn aborted: {e!r}")
            raise

        interpretation = interpret_response(raw)
        if not interpretation.parsed:
            self._debug("warning", "Parser", f"Could not parse model output: {raw[:200]!r}")
        if interpretation.task is not None:
            self._debug("info", "Tasks", f"New task: {interpretation.task.task_name}")

        self._set_state(complete_turn(self._state, interpretation))
        return interpretation
