"""Conversation state and its transitions.

ConversationState is immutable. Every transition takes a state and returns a
new one; messages and tasks are only ever appended.

Turn lifecycle: IDLE -> SENDING -> IDLE. begin_turn enters SENDING,
complete_turn and abort_turn return to IDLE.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..assistant.errors import TurnInProgressError
from ..assistant.interpreter import Interpretation
from ..models import Message, Task


class TurnStatus(str, Enum):
    """Whether a turn is currently outstanding."""

    IDLE = "idle"
    SENDING = "sending"


class ConversationState(BaseModel):
    """Transcript and extracted tasks for one session."""

    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...] = Field(default_factory=tuple)
    tasks: tuple[Task, ...] = Field(default_factory=tuple)
    status: TurnStatus = TurnStatus.IDLE

    @property
    def is_sending(self) -> bool:
        return self.status is TurnStatus.SENDING


def append_user_message(state: ConversationState, text: str) -> ConversationState:
    return state.model_copy(update={"messages": state.messages + (Message(text=text, is_user=True),)})


def append_assistant_message(state: ConversationState, text: str) -> ConversationState:
    return state.model_copy(update={"messages": state.messages + (Message(text=text, is_user=False),)})


def append_task(state: ConversationState, task: Task) -> ConversationState:
    return state.model_copy(update={"tasks": state.tasks + (task,)})


def begin_turn(state: ConversationState, text: str) -> ConversationState:
    """Record the user's message and enter SENDING.

    Raises:
        TurnInProgressError: If a turn is already outstanding
    """
    if state.is_sending:
        raise TurnInProgressError("A message is already being processed")
    state = append_user_message(state, text)
    return state.model_copy(update={"status": TurnStatus.SENDING})


def complete_turn(state: ConversationState, interpretation: Interpretation) -> ConversationState:
    """Record the assistant reply, and the task if one was extracted, then go IDLE."""
    state = append_assistant_message(state, interpretation.reply)
    if interpretation.task is not None:
        state = append_task(state, interpretation.task)
    return state.model_copy(update={"status": TurnStatus.IDLE})


def abort_turn(state: ConversationState) -> ConversationState:
    """Return to IDLE without recording a reply."""
    return state.model_copy(update={"status": TurnStatus.IDLE})
