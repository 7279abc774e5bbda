"""Conversation module: in-memory transcript, task list and turn handling."""

from .session import ChatSession
from .state import (
    ConversationState,
    TurnStatus,
    abort_turn,
    append_assistant_message,
    append_task,
    append_user_message,
    begin_turn,
    complete_turn,
)

__all__ = [
    "ChatSession",
    "ConversationState",
    "TurnStatus",
    "abort_turn",
    "append_assistant_message",
    "append_task",
    "append_user_message",
    "begin_turn",
    "complete_turn",
]
