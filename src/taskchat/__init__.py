"""
Taskchat: a chat assistant that turns messages into structured tasks.

Each module hides a specific design decision: which text-generation service
is called (llm), how its output is decoded (assistant), how the session is
held (conversation), and how it is presented (ui, cli).
"""

__version__ = "0.1.0"

from .assistant import AssistantGateway, Interpretation, interpret_response
from .conversation import ChatSession, ConversationState
from .models import Intent, Message, Priority, TaggedResponse, Task, TaskCategory

__all__ = [
    "AssistantGateway",
    "ChatSession",
    "ConversationState",
    "Intent",
    "Interpretation",
    "Message",
    "Priority",
    "TaggedResponse",
    "Task",
    "TaskCategory",
    "interpret_response",
]
