"""Terminal UI module for taskchat.

Provides a Textual-based TUI for chatting with the task assistant.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (transcript, task list, input bar, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- config.py: UI constants and log levels
- app.py: Application orchestration (user interaction flow)
"""

from .app import TaskChatApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, TaskListPanel

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "TaskChatApp",
    "TaskListPanel",
    "run_textual_tui",
]
