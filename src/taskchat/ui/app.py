"""Main Textual TUI application.

Orchestrates the UI components and runs chat turns through a ChatSession.
"""

import asyncio
import contextlib

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..assistant import TurnInProgressError
from ..conversation import ChatSession, ConversationState
from .config import LogLevel
from .styles import APP_CSS
from .themes import BUBBLE_VARIABLES, TASKCHAT_PAPER
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, TaskListPanel


class TaskChatApp(App):
    """Textual TUI for chatting with the task assistant."""

    CSS = APP_CSS
    TITLE = "Taskchat"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+l", "toggle_debug", "Log"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
    ]

    def __init__(self, session: ChatSession, log_level: str | None = None) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level

    @property
    def session(self) -> ChatSession:
        return self._session

    def get_theme_variable_defaults(self) -> dict[str, str]:
        """Bubble colours used by APP_CSS, available before the theme is applied."""
        return {**super().get_theme_variable_defaults(), **BUBBLE_VARIABLES}

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        with Vertical(id="right-panel"):
            yield TaskListPanel(id="task-list")
            yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(TASKCHAT_PAPER)
        self.theme = TASKCHAT_PAPER.name

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.log_entry(LogLevel.INFO, "TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._session.set_debug_callback(self._on_debug)
        self._session.set_state_callback(self._on_state_change)

        self.sub_title = self._session.gateway.llm.model
        self._on_state_change(self._session.state)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _on_debug(self, level: str, component: str, message: str) -> None:
        """Route session diagnostics to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.log_entry(LogLevel.from_string(level), component, message)

    def _on_state_change(self, state: ConversationState) -> None:
        """Reflect the conversation state in the transcript, task list and input bar."""
        self.query_one("#chat-history", ChatHistoryWidget).sync(state.messages)
        self.query_one("#task-list", TaskListPanel).update_tasks(state.tasks)
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(state.is_sending)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._session.is_sending:
            return
        self._run_turn(event.value)

    @work(exclusive=True)
    async def _run_turn(self, text: str) -> None:
        """Run one chat turn as a background async worker."""
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        try:
            outcome = await self._session.submit(text)
        except TurnInProgressError:
            self.notify("Still waiting for the previous reply", severity="warning", timeout=2)
            return
        except Exception as e:
            self.notify(f"Error: {e}", severity="error", timeout=3)
            return
        except asyncio.CancelledError:
            input_bar.set_busy(False)
            raise

        input_bar.clear()
        input_bar.focus_input()
        if outcome is not None and outcome.task is not None:
            self.notify(f"Task added: {outcome.task.task_name}", timeout=3)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(session: ChatSession, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session driving the conversation
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = TaskChatApp(session=session, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(RuntimeError):
            await session.gateway.llm.close()
