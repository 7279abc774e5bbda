"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat message rendering and scrolling
- Task list rendering
- Input bar busy state
- Log rendering and level filtering
"""

from collections.abc import Sequence
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, RichLog, Static

from ..models import Message, Task
from .config import (
    EMPTY_TASKS_TEXT,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LEVEL_STYLES,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    MISSING_DUE_DATE_TEXT,
    SEND_LABEL,
    SENDING_LABEL,
    LogLevel,
)


def copy_text(widget, text: str, label: str) -> None:
    """Copy text to the system clipboard, falling back to Textual's OSC 52."""
    try:
        import pyperclip
        pyperclip.copy(text)
        widget.app.notify(f"{label} copied", timeout=2)
    except Exception:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{label} copied (terminal)", timeout=2)


def describe_task(task: Task) -> list[str]:
    """Display lines for a task: name, due date, priority, category."""
    return [
        task.task_name,
        f"Due: {task.due_date or MISSING_DUE_DATE_TEXT}",
        f"Priority: {task.priority.value}",
        f"Category: {task.category}",
    ]


class ClickableMessage(Vertical):
    """A chat bubble that copies its text when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        copy_text(self, self._content, "Message")


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript, rendered from the session's messages."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[Message] = []

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def sync(self, messages: Sequence[Message]) -> None:
        """Render any messages not shown yet.

        The transcript is append-only, so only the tail beyond what is already
        rendered is mounted.
        """
        new_messages = list(messages[len(self._messages):])
        if not new_messages:
            return
        for msg in new_messages:
            self._messages.append(msg)
            self._render_message(msg)
        self.border_subtitle = f"{len(self._messages)} messages"
        self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for msg in reversed(self._messages):
            if not msg.is_user:
                return msg.text
        return None

    def _render_message(self, msg: Message) -> None:
        if msg.is_user:
            header_text = f"> You [{msg.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)}]"
            border_class = "user-message"
        else:
            header_text = f"< Assistant [{msg.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)}]"
            border_class = "assistant-message"

        container = ClickableMessage(content=msg.text, classes=f"chat-message {border_class}")
        container.compose_add_child(Static(Text(header_text), classes="message-header"))
        container.compose_add_child(Static(Text(msg.text), classes="message-content"))
        self.mount(container)


class TaskListPanel(VerticalScroll):
    """Flat list of the tasks extracted so far."""

    BORDER_TITLE = "Tasks"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._task_count = -1
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        """Plain text of everything currently shown in the list."""
        return list(self._lines)

    def on_mount(self) -> None:
        self.update_tasks(())

    def update_tasks(self, tasks: Sequence[Task]) -> None:
        """Re-render the list if the number of tasks changed."""
        if len(tasks) == self._task_count:
            return
        self._task_count = len(tasks)
        self.remove_children()
        self._lines = []
        self.border_subtitle = f"{len(tasks)} tasks"

        if not tasks:
            self._lines.append(EMPTY_TASKS_TEXT)
            self.mount(Static(EMPTY_TASKS_TEXT, classes="tasks-empty"))
            return

        for task in tasks:
            self.mount(self._render_task(task))
        self.scroll_end(animate=False)

    def _render_task(self, task: Task) -> Vertical:
        name, *details = describe_task(task)
        self._lines.extend([name, *details])
        item = Vertical(classes="task-item")
        item.compose_add_child(Static(Text(name), classes="task-name"))
        for detail in details:
            item.compose_add_child(Static(Text(detail), classes="task-detail"))
        return item


class ChatInputBar(Horizontal):
    """Single-line input with a Send button; disabled while a turn is outstanding."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield Input(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button(SEND_LABEL, id="send-btn", variant="success")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def _submit(self) -> None:
        value = self.query_one("#chat-input", Input).value
        if value.strip():
            self.post_message(self.Submitted(value))

    def set_busy(self, busy: bool) -> None:
        """Disable input while sending; button label reflects the state."""
        text_input = self.query_one("#chat-input", Input)
        button = self.query_one("#send-btn", Button)
        text_input.disabled = busy
        button.disabled = busy
        button.label = SENDING_LABEL if busy else SEND_LABEL

    def clear(self) -> None:
        self.query_one("#chat-input", Input).value = ""

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", Input).focus()


class DebugPanel(RichLog):
    """Log panel for session diagnostics with level filtering.

    Hidden by default, shown with --log-level or toggled with Ctrl+L.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "LLM": "magenta",
        "Session": "green",
        "Parser": "yellow",
        "Tasks": "blue",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def log_entry(self, level: int, component: str, message: str) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text()
        line.append(datetime.now().strftime(LOG_TIMESTAMP_FORMAT) + " ", style="dim")
        level_name = LogLevel.name(level)
        line.append(f"{level_name:<7} ", style=LEVEL_STYLES.get(level_name.lower(), ""))
        line.append(f"[{component}] ", style=self.COMPONENT_COLORS.get(component, ""))
        line.append(message)
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
        else:
            self.show()
        return bool(self.display)
