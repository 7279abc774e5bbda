"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.

Layout: transcript on the left, task list (and the optional log panel) on
the right, input bar across the bottom.
"""

APP_CSS = """
Screen {
    layout: grid;
    grid-size: 2 2;
    grid-columns: 3fr 2fr;
    grid-rows: 1fr auto;
    background: $background;
}

/* Transcript */
#chat-history {
    height: 100%;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

.chat-message {
    height: auto;
    max-width: 75%;
    margin: 0 0 1 0;
    padding: 0 1;
}

.user-message {
    background: $user-bubble;
    align-horizontal: right;
    margin-left: 25%;
}

.assistant-message {
    background: $assistant-bubble;
    border-left: tall $primary 40%;
}

.message-header {
    color: $text-muted;
    text-style: italic;
}

.message-content {
    height: auto;
}

/* Right column */
#right-panel {
    height: 100%;
}

#task-list {
    height: 1fr;
    background: $panel;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

.task-item {
    height: auto;
    background: $surface;
    border: round $border;
    padding: 0 1;
    margin: 0 0 1 0;
}

.task-name {
    text-style: bold;
}

.task-detail {
    color: $text-muted;
}

.tasks-empty {
    color: $text-muted;
    text-style: italic;
}

#debug-panel {
    display: none;
    height: 1fr;
    background: $panel;
    border: round $accent 60%;
    border-title-color: $accent;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

/* Input bar */
#chat-input-bar {
    column-span: 2;
    height: auto;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
    margin-right: 1;
}

#send-btn {
    min-width: 12;
}
"""
