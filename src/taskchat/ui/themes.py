"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Chat bubble colours referenced by APP_CSS. Also served as app-level defaults
# so the stylesheet resolves under any theme.
BUBBLE_VARIABLES = {
    "user-bubble": "#dcf8c6",
    "assistant-bubble": "#ffffff",
}

# Light "paper" theme: grey canvas, green user bubbles, white assistant bubbles
TASKCHAT_PAPER = Theme(
    name="taskchat-paper",
    primary="#2e7d32",      # Green - user accent, send button
    secondary="#5c6bc0",    # Indigo - task panel
    accent="#f9a825",       # Amber - highlights
    foreground="#212121",
    background="#f0f0f0",
    success="#43a047",
    warning="#ef6c00",
    error="#c62828",
    surface="#ffffff",
    panel="#fafafa",
    dark=False,
    variables={
        **BUBBLE_VARIABLES,

        # Input styling
        "input-cursor-background": "#212121",
        "input-cursor-foreground": "#ffffff",
        "input-selection-background": "#2e7d32 25%",

        # Border colors
        "border": "#cccccc",
        "border-blurred": "#e0e0e0",

        # Scrollbar styling
        "scrollbar": "#d6d6d6",
        "scrollbar-hover": "#bdbdbd",
        "scrollbar-active": "#2e7d32",
        "scrollbar-background": "#f0f0f0",

        # Footer styling
        "footer-background": "#e0e0e0",
        "footer-key-foreground": "#2e7d32",

        # Text variants
        "text-muted": "#757575",
        "text-disabled": "#bdbdbd",
    },
)
