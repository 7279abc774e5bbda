"""Provider factory functions for CLI.

Centralizes creation of the LLM provider and chat session from environment
variables. Hides configuration details from command implementations.
"""

import os
from typing import Any

import typer
from rich.console import Console

from ..assistant import AssistantGateway
from ..conversation import ChatSession
from ..llm import DEFAULT_GEMINI_MODEL, LLMProvider, create_llm_provider

# Default console for output
_console = Console()


def get_model_name() -> str:
    """Configured Gemini model (GEMINI_MODEL, default gemini-2.5-flash)."""
    return os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)


def get_llm(console: Console | None = None) -> LLMProvider | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        GEMINI_API_KEY: Gemini API key (required)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    """
    con = console or _console
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        con.print("[yellow]Warning: GEMINI_API_KEY not set[/yellow]")
        return None
    return create_llm_provider("gemini", api_key=api_key, model=get_model_name())


def require_llm(console: Console | None = None) -> LLMProvider:
    """Get LLM provider, raising error if not configured.

    Raises:
        typer.Exit: If LLM provider is not configured
    """
    con = console or _console
    llm = get_llm(con)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm


def make_session(llm: LLMProvider, debug_callback: Any = None) -> ChatSession:
    """Create a fresh in-memory chat session bound to llm."""
    return ChatSession(AssistantGateway(llm), debug_callback=debug_callback)
