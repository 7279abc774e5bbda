"""Command-line interface for taskchat."""

from .app import main

__all__ = ["main"]
