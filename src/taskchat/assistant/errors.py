"""Exceptions raised by the assistant and conversation layers."""


class ResponseParseError(ValueError):
    """Model output could not be decoded into a TaggedResponse."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class TurnInProgressError(RuntimeError):
    """A new turn was submitted while another one is still in flight."""
