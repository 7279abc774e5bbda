"""Assistant gateway.

Builds the instruction prompt from the new message and the prior transcript,
makes one call to the text-generation provider and returns its raw text.
Remote failures are replaced by a fixed fallback reply instead of raised.
"""

import json
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

from ..llm import LLMProvider
from ..models import Intent, Message
from ..prompts import TASK_ASSISTANT_PROMPT, render_prompt

REMOTE_FAILURE_REPLY = "Sorry, I encountered an error. Please try again."

FALLBACK_RESPONSE_TEXT = json.dumps({
    "intent": Intent.CHAT.value,
    "response": REMOTE_FAILURE_REPLY,
})


def format_transcript(messages: Sequence[Message]) -> str:
    """Render messages as "User: ..." / "AI: ..." lines in order."""
    return "\n".join(
        f"{'User:' if msg.is_user else 'AI:'} {msg.text}"
        for msg in messages
    )


def utc_now_iso() -> str:
    """Current UTC instant as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AssistantGateway:
    """Stateless bridge between a conversation and the LLM provider."""

    def __init__(
        self,
        llm: LLMProvider,
        clock: Callable[[], str] | None = None,
        debug_callback: Any = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            llm: Provider used for text generation
            clock: Returns the current date-time as an ISO-8601 string
            debug_callback: Callable(level, component, message) for diagnostics
        """
        self._llm = llm
        self._clock = clock or utc_now_iso
        self._debug_callback = debug_callback

    @property
    def llm(self) -> LLMProvider:
        return self._llm

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def build_prompt(self, message: str, history: Sequence[Message]) -> str:
        """Build the full instruction prompt for one turn."""
        return render_prompt(
            TASK_ASSISTANT_PROMPT,
            history=format_transcript(history),
            message=message,
            today=self._clock(),
        )

    async def ask(self, message: str, history: Sequence[Message]) -> str:
        """Send one turn to the model and return its raw text.

        Args:
            message: The new user message
            history: Transcript before the new message, oldest first

        Returns:
            Raw model output, or FALLBACK_RESPONSE_TEXT if the call failed
        """
        try:
            prompt = self.build_prompt(message, history)
            self._debug("debug", "LLM", f"Sending prompt ({len(prompt)} chars, {len(history)} prior messages)")
            response = await self._llm.generate(prompt)
        except Exception as e:
            self._debug("error", "LLM", f"Generation failed: {e!r}")
            return FALLBACK_RESPONSE_TEXT

        if response.usage:
            self._debug("debug", "LLM", f"Token usage: {response.usage}")
        return response.content
