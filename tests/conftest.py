"""Pytest configuration and shared fixtures."""
import json
import os
from typing import Any

import pytest

from taskchat.assistant import AssistantGateway
from taskchat.conversation import ChatSession
from taskchat.llm import LLMProvider, LLMResponse

FIXED_NOW = "2026-10-18T09:30:00.000Z"


class FakeLLMProvider(LLMProvider):
    """In-process provider that replays canned replies and records prompts."""

    def __init__(
        self,
        responses: list[str] | None = None,
        error: Exception | None = None,
        model: str = "fake-model",
    ) -> None:
        self._responses = list(responses or [])
        self._error = error
        self._model = model
        self.prompts: list[str] = []
        self.closed = False

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, prompt: str, model: str | None = None, **kwargs: Any) -> LLMResponse:
        self.prompts.append(prompt)
        if self._error is not None:
            raise self._error
        if self._responses:
            content = self._responses.pop(0)
        else:
            content = json.dumps({"intent": "chat", "response": "ok"})
        return LLMResponse(content=content, model=model or self._model)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture(scope="session")
def fake_llm_class():
    """Return the fake provider class so tests can build their own instances."""
    return FakeLLMProvider


@pytest.fixture(scope="session")
def fixed_clock():
    """Clock returning a constant ISO-8601 instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def make_session(fixed_clock):
    """Build a ChatSession over a FakeLLMProvider."""
    def _make(responses: list[str] | None = None, error: Exception | None = None) -> ChatSession:
        llm = FakeLLMProvider(responses=responses, error=error)
        return ChatSession(AssistantGateway(llm, clock=fixed_clock))
    return _make


@pytest.fixture
def call_mom_reply():
    """Model reply for "remind me to call mom tomorrow at 5pm"."""
    return json.dumps({
        "intent": "task",
        "response": "Got it, I'll remind you.",
        "task": {
            "taskName": "Call mom",
            "dueDate": "2026-10-19T17:00:00Z",
            "priority": "normal",
            "category": "personal",
        },
    })


@pytest.fixture
def small_talk_reply():
    """Model reply for "hey, how's it going"."""
    return json.dumps({"intent": "chat", "response": "Doing well, thanks! How can I help?"})
