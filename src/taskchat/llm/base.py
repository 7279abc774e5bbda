from abc import ABC, abstractmethod
from typing import Any

from .models import LLMResponse


class LLMProvider(ABC):
    """Abstract base class for generative-text providers.

    This module hides the design decision of which text-generation service is
    called. Implementations handle client setup, authentication and response
    extraction. They make exactly one request per call and let errors
    propagate; recovery is the caller's decision.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.generate(prompt)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Name of the default model."""

    @abstractmethod
    async def generate(self, prompt: str, model: str | None = None, **kwargs: Any) -> LLMResponse:
        """Generate text for a single prompt.

        Args:
            prompt: Complete prompt text
            model: Model to use (None uses provider's default)
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse containing generated content and metadata

        Raises:
            Exception: Provider-specific errors during generation
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
