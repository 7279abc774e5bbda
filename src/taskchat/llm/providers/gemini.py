"""Google Gemini provider implementation.

Uses the official Google GenAI SDK for async text generation.
Reference: https://github.com/googleapis/python-genai

One request per call: no retries, no streaming, no safety or tool
configuration. Failures propagate to the caller.
"""

from typing import Any

from google import genai

from ..base import LLMProvider
from ..models import LLMResponse

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


class GeminiProvider(LLMProvider):
    """Google Gemini provider.

    Hidden design decisions:
    - Google GenAI client initialization
    - Text extraction from candidates
    - Token usage mapping
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model name
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _extract_content(self, response) -> str:
        """Extract text content from a Gemini response.

        Args:
            response: Gemini GenerateContentResponse

        Returns:
            Text content

        Raises:
            ValueError: If the response carries no text (blocked or empty)
        """
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        try:
            text = response.text
        except (ValueError, AttributeError):
            text = None
        if not text:
            raise ValueError("Gemini returned no text")
        return text

    async def generate(self, prompt: str, model: str | None = None, **kwargs: Any) -> LLMResponse:
        """Generate text for a prompt using Google Gemini.

        Args:
            prompt: Complete prompt text
            model: Model to use (overrides default)
            **kwargs: Additional generate_content parameters

        Returns:
            LLMResponse with generated content

        Raises:
            ValueError: If Gemini returned no text
        """
        model_to_use = model or self._model

        response = await self._client.aio.models.generate_content(
            model=model_to_use,
            contents=prompt,
            **kwargs
        )

        usage = None
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                "total_tokens": response.usage_metadata.total_token_count or 0
            }

        return LLMResponse(
            content=self._extract_content(response),
            model=model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
