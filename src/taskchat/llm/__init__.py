from .base import LLMProvider
from .factory import create_llm_provider
from .models import LLMResponse
from .providers import DEFAULT_GEMINI_MODEL, GeminiProvider

__all__ = [
    "DEFAULT_GEMINI_MODEL",
    "GeminiProvider",
    "LLMProvider",
    "LLMResponse",
    "create_llm_provider",
]
