from .gemini import DEFAULT_GEMINI_MODEL, GeminiProvider

__all__ = ["DEFAULT_GEMINI_MODEL", "GeminiProvider"]
