"""Assistant module: prompt construction, model call and reply decoding."""

from .errors import ResponseParseError, TurnInProgressError
from .gateway import (
    FALLBACK_RESPONSE_TEXT,
    REMOTE_FAILURE_REPLY,
    AssistantGateway,
    format_transcript,
    utc_now_iso,
)
from .interpreter import (
    PARSE_FAILURE_REPLY,
    Interpretation,
    interpret_response,
    parse_tagged_response,
    strip_code_fences,
)

__all__ = [
    "FALLBACK_RESPONSE_TEXT",
    "PARSE_FAILURE_REPLY",
    "REMOTE_FAILURE_REPLY",
    "AssistantGateway",
    "Interpretation",
    "ResponseParseError",
    "TurnInProgressError",
    "format_transcript",
    "interpret_response",
    "parse_tagged_response",
    "strip_code_fences",
    "utc_now_iso",
]
