"""Response interpreter.

Turns the raw text returned by the model into a TaggedResponse. Decoding is
an explicit fallible step: parse_tagged_response raises, interpret_response
maps the failure to the fixed recovery reply.
"""

from pydantic import BaseModel, ConfigDict, ValidationError

from ..models import TaggedResponse, Task
from .errors import ResponseParseError

PARSE_FAILURE_REPLY = "Sorry, I couldn't process that."

_FENCE_MARKERS = ("```json", "```")


class Interpretation(BaseModel):
    """Outcome of interpreting one model reply."""

    model_config = ConfigDict(frozen=True)

    reply: str
    task: Task | None = None
    parsed: bool = True


def strip_code_fences(text: str) -> str:
    """Remove every ```json and ``` marker from text.

    Repeats until nothing changes, so the result never contains a marker and
    stripping twice equals stripping once.
    """
    while True:
        cleaned = text
        for marker in _FENCE_MARKERS:
            cleaned = cleaned.replace(marker, "")
        if cleaned == text:
            return cleaned
        text = cleaned


def parse_tagged_response(raw: str) -> TaggedResponse:
    """Decode raw model output.

    Raises:
        ResponseParseError: On malformed JSON or a schema mismatch
    """
    cleaned = strip_code_fences(raw)
    try:
        return TaggedResponse.model_validate_json(cleaned)
    except ValidationError as e:
        raise ResponseParseError(f"Invalid assistant response: {e.error_count()} error(s)", raw) from e


def interpret_response(raw: str) -> Interpretation:
    """Decode raw model output, falling back to a fixed apology on failure."""
    try:
        tagged = parse_tagged_response(raw)
    except ResponseParseError:
        return Interpretation(reply=PARSE_FAILURE_REPLY, parsed=False)

    return Interpretation(
        reply=tagged.response,
        task=tagged.task if tagged.has_task else None,
    )
