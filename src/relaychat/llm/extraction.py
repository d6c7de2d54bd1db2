"""Reply text extraction from raw provider responses.

Works on SDK objects and on plain mappings alike. Accessors are tried in
a fixed order; the first one yielding non-empty text decides the variant.
An accessor that yields a value of the wrong type raises
ProviderFormatError rather than falling through.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from ..errors import ProviderFormatError
from .models import CandidatePart, EmptyReply, NestedText, ProviderReply, TopLevelText

_MISSING = object()
_RAW_DUMP_LIMIT = 4000


def _field(obj: Any, name: str) -> Any:
    """Read an attribute or mapping key, returning _MISSING if absent."""
    if obj is None or obj is _MISSING:
        return _MISSING
    if isinstance(obj, Mapping):
        return obj.get(name, _MISSING)
    try:
        return getattr(obj, name, _MISSING)
    except (ValueError, AttributeError):
        # Some SDK properties raise when the response was blocked
        return _MISSING


def _first(obj: Any) -> Any:
    if obj is _MISSING or obj is None:
        return _MISSING
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
        return obj[0] if obj else _MISSING
    raise ProviderFormatError(f"Expected a list, got {type(obj).__name__}")


def _as_text(value: Any, where: str) -> str | None:
    """Normalize an accessor result to text.

    Returns None for a missing or empty value. Calls the value if it is a
    callable accessor.
    """
    if value is _MISSING or value is None:
        return None
    if callable(value):
        try:
            value = value()
        except (ValueError, AttributeError):
            return None
        if value is None:
            return None
    if not isinstance(value, str):
        raise ProviderFormatError(f"{where} is {type(value).__name__}, expected str")
    return value or None


def _top_level(response: Any) -> str | None:
    return _as_text(_field(response, "text"), "response.text")


def _nested(response: Any) -> str | None:
    return _as_text(_field(_field(response, "response"), "text"), "response.response.text")


def _candidate_part(response: Any) -> str | None:
    candidate = _first(_field(response, "candidates"))
    part = _first(_field(_field(candidate, "content"), "parts"))
    return _as_text(_field(part, "text"), "candidates[0].content.parts[0].text")


_ACCESSORS: list[tuple[Callable[[Any], str | None], type]] = [
    (_top_level, TopLevelText),
    (_nested, NestedText),
    (_candidate_part, CandidatePart),
]


def classify_response(response: Any) -> ProviderReply:
    """Match a raw provider response against the known shapes, in order.

    Raises:
        ProviderFormatError: If an accessor yields a non-string value
    """
    for accessor, variant in _ACCESSORS:
        text = accessor(response)
        if text:
            return variant(text=text)
    return EmptyReply(raw=dump_response(response))


def dump_response(response: Any) -> str:
    """Printable form of a raw response for the server log."""
    dump = getattr(response, "model_dump_json", None)
    if callable(dump):
        try:
            text = dump(indent=2, exclude_none=True)
        except (TypeError, ValueError):
            text = repr(response)
    else:
        text = repr(response)
    if len(text) > _RAW_DUMP_LIMIT:
        text = text[:_RAW_DUMP_LIMIT] + "\n... (truncated)"
    return text
