"""Fault-tolerant parsing of raw model responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from json_repair import repair_json

from schema_prompt.spec_modeling.definition_errors import SpecError

_EMPTY_STRING_LITERALS = frozenset({'""', "''"})


class UnparsableResponse(SpecError):
    """Raised when no JSON value can be recovered from a response."""

    kind = "unparsable_response"


@dataclass(frozen=True)
class ParseResult:
    """Recovered value plus the repairs applied to obtain it."""

    value: Any
    warnings: tuple[str, ...] = ()


def parse_response(text: str) -> ParseResult:
    """Parse JSON-ish text, repairing unquoted keys, trailing commas and the like.

    Raises:
      UnparsableResponse: If the text is empty or nothing JSON-like can be recovered.
    """
    if not isinstance(text, str) or not text.strip():
        raise UnparsableResponse("Response text cannot be empty.", {"text": text})
    value, repairs = repair_json(text, return_objects=True, logging=True)
    if value == "" and text.strip() not in _EMPTY_STRING_LITERALS:
        raise UnparsableResponse(
            "No JSON value could be recovered from the response.",
            {"text": text[:200]},
        )
    return ParseResult(value=value, warnings=tuple(_describe_repair(entry) for entry in repairs))


def _describe_repair(entry: Any) -> str:
    if isinstance(entry, dict):
        text = entry.get("text", "")
        context = entry.get("context")
        return f"{text} (near {context!r})" if context else str(text)
    return str(entry)
