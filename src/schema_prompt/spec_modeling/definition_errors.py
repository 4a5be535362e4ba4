"""Structured errors raised while building or decoding specs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class SpecError(Exception):
    """Base error carrying a kind tag and a context mapping."""

    kind = "spec_error"

    def __init__(self, message: str, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context: Mapping[str, Any] = dict(context or {})


class InvalidField(SpecError):
    """Raised when a field definition is rejected."""

    kind = "invalid_field"


class InvalidSpec(SpecError):
    """Raised when a spec definition is rejected."""

    kind = "invalid_spec"


class DuplicateSpecName(SpecError):
    """Raised when two referenced specs share a name."""

    kind = "duplicate_spec_name"
