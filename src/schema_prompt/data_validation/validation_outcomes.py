"""Validation outcome entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValidationErrorKind(str, Enum):
    """Kinds of validation issues."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_ENUM_VALUE = "invalid_enum_value"


@dataclass(frozen=True)
class ValidationIssue:
    """One field that does not conform to the spec."""

    kind: ValidationErrorKind
    identifier: str
    path: str
    context: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidationReport:
    """Every issue found while validating data against a spec."""

    errors: tuple[ValidationIssue, ...] = ()

    @property
    def valid(self) -> bool:
        """Return True when no issues were found."""
        return not self.errors

    def of_kind(self, kind: ValidationErrorKind) -> tuple[ValidationIssue, ...]:
        return tuple(issue for issue in self.errors if issue.kind is kind)
