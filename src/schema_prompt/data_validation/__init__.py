"""Data validation exports."""

from .spec_validator import validate
from .validation_outcomes import ValidationErrorKind, ValidationIssue, ValidationReport

__all__ = [
    "ValidationErrorKind",
    "ValidationIssue",
    "ValidationReport",
    "validate",
]
