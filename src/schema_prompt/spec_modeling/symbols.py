"""Symbolic token type for keyword-typed values."""

from __future__ import annotations


class Keyword(str):
    """A decoded keyword value.

    Behaves like the plain string it wraps, so it serializes unchanged, but can
    be told apart from ordinary strings during validation.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Keyword({str.__repr__(self)})"
