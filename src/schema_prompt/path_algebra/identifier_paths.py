"""Identifier to wire-path conversion."""

from __future__ import annotations

import re

RESERVED_PUNCTUATION = "?!*+"

_RESERVED_PUNCTUATION_PATTERN = re.compile(r"[?!*+]")


def wire_name(leaf: str) -> str:
    """Strip punctuation that is legal in identifiers but not on the wire."""
    return _RESERVED_PUNCTUATION_PATTERN.sub("", leaf)


def split_identifier(identifier: str) -> tuple[tuple[str, ...], str]:
    """Split ``org.division/name`` into ``(("org", "division"), "name")``."""
    namespace, separator, leaf = identifier.rpartition("/")
    if not separator:
        return (), identifier
    return tuple(namespace.split(".")), leaf


def identifier_to_path(identifier: str) -> str:
    """Convert an identifier into its dotted wire path.

    ``valid?`` becomes ``valid`` and ``claims/verifiable?`` becomes
    ``claims.verifiable``. Only the leaf is stripped.
    """
    segments, leaf = split_identifier(identifier)
    return ".".join((*segments, wire_name(leaf)))


def path_segments(path: str) -> tuple[str, ...]:
    return tuple(path.split("."))


def path_prefixes(path: str) -> tuple[str, ...]:
    """Return every dotted prefix of ``path``, shortest first, including itself."""
    segments = path_segments(path)
    return tuple(".".join(segments[: index + 1]) for index in range(len(segments)))
