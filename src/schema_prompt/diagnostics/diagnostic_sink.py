"""Injectable diagnostic sinks.

Core functions never log directly. They report non-fatal findings (parser
repairs, unused refs, auto-wrapping, validation outcomes) to a sink passed in
by the caller, defaulting to a logger-backed sink.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

_DIAGNOSTICS_LOGGER = logging.getLogger("schema_prompt.diagnostics")
_DIAGNOSTICS_LOGGER.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class Diagnostic:
    """One reported finding."""

    level: int
    message: str
    context: Mapping[str, Any] = field(default_factory=dict)


class DiagnosticSink(Protocol):
    """Receiver for leveled diagnostics."""

    def emit(self, level: int, message: str, context: Mapping[str, Any]) -> None:
        """Record one diagnostic."""


class LoggingDiagnosticSink:
    """Forward diagnostics to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _DIAGNOSTICS_LOGGER

    def emit(self, level: int, message: str, context: Mapping[str, Any]) -> None:
        if context:
            self._logger.log(level, "%s %s", message, dict(context))
        else:
            self._logger.log(level, "%s", message)


class CollectingDiagnosticSink:
    """Keep diagnostics in memory for inspection by the caller."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def emit(self, level: int, message: str, context: Mapping[str, Any]) -> None:
        self.diagnostics.append(Diagnostic(level=level, message=message, context=dict(context)))

    def messages(self, level: int | None = None) -> list[str]:
        """Return recorded messages, optionally only those at ``level``."""
        return [
            diagnostic.message
            for diagnostic in self.diagnostics
            if level is None or diagnostic.level == level
        ]


def resolve_sink(sink: DiagnosticSink | None) -> DiagnosticSink:
    return sink if sink is not None else LoggingDiagnosticSink()
