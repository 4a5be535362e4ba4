"""Diagnostics exports."""

from .diagnostic_sink import (
    CollectingDiagnosticSink,
    Diagnostic,
    DiagnosticSink,
    LoggingDiagnosticSink,
    resolve_sink,
)

__all__ = [
    "CollectingDiagnosticSink",
    "Diagnostic",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "resolve_sink",
]
