"""Spec-aware decoding of model responses."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from typing import Any

from schema_prompt.diagnostics.diagnostic_sink import DiagnosticSink, resolve_sink
from schema_prompt.path_algebra.identifier_mapping import build_identifier_mapping
from schema_prompt.path_algebra.identifier_paths import split_identifier, wire_name
from schema_prompt.reference_graph.reference_registry import build_reference_registry
from schema_prompt.spec_modeling.field_definitions import FieldType
from schema_prompt.spec_modeling.spec_definitions import SpecDef
from schema_prompt.spec_modeling.symbols import Keyword

from .response_parser import parse_response

TYPE_DISCRIMINATOR = "type"


def parse_only(text: str, *, diagnostics: DiagnosticSink | None = None) -> Any:
    """Parse a response without any spec-aware processing.

    Raises:
      UnparsableResponse: If nothing JSON-like can be recovered.
    """
    sink = resolve_sink(diagnostics)
    started = time.perf_counter()
    result = parse_response(text)
    if result.warnings:
        sink.emit(logging.WARNING, "JSON parsing warnings", {"warnings": list(result.warnings)})
    sink.emit(
        logging.DEBUG,
        "Parsed JSON response",
        {
            "duration_ms": (time.perf_counter() - started) * 1000,
            "warnings_count": len(result.warnings),
        },
    )
    return result.value


def decode(text: str, spec: SpecDef, *, diagnostics: DiagnosticSink | None = None) -> Any:
    """Parse a response and reshape it to match the spec that prompted it.

    1. A bare list answering a spec with a single many-valued field is wrapped
       under that field.
    2. Keys that lost ``?!*+`` on the wire get their original leaf back.
    3. Values of keyword fields become ``Keyword`` tokens.
    4. ``key_namespace`` settings prefix keys as ``<namespace>/<key>``.

    Raises:
      UnparsableResponse: If nothing JSON-like can be recovered.
      DuplicateSpecName: If two referenced specs share a name.
    """
    sink = resolve_sink(diagnostics)
    value = parse_only(text, diagnostics=sink)
    started = time.perf_counter()
    referenced = tuple(build_reference_registry(spec).values())

    value = wrap_bare_sequence(value, spec, diagnostics=sink)
    mapping = build_identifier_mapping(spec, referenced)
    if mapping:
        value = restore_identifiers(value, mapping)
    keyword_leaves = collect_keyword_leaves(spec, referenced)
    if keyword_leaves:
        value = retype_keywords(value, keyword_leaves)
    namespaces = collect_key_namespaces(spec, referenced)
    if namespaces:
        value = apply_key_namespaces(value, namespaces)

    sink.emit(
        logging.DEBUG,
        "Decoded response with spec-aware processing",
        {
            "duration_ms": (time.perf_counter() - started) * 1000,
            "key_remaps": len(mapping),
            "keyword_fields": len(keyword_leaves),
            "key_namespaces": sorted(str(name) for name in namespaces),
        },
    )
    return value


def wrap_bare_sequence(
    value: Any, spec: SpecDef, *, diagnostics: DiagnosticSink | None = None
) -> Any:
    """Wrap a bare list when the spec's only field is many-valued."""
    if not isinstance(value, list) or len(spec.fields) != 1 or not spec.fields[0].is_many:
        return value
    field = spec.fields[0]
    segments, leaf = split_identifier(field.identifier)
    resolve_sink(diagnostics).emit(
        logging.DEBUG, "Auto-wrapping bare array in spec field", {"field": field.identifier}
    )
    wrapped: Any = {wire_name(leaf): value}
    for segment in reversed(segments):
        wrapped = {segment: wrapped}
    return wrapped


def restore_identifiers(value: Any, mapping: Mapping[str, str]) -> Any:
    """Rename wire keys to their original leaves at every depth."""
    if isinstance(value, dict):
        return {
            mapping.get(key, key) if isinstance(key, str) else key: restore_identifiers(
                item, mapping
            )
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [restore_identifiers(item, mapping) for item in value]
    return value


def collect_keyword_leaves(spec: SpecDef, referenced: Iterable[SpecDef] = ()) -> frozenset[str]:
    """Return leaves of keyword-typed fields in the spec and referenced specs."""
    return frozenset(
        entry.leaf
        for source in (spec, *referenced)
        for entry in source.fields
        if entry.field_type is FieldType.KEYWORD
    )


def retype_keywords(value: Any, keyword_leaves: frozenset[str]) -> Any:
    """Convert string values under keyword-field keys into ``Keyword`` tokens."""
    if isinstance(value, dict):
        return {key: _retype_entry(key, item, keyword_leaves) for key, item in value.items()}
    if isinstance(value, list):
        return [retype_keywords(item, keyword_leaves) for item in value]
    return value


def _retype_entry(key: Any, item: Any, keyword_leaves: frozenset[str]) -> Any:
    if isinstance(key, str) and _leaf(key) in keyword_leaves:
        if isinstance(item, str):
            return Keyword(item)
        if isinstance(item, list):
            return [Keyword(element) if isinstance(element, str) else element for element in item]
    return retype_keywords(item, keyword_leaves)


def collect_key_namespaces(
    spec: SpecDef, referenced: Iterable[SpecDef] = ()
) -> dict[str | None, str]:
    """Map spec names to their key namespace, with ``None`` for the main spec."""
    namespaces: dict[str | None, str] = {
        ref.name: ref.key_namespace for ref in referenced if ref.key_namespace
    }
    if spec.key_namespace:
        namespaces[None] = spec.key_namespace
    return namespaces


def apply_key_namespaces(value: Any, namespaces: Mapping[str | None, str]) -> Any:
    """Prefix keys with the namespace selected by the ``type`` discriminator.

    A mapping whose ``type`` value names a referenced spec uses that spec's
    namespace; otherwise the main spec's namespace applies, if any.
    """
    if isinstance(value, dict):
        discriminator = value.get(TYPE_DISCRIMINATOR)
        namespace = None
        if isinstance(discriminator, str):
            namespace = namespaces.get(discriminator)
        if namespace is None:
            namespace = namespaces.get(None)
        return {
            _namespaced(key, namespace): apply_key_namespaces(item, namespaces)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [apply_key_namespaces(item, namespaces) for item in value]
    return value


def _namespaced(key: Any, namespace: str | None) -> Any:
    if namespace is None or not isinstance(key, str):
        return key
    return f"{namespace}/{_leaf(key)}"


def _leaf(key: str) -> str:
    return key.rpartition("/")[2]
