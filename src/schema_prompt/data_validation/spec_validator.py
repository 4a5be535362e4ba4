"""Validation of decoded data against a spec."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from schema_prompt.diagnostics.diagnostic_sink import DiagnosticSink, resolve_sink
from schema_prompt.path_algebra.identifier_paths import (
    identifier_to_path,
    path_prefixes,
    path_segments,
)
from schema_prompt.spec_modeling.field_definitions import (
    FieldDef,
    FieldType,
    VectorBase,
    VectorType,
    type_name,
)
from schema_prompt.spec_modeling.spec_definitions import SpecDef
from schema_prompt.spec_modeling.symbols import Keyword

from .validation_outcomes import ValidationErrorKind, ValidationIssue, ValidationReport


_ElementValue = tuple[tuple[int, ...], Any]


@dataclass(frozen=True)
class _FieldLayout:
    """Where a field lives in decoded data."""

    field: FieldDef
    path: str
    array_paths: tuple[str, ...]
    has_children: bool


def validate(
    spec: SpecDef, data: Any, *, diagnostics: DiagnosticSink | None = None
) -> ValidationReport:
    """Check presence, type and enum constraints of every field.

    Fields nested under many-valued fields are checked in every element of
    those arrays, at any depth. All issues are collected; none stops the others.
    """
    started = time.perf_counter()
    issues: list[ValidationIssue] = []
    for layout in _layouts(spec.fields):
        if layout.array_paths:
            extracted = _extract_from_arrays(data, layout)
            issues.extend(_check_array_values(layout, extracted))
        else:
            value = _extract_direct(data, layout)
            issues.extend(_check_value(layout, value))

    report = ValidationReport(errors=tuple(issues))
    context = {
        "fields_count": len(spec.fields),
        "duration_ms": (time.perf_counter() - started) * 1000,
    }
    sink = resolve_sink(diagnostics)
    if report.valid:
        sink.emit(logging.DEBUG, "Spec validation passed", context)
    else:
        sink.emit(
            logging.WARNING, "Spec validation failed", {**context, "error_count": len(issues)}
        )
    return report


def _layouts(fields: Sequence[FieldDef]) -> list[_FieldLayout]:
    paths = [identifier_to_path(entry.identifier) for entry in fields]
    array_paths = {path for entry, path in zip(fields, paths) if entry.is_many}
    layouts = []
    for entry, path in zip(fields, paths):
        enclosing = tuple(
            prefix for prefix in path_prefixes(path)[:-1] if prefix in array_paths
        )
        layouts.append(
            _FieldLayout(
                field=entry,
                path=path,
                array_paths=enclosing,
                has_children=entry.is_many
                and any(other.startswith(f"{path}.") for other in paths),
            )
        )
    return layouts


def _extract_direct(data: Any, layout: _FieldLayout) -> Any:
    segments = path_segments(layout.path)
    return _lookup(_walk(data, segments[:-1]), layout.field.leaf)


def _extract_from_arrays(data: Any, layout: _FieldLayout) -> list[_ElementValue] | None:
    """Return one value per innermost element, or None if the outer array is absent.

    Each value is paired with its index path through the enclosing arrays; an
    absent inner array contributes a single ``None`` for its parent element.
    """
    segments = path_segments(layout.path)
    bounds = tuple(len(path_segments(array_path)) for array_path in layout.array_paths)
    elements = _walk(data, segments[: bounds[0]])
    if not _is_sequence(elements):
        return None
    return _collect_elements(elements, segments, bounds, layout.field.leaf, ())


def _collect_elements(
    elements: Sequence[Any],
    segments: Sequence[str],
    bounds: Sequence[int],
    leaf: str,
    indices: tuple[int, ...],
) -> list[_ElementValue]:
    start, inner_bounds = bounds[0], bounds[1:]
    found: list[_ElementValue] = []
    for index, element in enumerate(elements):
        position = (*indices, index)
        if not inner_bounds:
            found.append((position, _lookup(_walk(element, segments[start:-1]), leaf)))
            continue
        nested = _walk(element, segments[start : inner_bounds[0]])
        if _is_sequence(nested):
            found.extend(_collect_elements(nested, segments, inner_bounds, leaf, position))
        else:
            found.append((position, None))
    return found


def _walk(node: Any, segments: Sequence[str]) -> Any:
    for segment in segments:
        node = _lookup(node, segment)
        if node is None:
            return None
    return node


def _lookup(node: Any, key: str) -> Any:
    return node.get(key) if isinstance(node, Mapping) else None


def _check_value(layout: _FieldLayout, value: Any) -> list[ValidationIssue]:
    field = layout.field
    if value is None:
        if field.optional:
            return []
        return [_issue(ValidationErrorKind.MISSING_REQUIRED_FIELD, layout)]

    issues = []
    if not _matches_shape(value, field, layout.has_children):
        issues.append(_type_mismatch(layout, value))
    if field.enum and not _enum_allowed(value, field):
        issues.append(_invalid_enum(layout, value))
    return issues


def _check_array_values(
    layout: _FieldLayout, extracted: list[_ElementValue] | None
) -> list[ValidationIssue]:
    field = layout.field
    values = [value for _, value in extracted] if extracted is not None else None
    present = [value for value in values or () if value is not None]
    # plain indices under one array, index paths under nested arrays
    nested = len(layout.array_paths) > 1
    missing_indices = tuple(
        position if nested else position[0]
        for position, value in extracted or ()
        if value is None
    )

    issues = []
    if not field.optional and (not present or missing_indices):
        context = {"element_indices": missing_indices} if extracted is not None else {}
        issues.append(_issue(ValidationErrorKind.MISSING_REQUIRED_FIELD, layout, context))
    if not present:
        return issues

    if not all(_matches_shape(value, field, layout.has_children) for value in present):
        issues.append(_type_mismatch(layout, values))
    if field.enum and not all(_enum_allowed(value, field) for value in present):
        issues.append(_invalid_enum(layout, values))
    return issues


def _matches_shape(value: Any, field: FieldDef, has_children: bool) -> bool:
    vector = field.vector_type
    if vector is not None:
        return _is_fixed_vector(value, vector)
    if field.is_many:
        if not _is_sequence(value):
            return False
        # children validate their own shape
        return has_children or all(_matches_scalar(item, field.field_type) for item in value)
    return _matches_scalar(value, field.field_type)


def _matches_scalar(value: Any, field_type: Any) -> bool:
    if field_type is FieldType.STRING:
        return isinstance(value, str)
    if field_type is FieldType.INT:
        return isinstance(value, int) and not isinstance(value, bool)
    if field_type is FieldType.FLOAT:
        return isinstance(value, int | float) and not isinstance(value, bool)
    if field_type is FieldType.BOOL:
        return isinstance(value, bool)
    if field_type is FieldType.KEYWORD:
        return isinstance(value, Keyword)
    if field_type is FieldType.DATE:
        return isinstance(value, date) and not isinstance(value, datetime)
    if field_type is FieldType.DATETIME:
        return isinstance(value, datetime)
    if field_type is FieldType.REF:
        return isinstance(value, Mapping)
    return False


def _is_fixed_vector(value: Any, vector: VectorType) -> bool:
    return (
        _is_sequence(value)
        and len(value) == vector.size
        and all(_matches_vector_element(item, vector.base) for item in value)
    )


def _matches_vector_element(value: Any, base: VectorBase) -> bool:
    if base is VectorBase.STRING:
        return isinstance(value, str)
    if base is VectorBase.INT:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, list | tuple)


def _enum_allowed(value: Any, field: FieldDef) -> bool:
    assert field.enum is not None
    if field.is_many:
        return _is_sequence(value) and all(_is_allowed(item, field.enum) for item in value)
    return _is_allowed(value, field.enum)


def _is_allowed(value: Any, allowed: Mapping[str, str]) -> bool:
    return isinstance(value, str) and value in allowed


def _issue(
    kind: ValidationErrorKind, layout: _FieldLayout, context: Mapping[str, Any] | None = None
) -> ValidationIssue:
    return ValidationIssue(
        kind=kind,
        identifier=layout.field.identifier,
        path=layout.path,
        context=dict(context or {}),
    )


def _type_mismatch(layout: _FieldLayout, value: Any) -> ValidationIssue:
    return _issue(
        ValidationErrorKind.TYPE_MISMATCH,
        layout,
        {
            "expected": type_name(layout.field.field_type),
            "actual_value": value,
            "actual_type": type(value).__name__,
        },
    )


def _invalid_enum(layout: _FieldLayout, value: Any) -> ValidationIssue:
    assert layout.field.enum is not None
    return _issue(
        ValidationErrorKind.INVALID_ENUM_VALUE,
        layout,
        {"value": value, "allowed_values": sorted(layout.field.enum)},
    )
