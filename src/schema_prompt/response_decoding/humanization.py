"""Post-processing of text fields marked for humanization."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from schema_prompt.path_algebra.identifier_paths import split_identifier
from schema_prompt.spec_modeling.spec_definitions import SpecDef
from schema_prompt.spec_modeling.symbols import Keyword

Humanizer = Callable[[str], str]


def apply_humanizer(data: Any, spec: SpecDef, humanizer: Humanizer) -> Any:
    """Return a copy of decoded data with humanized text in ``humanize`` fields.

    Single string values and lists of strings are passed through
    ``humanizer``. Other values, keywords included, are left as they are.
    """
    result = data
    for field in spec.fields:
        if not field.humanize:
            continue
        segments, leaf = split_identifier(field.identifier)
        result = _humanize_at(result, segments, leaf, humanizer)
    return result


def _humanize_at(node: Any, segments: Sequence[str], leaf: str, humanizer: Humanizer) -> Any:
    if isinstance(node, list):
        return [_humanize_at(item, segments, leaf, humanizer) for item in node]
    if not isinstance(node, dict):
        return node
    if segments:
        head = segments[0]
        if head not in node:
            return node
        return {**node, head: _humanize_at(node[head], segments[1:], leaf, humanizer)}
    if leaf not in node:
        return node
    return {**node, leaf: _humanize_value(node[leaf], humanizer)}


def _humanize_value(value: Any, humanizer: Humanizer) -> Any:
    if _is_text(value):
        return humanizer(value)
    if isinstance(value, list):
        return [humanizer(item) if _is_text(item) else item for item in value]
    return value


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and not isinstance(value, Keyword)
