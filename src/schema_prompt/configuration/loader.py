"""Spec document loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from schema_prompt.spec_modeling.definition_errors import SpecError
from schema_prompt.spec_modeling.field_definitions import FieldDef, define_field
from schema_prompt.spec_modeling.spec_definitions import SpecDef, define_spec

from .spec_document_models import SpecDocument

_SPEC_KEYS = frozenset({"name", "key_namespace", "fields", "refs"})
_FIELD_KEYS = {
    "identifier": "identifier",
    "type": "field_type",
    "cardinality": "cardinality",
    "description": "description",
    "optional": "optional",
    "enum": "enum",
    "ref_targets": "ref_targets",
    "humanize": "humanize",
}


class ConfigurationError(Exception):
    """Raised when a spec document is invalid."""


def load_spec_document(document_path: Path | str) -> SpecDocument:
    """Load and validate a spec document."""
    path = Path(document_path)
    if not path.exists():
        raise ConfigurationError(f"Spec document not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse spec document: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Spec document root must be a mapping.")

    return SpecDocument(path=path, spec=build_spec_from_mapping(parsed.get("spec"), "spec"))


def build_spec_from_mapping(value: Any, section_name: str = "spec") -> SpecDef:
    """Build a spec, and its refs recursively, from a parsed mapping."""
    section = _require_mapping(value, section_name)
    _reject_unknown_keys(section, _SPEC_KEYS, section_name)
    fields = [
        _build_field(entry, f"{section_name}.fields[{index}]")
        for index, entry in enumerate(_require_sequence(section.get("fields"), section_name))
    ]
    refs = [
        build_spec_from_mapping(entry, f"{section_name}.refs[{index}]")
        for index, entry in enumerate(_optional_sequence(section.get("refs"), section_name))
    ]
    try:
        return define_spec(
            *fields,
            name=section.get("name"),
            refs=refs,
            key_namespace=section.get("key_namespace"),
        )
    except SpecError as exc:
        raise ConfigurationError(f"{section_name}: {exc}") from exc


def _build_field(value: Any, label: str) -> FieldDef:
    section = _require_mapping(value, label)
    _reject_unknown_keys(section, frozenset(_FIELD_KEYS), label)
    options = {_FIELD_KEYS[key]: item for key, item in section.items()}
    for flag in ("optional", "humanize"):
        options[flag] = _optional_bool(options.get(flag), f"{label}.{flag}")
    try:
        return define_field(**options)
    except SpecError as exc:
        raise ConfigurationError(f"{label}: {exc}") from exc


def _reject_unknown_keys(section: Mapping[str, Any], allowed: frozenset[str], label: str) -> None:
    unknown = sorted(str(key) for key in section if key not in allowed)
    if unknown:
        raise ConfigurationError(f"{label} has unknown keys: {', '.join(unknown)}")


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Spec document section '{section_name}' is required.")
    return value


def _require_sequence(value: Any, section_name: str) -> Sequence[Any]:
    if value is None:
        raise ConfigurationError(f"{section_name}.fields is required.")
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError(f"{section_name}.fields must be a list.")
    return value


def _optional_sequence(value: Any, section_name: str) -> Sequence[Any]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError(f"{section_name}.refs must be a list.")
    return value


def _optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value
