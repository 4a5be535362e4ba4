"""Spec definition entities and the eager spec constructor."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .definition_errors import InvalidSpec
from .field_definitions import FieldDef, FieldType


@dataclass(frozen=True)
class SpecDef:
    """Validated spec definition."""

    name: str | None = None
    fields: tuple[FieldDef, ...] = ()
    refs: tuple[SpecDef, ...] = ()
    key_namespace: str | None = None

    @property
    def ref_fields(self) -> tuple[FieldDef, ...]:
        return tuple(field for field in self.fields if field.field_type is FieldType.REF)


def define_spec(
    *fields: FieldDef,
    name: str | None = None,
    refs: Sequence[SpecDef] | None = None,
    key_namespace: str | None = None,
) -> SpecDef:
    """Build a spec from field definitions.

    Referenced specs are kept as-is; their fields are not merged into this
    level. Every ref field must target a spec named in ``refs``.

    Raises:
      InvalidSpec: If an option or field is malformed or a ref target is unknown.
    """
    if name is not None and not isinstance(name, str):
        raise InvalidSpec("Spec name must be a string.", {"name": name})
    if key_namespace is not None and not isinstance(key_namespace, str):
        raise InvalidSpec(
            "key_namespace must be a string (e.g. 'page.node').",
            {"key_namespace": key_namespace, "type": type(key_namespace).__name__},
        )
    for field in fields:
        if not isinstance(field, FieldDef):
            raise InvalidSpec(
                "Spec fields must be built with define_field.",
                {"field": field},
            )
    ref_specs = _normalize_refs(refs)
    _validate_ref_targets(fields, ref_specs)
    return SpecDef(
        name=name,
        fields=tuple(fields),
        refs=ref_specs,
        key_namespace=key_namespace,
    )


def _normalize_refs(refs: Any) -> tuple[SpecDef, ...]:
    if refs is None:
        return ()
    if isinstance(refs, str) or not isinstance(refs, Sequence):
        raise InvalidSpec("Refs must be a sequence of specs.", {"refs": refs})
    for ref in refs:
        if not isinstance(ref, SpecDef):
            raise InvalidSpec("Each ref must be a spec built with define_spec.", {"ref": ref})
        if not ref.name:
            raise InvalidSpec(
                "Each ref must carry a name.",
                {"ref": ref, "hint": "Pass name='Address' to define_spec for referenced specs."},
            )
    return tuple(refs)


def _validate_ref_targets(fields: Sequence[FieldDef], refs: tuple[SpecDef, ...]) -> None:
    available = {ref.name for ref in refs}
    for field in fields:
        if field.ref_targets is None:
            continue
        targets = field.ref_targets.names
        for target in targets:
            if target not in available:
                raise InvalidSpec(
                    f"Field '{field.identifier}' references target '{target}' "
                    "but no ref with that name exists.",
                    {
                        "field": field.identifier,
                        "target": target,
                        "all_targets": list(targets),
                        "available_refs": sorted(name for name in available if name),
                        "hint": "Register the referenced spec via define_spec(..., refs=[spec]).",
                    },
                )
