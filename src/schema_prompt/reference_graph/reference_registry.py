"""Flattened registry of referenced specs."""

from __future__ import annotations

from schema_prompt.spec_modeling.definition_errors import DuplicateSpecName, InvalidSpec
from schema_prompt.spec_modeling.spec_definitions import SpecDef

ReferenceRegistry = dict[str, SpecDef]


def build_reference_registry(spec: SpecDef) -> ReferenceRegistry:
    """Collect every spec reachable through ``refs`` into a name-keyed registry.

    Each ref's own refs are resolved first and merged after it. Two sibling
    subtrees may not share a name, nor may a ref reuse a name registered
    earlier.

    Raises:
      DuplicateSpecName: On the first name collision, with both definitions.
    """
    registry: ReferenceRegistry = {}
    for ref in spec.refs:
        if not ref.name:
            raise InvalidSpec("Referenced spec must have a name.", {"ref": ref})
        if ref.name in registry:
            raise DuplicateSpecName(
                f"Duplicate spec name in refs: {ref.name}",
                {"spec_name": ref.name, "existing": registry[ref.name], "duplicate": ref},
            )
        nested = build_reference_registry(ref)
        conflicts = sorted((registry.keys() | {ref.name}) & nested.keys())
        if conflicts:
            name = conflicts[0]
            raise DuplicateSpecName(
                f"Duplicate spec name in nested refs: {name}",
                {
                    "spec_name": name,
                    "conflicts": conflicts,
                    "existing": registry.get(name, ref),
                    "duplicate": nested[name],
                },
            )
        registry[ref.name] = ref
        registry.update(nested)
    return registry
