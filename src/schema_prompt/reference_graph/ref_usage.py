"""Usage counting and hoist/inline partitioning of referenced specs."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass

from schema_prompt.spec_modeling.spec_definitions import SpecDef

NamedSpec = tuple[str, SpecDef]


@dataclass(frozen=True)
class RefPartition:
    """Referenced specs split by how often the main spec uses them."""

    hoisted: tuple[NamedSpec, ...]
    inlined: tuple[NamedSpec, ...]
    unused: tuple[NamedSpec, ...]


def count_ref_usages(spec: SpecDef, registry: Mapping[str, SpecDef]) -> Counter[str]:
    """Count uses of each referenced spec by the spec's own ref fields.

    A union target contributes one count per member. Every registry entry is
    present in the result, with zero for unused refs.
    """
    counts: Counter[str] = Counter({name: 0 for name in registry})
    for field in spec.ref_fields:
        if field.ref_targets is None:
            continue
        counts.update(field.ref_targets.names)
    return counts


def partition_refs_by_usage(spec: SpecDef, registry: Mapping[str, SpecDef]) -> RefPartition:
    """Hoist refs used twice or more, inline refs used once, flag the rest."""
    counts = count_ref_usages(spec, registry)
    hoisted: list[NamedSpec] = []
    inlined: list[NamedSpec] = []
    unused: list[NamedSpec] = []
    for name, ref in registry.items():
        usage = counts[name]
        if usage >= 2:
            hoisted.append((name, ref))
        elif usage == 1:
            inlined.append((name, ref))
        else:
            unused.append((name, ref))
    return RefPartition(hoisted=tuple(hoisted), inlined=tuple(inlined), unused=tuple(unused))
