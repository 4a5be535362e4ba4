"""Namespace grouping and path tree construction."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace

from schema_prompt.spec_modeling.field_definitions import FieldDef

from .identifier_paths import split_identifier

GroupedFields = dict[tuple[str, ...], list[FieldDef]]


@dataclass(frozen=True)
class PathTree:
    """Fields declared at one namespace level plus named child levels."""

    fields: tuple[FieldDef, ...] = ()
    children: Mapping[str, PathTree] = field(default_factory=dict)

    def array_containers(self) -> frozenset[str]:
        """Return leaves of many-valued fields here that also name a child level."""
        return frozenset(
            entry.identifier
            for entry in self.fields
            if entry.is_many and entry.identifier in self.children
        )


def group_by_namespace(fields: Sequence[FieldDef]) -> GroupedFields:
    """Group fields by their exact namespace path, renaming each to its leaf.

    ``[address/city, address/zip, name]`` groups into
    ``{(): [name], ("address",): [city, zip]}``.
    """
    grouped: GroupedFields = {}
    for entry in fields:
        segments, leaf = split_identifier(entry.identifier)
        grouped.setdefault(segments, []).append(replace(entry, identifier=leaf))
    return grouped


def build_path_tree(grouped: Mapping[tuple[str, ...], Sequence[FieldDef]]) -> PathTree:
    """Build a tree keyed by the first namespace segment at every level."""
    by_first: dict[str, dict[tuple[str, ...], Sequence[FieldDef]]] = {}
    for segments, entries in grouped.items():
        if not segments:
            continue
        by_first.setdefault(segments[0], {})[segments[1:]] = entries
    return PathTree(
        fields=tuple(grouped.get((), ())),
        children={name: build_path_tree(sub_grouped) for name, sub_grouped in by_first.items()},
    )
