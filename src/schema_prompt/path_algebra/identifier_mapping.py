"""Wire-key to identifier mapping used to restore stripped punctuation."""

from __future__ import annotations

from collections.abc import Iterable

from schema_prompt.spec_modeling.spec_definitions import SpecDef

from .identifier_paths import wire_name

IdentifierMapping = dict[str, str]


def build_identifier_mapping(
    spec: SpecDef, referenced_specs: Iterable[SpecDef] = ()
) -> IdentifierMapping:
    """Map wire leaves back to leaves that lost punctuation on the wire.

    ``{"verifiable": "verifiable?"}`` for a field ``claims/verifiable?``.
    Fields of ``spec`` take precedence over fields of referenced specs.
    """
    mapping: IdentifierMapping = {}
    for source in (spec, *referenced_specs):
        for entry in source.fields:
            stripped = wire_name(entry.leaf)
            if stripped != entry.leaf:
                mapping.setdefault(stripped, entry.leaf)
    return mapping
