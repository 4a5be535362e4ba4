"""Spec to pseudo-typed schema block rendering."""

from __future__ import annotations

import logging

from schema_prompt.diagnostics.diagnostic_sink import DiagnosticSink, resolve_sink
from schema_prompt.path_algebra.identifier_paths import wire_name
from schema_prompt.path_algebra.namespace_tree import PathTree, build_path_tree, group_by_namespace
from schema_prompt.reference_graph.ref_usage import partition_refs_by_usage
from schema_prompt.reference_graph.reference_registry import build_reference_registry
from schema_prompt.spec_modeling.field_definitions import FieldDef
from schema_prompt.spec_modeling.spec_definitions import SpecDef

from .type_tokens import description_hint, field_type_token

_OBJECT_INDENT = "  "
_ARRAY_INDENT = "    "


def render_spec(spec: SpecDef, *, diagnostics: DiagnosticSink | None = None) -> str:
    """Render a spec and its referenced specs as schema blocks.

    Refs used by two or more fields are rendered first under their own name.
    Refs used by exactly one field follow as anonymous blocks. The main block
    comes last. Blocks are separated by a blank line; unused refs are left out
    and reported to ``diagnostics``.

    Raises:
      DuplicateSpecName: If two referenced specs share a name.
    """
    sink = resolve_sink(diagnostics)
    registry = build_reference_registry(spec)
    partition = partition_refs_by_usage(spec, registry)
    for name, _ in partition.unused:
        sink.emit(logging.WARNING, f"Unused ref in spec: {name}", {"ref": name})

    blocks = [render_block(ref, name=name) for name, ref in partition.hoisted]
    blocks.extend(render_block(ref, name=None) for _, ref in partition.inlined)
    blocks.append(render_block(spec, name=spec.name))
    return "\n\n".join(blocks)


def render_block(spec: SpecDef, *, name: str | None) -> str:
    """Render the fields of one spec as a single ``{ ... }`` block."""
    tree = build_path_tree(group_by_namespace(spec.fields))
    body = "\n".join(_render_tree(tree, _OBJECT_INDENT))
    opening = f"{name} {{" if name else "{"
    return f"{opening}\n{body}\n}}"


def render_field(field: FieldDef, indent: str) -> str:
    """Render one field as its comment lines followed by ``name: type,``."""
    description = field.description
    hint = description_hint(field)
    if hint:
        description = f"{description} {hint}"
    requirement = "(optional)" if field.optional else "(required)"
    lines = [f"{indent}// {description} {requirement}"]
    if field.enum:
        lines.extend(
            f'{indent}//   - "{value}": {field.enum[value]}' for value in sorted(field.enum)
        )
    lines.append(f"{indent}{wire_name(field.identifier)}: {field_type_token(field)},")
    return "\n".join(lines)


def _render_tree(tree: PathTree, indent: str) -> list[str]:
    containers = tree.array_containers()
    lines = [
        render_field(entry, indent)
        for entry in tree.fields
        if not (entry.is_many and entry.identifier in containers)
    ]
    for child_name, child_tree in sorted(tree.children.items()):
        if child_name in containers:
            inner = _render_tree(child_tree, indent + _ARRAY_INDENT)
            lines.append(f"{indent}{child_name}: [")
            lines.append(f"{indent}{_OBJECT_INDENT}{{")
            lines.extend(inner)
            lines.append(f"{indent}{_OBJECT_INDENT}}}")
            lines.append(f"{indent}],")
        else:
            inner = _render_tree(child_tree, indent + _OBJECT_INDENT)
            lines.append(f"{indent}{child_name}: {{")
            lines.extend(inner)
            lines.append(f"{indent}}},")
    return lines
