"""Field to wire type-token conversion."""

from __future__ import annotations

from schema_prompt.spec_modeling.field_definitions import (
    FieldDef,
    FieldType,
    UnionRef,
    VectorBase,
)

SCALAR_TOKENS = {
    FieldType.STRING: "string",
    FieldType.INT: "int",
    FieldType.FLOAT: "float",
    FieldType.BOOL: "bool",
    # no wire equivalent; hinted in the description or retyped on decode
    FieldType.DATE: "string",
    FieldType.DATETIME: "string",
    FieldType.KEYWORD: "string",
}

VECTOR_BASE_TOKENS = {
    VectorBase.INT: "int",
    VectorBase.STRING: "string",
    VectorBase.DOUBLE: "float",
}


def field_type_token(field: FieldDef) -> str:
    """Return the type token rendered after a field name.

    Examples: ``string``, ``int or null``, ``string[]``, ``Address``,
    ``Heading | Paragraph``, ``"admin" or "user"``, ``int[4]``.
    """
    vector = field.vector_type
    if field.enum:
        token = " or ".join(f'"{value}"' for value in sorted(field.enum))
    elif vector is not None:
        token = f"{VECTOR_BASE_TOKENS[vector.base]}[{vector.size}]"
    elif field.field_type is FieldType.REF and field.ref_targets is not None:
        if isinstance(field.ref_targets, UnionRef):
            token = " | ".join(field.ref_targets.names)
        else:
            token = field.ref_targets.name
    else:
        token = SCALAR_TOKENS.get(field.field_type, "string")  # type: ignore[call-overload]

    # a vector's size already encodes the array shape
    if field.is_many and vector is None:
        token = f"{token}[]"
    if field.optional:
        token = f"{token} or null"
    return token


def description_hint(field: FieldDef) -> str | None:
    """Return the format hint appended to a field description, if any."""
    if field.field_type is FieldType.DATE:
        return "(ISO date YYYY-MM-DD)"
    if field.field_type is FieldType.DATETIME:
        return "(ISO datetime)"
    if field.vector_type is not None:
        return f"(exactly {field.vector_type.size} elements)"
    return None
