"""Spec modeling exports."""

from .definition_errors import DuplicateSpecName, InvalidField, InvalidSpec, SpecError
from .field_definitions import (
    Cardinality,
    FieldDef,
    FieldType,
    RefTarget,
    SingleRef,
    UnionRef,
    VectorBase,
    VectorType,
    define_field,
    parse_field_type,
    type_name,
)
from .spec_definitions import SpecDef, define_spec
from .symbols import Keyword

__all__ = [
    "Cardinality",
    "DuplicateSpecName",
    "FieldDef",
    "FieldType",
    "InvalidField",
    "InvalidSpec",
    "Keyword",
    "RefTarget",
    "SingleRef",
    "SpecDef",
    "SpecError",
    "UnionRef",
    "VectorBase",
    "VectorType",
    "define_field",
    "define_spec",
    "parse_field_type",
    "type_name",
]
