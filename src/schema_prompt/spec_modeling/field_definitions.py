"""Field definition entities and the eager field constructor."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from .definition_errors import InvalidField

RESERVED_CHARS = frozenset("[];=|")
VALUE_RESERVED_CHARS = frozenset(",:[];=|")

_VECTOR_TYPE_PATTERN = re.compile(r"^(int|string|double)-v-(\d+)$")


class FieldType(str, Enum):
    """Scalar field types."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    DATE = "date"
    DATETIME = "datetime"
    KEYWORD = "keyword"
    REF = "ref"


class VectorBase(str, Enum):
    """Element types allowed in fixed-size vectors."""

    INT = "int"
    STRING = "string"
    DOUBLE = "double"


class Cardinality(str, Enum):
    """How many values a field holds."""

    ONE = "one"
    MANY = "many"


@dataclass(frozen=True)
class VectorType:
    """Fixed-size vector type such as ``int-v-3``."""

    base: VectorBase
    size: int

    def __str__(self) -> str:
        return f"{self.base.value}-v-{self.size}"


@dataclass(frozen=True)
class SingleRef:
    """Reference to exactly one named spec."""

    name: str

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name,)


@dataclass(frozen=True)
class UnionRef:
    """Reference to one of several named specs."""

    options: tuple[str, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return self.options


RefTarget = SingleRef | UnionRef
AnyFieldType = FieldType | VectorType


@dataclass(frozen=True)
class FieldDef:  # pylint: disable=too-many-instance-attributes
    """Validated field definition."""

    identifier: str
    field_type: AnyFieldType
    cardinality: Cardinality
    description: str
    optional: bool = False
    enum: Mapping[str, str] | None = None
    ref_targets: RefTarget | None = None
    humanize: bool = False

    @property
    def leaf(self) -> str:
        """Return the identifier part after the namespace."""
        return self.identifier.rpartition("/")[2]

    @property
    def is_many(self) -> bool:
        return self.cardinality is Cardinality.MANY

    @property
    def vector_type(self) -> VectorType | None:
        return self.field_type if isinstance(self.field_type, VectorType) else None


def type_name(field_type: AnyFieldType) -> str:
    """Return the text spelling of a field type, e.g. ``int`` or ``int-v-3``."""
    return field_type.value if isinstance(field_type, FieldType) else str(field_type)


def parse_field_type(value: Any) -> AnyFieldType | None:
    """Parse a type name or vector spelling, returning None when unrecognized."""
    if isinstance(value, FieldType | VectorType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return FieldType(value)
    except ValueError:
        pass
    match = _VECTOR_TYPE_PATTERN.fullmatch(value)
    if not match:
        return None
    size = int(match.group(2))
    if size <= 0:
        return None
    return VectorType(base=VectorBase(match.group(1)), size=size)


def define_field(  # pylint: disable=too-many-arguments
    *,
    identifier: Any = None,
    field_type: Any = None,
    cardinality: Any = None,
    description: Any = None,
    optional: bool = False,
    enum: Any = None,
    ref_targets: Any = None,
    humanize: bool = False,
) -> FieldDef:
    """Build a field definition, rejecting the first invalid option.

    Args:
      identifier: ``leaf`` or ``namespace.path/leaf``. The leaf may end in
        ``?``, ``!``, ``*`` or ``+``; those are stripped on the wire.
      field_type: A ``FieldType``, a type name, or a vector spelling such as
        ``int-v-3``.
      cardinality: ``Cardinality`` or ``"one"`` / ``"many"``.
      description: Human-readable text without reserved characters.
      optional: Whether the field may be null. Defaults to False.
      enum: Mapping of allowed value to its description.
      ref_targets: Spec name, or sequence of names for a union. Required for
        ``ref`` fields and forbidden otherwise.
      humanize: Marks the field for ``apply_humanizer``. Defaults to False.

    Raises:
      InvalidField: If any option is missing or malformed.
    """
    _validate_identifier(identifier)
    parsed_type = _parse_required_type(field_type)
    parsed_cardinality = _parse_cardinality(cardinality)
    _validate_description(description)
    targets = _parse_ref_targets(ref_targets, parsed_type)
    allowed = _parse_enum(enum) if enum is not None else None
    _validate_flag(optional, "optional")
    _validate_flag(humanize, "humanize")
    return FieldDef(
        identifier=identifier,
        field_type=parsed_type,
        cardinality=parsed_cardinality,
        description=description,
        optional=optional,
        enum=allowed,
        ref_targets=targets,
        humanize=humanize,
    )


def _validate_identifier(identifier: Any) -> None:
    if identifier is None:
        raise InvalidField("Field identifier is required.", {"option": "identifier"})
    if not isinstance(identifier, str) or not identifier:
        raise InvalidField(
            "Field identifier must be a non-empty string.",
            {"option": "identifier", "value": identifier},
        )
    namespace, separator, leaf = identifier.rpartition("/")
    if "." in leaf:
        suggestion = "/".join(identifier.rsplit(".", 1)) if not separator else None
        raise InvalidField(
            "Field identifier contains a dot in its leaf. Dots only separate namespace segments.",
            {
                "option": "identifier",
                "value": identifier,
                "hint": f"Use {suggestion!r} instead." if suggestion else None,
            },
        )
    segments = namespace.split(".") if separator else []
    if not leaf or "/" in namespace or any(not segment for segment in segments):
        raise InvalidField(
            "Field identifier must look like 'leaf' or 'namespace.path/leaf'.",
            {"option": "identifier", "value": identifier},
        )


def _validate_flag(value: Any, option: str) -> None:
    if not isinstance(value, bool):
        raise InvalidField(
            f"Field {option} must be a boolean.",
            {"option": option, "value": value, "hint": f"Pass {option}=True or {option}=False."},
        )


def _parse_required_type(field_type: Any) -> AnyFieldType:
    if field_type is None:
        raise InvalidField("Field type is required.", {"option": "field_type"})
    parsed = parse_field_type(field_type)
    if parsed is None:
        raise InvalidField(
            "Field type must be a known type or a fixed-size vector type (e.g. int-v-4).",
            {
                "option": "field_type",
                "value": field_type,
                "valid_types": sorted(member.value for member in FieldType),
                "hint": "Vector types are spelled <int|string|double>-v-<positive size>.",
            },
        )
    return parsed


def _parse_cardinality(cardinality: Any) -> Cardinality:
    if cardinality is None:
        raise InvalidField("Field cardinality is required.", {"option": "cardinality"})
    try:
        return Cardinality(cardinality)
    except ValueError:
        raise InvalidField(
            "Field cardinality must be 'one' or 'many'.",
            {"option": "cardinality", "value": cardinality},
        ) from None


def _validate_description(description: Any) -> None:
    if description is None:
        raise InvalidField("Field description is required.", {"option": "description"})
    if not isinstance(description, str):
        raise InvalidField(
            "Field description must be a string.",
            {"option": "description", "value": description},
        )
    _reject_reserved(description, RESERVED_CHARS, "Description contains reserved characters.")


def _parse_ref_targets(ref_targets: Any, field_type: AnyFieldType) -> RefTarget | None:
    is_ref = field_type is FieldType.REF
    if is_ref and ref_targets is None:
        raise InvalidField(
            "Field ref_targets is required when the type is ref.",
            {"option": "ref_targets", "field_type": type_name(field_type)},
        )
    if ref_targets is None:
        return None
    if not is_ref:
        raise InvalidField(
            "Field ref_targets can only be used with the ref type.",
            {"option": "ref_targets", "field_type": type_name(field_type), "value": ref_targets},
        )
    if isinstance(ref_targets, SingleRef | UnionRef):
        return ref_targets
    if isinstance(ref_targets, str) and ref_targets:
        return SingleRef(name=ref_targets)
    if (
        isinstance(ref_targets, Sequence)
        and not isinstance(ref_targets, str)
        and ref_targets
        and all(isinstance(name, str) and name for name in ref_targets)
    ):
        return UnionRef(options=tuple(ref_targets))
    raise InvalidField(
        "Field ref_targets must be a spec name or a non-empty sequence of names.",
        {"option": "ref_targets", "value": ref_targets},
    )


def _parse_enum(enum: Any) -> Mapping[str, str]:
    if not isinstance(enum, Mapping):
        raise InvalidField(
            "Field enum must be a mapping of value to description. Every value needs one.",
            {
                "option": "enum",
                "value": enum,
                "hint": "Use {'value1': 'Description of value1', ...}.",
            },
        )
    for value, value_description in enum.items():
        if not isinstance(value, str):
            raise InvalidField("Enum values must be strings.", {"option": "enum", "value": value})
        _reject_reserved(value, VALUE_RESERVED_CHARS, "Enum value contains reserved characters.")
        if value_description is None:
            raise InvalidField(
                "Every enum value must have a description.",
                {"option": "enum", "value": value},
            )
        if not isinstance(value_description, str):
            raise InvalidField(
                "Enum descriptions must be strings.",
                {"option": "enum", "value": value, "description": value_description},
            )
        _reject_reserved(
            value_description, RESERVED_CHARS, "Enum description contains reserved characters."
        )
    return MappingProxyType(dict(enum))


def _reject_reserved(text: str, reserved: frozenset[str], message: str) -> None:
    invalid = sorted(set(text) & reserved)
    if invalid:
        raise InvalidField(
            message,
            {"value": text, "invalid_chars": invalid, "reserved_chars": sorted(reserved)},
        )
