"""Spec validator tests."""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime

import pytest
from schema_prompt.data_validation import ValidationErrorKind, validate
from schema_prompt.diagnostics import CollectingDiagnosticSink
from schema_prompt.spec_modeling import Keyword, define_field, define_spec


def _field(identifier: str, field_type: str = "string", cardinality: str = "one", **options):
    return define_field(
        identifier=identifier,
        field_type=field_type,
        cardinality=cardinality,
        description=f"{identifier} value",
        **options,
    )


def _books_spec():
    return define_spec(
        _field("books", cardinality="many"),
        _field("books/title"),
        _field("books/year", "int"),
    )


def test_validate_reports_every_missing_required_field() -> None:
    spec = define_spec(_field("name"), _field("email"), _field("nickname", optional=True))

    report = validate(spec, {})

    assert report.valid is False
    assert [issue.kind for issue in report.errors] == [
        ValidationErrorKind.MISSING_REQUIRED_FIELD,
        ValidationErrorKind.MISSING_REQUIRED_FIELD,
    ]
    assert [issue.identifier for issue in report.errors] == ["name", "email"]


def test_validate_accepts_conforming_data_and_reports_pass() -> None:
    spec = define_spec(_field("name"), _field("age", "int"), _field("score", "float"))
    sink = CollectingDiagnosticSink()

    report = validate(spec, {"name": "Ada", "age": 36, "score": 9}, diagnostics=sink)

    assert report.valid is True
    assert report.errors == ()
    assert sink.messages(logging.DEBUG) == ["Spec validation passed"]


def test_validate_checks_each_array_element_for_nested_fields() -> None:
    report = validate(
        _books_spec(),
        {"books": [{"title": "A", "year": 1}, {"title": "B"}]},
    )

    assert report.valid is False
    assert len(report.errors) == 1
    issue = report.errors[0]
    assert issue.kind is ValidationErrorKind.MISSING_REQUIRED_FIELD
    assert issue.identifier == "books/year"
    assert issue.path == "books.year"
    assert issue.context["element_indices"] == (1,)


def _shelf_spec():
    return define_spec(
        _field("books", cardinality="many"),
        _field("books/authors", cardinality="many"),
        _field("books.authors/name"),
        _field("books.authors/born", "int", optional=True),
    )


def test_validate_accepts_arrays_nested_in_arrays() -> None:
    report = validate(
        _shelf_spec(),
        {
            "books": [
                {"authors": [{"name": "X"}, {"name": "Y", "born": 1950}]},
                {"authors": [{"name": "Z"}]},
            ]
        },
    )

    assert report.valid is True, report.errors


def test_validate_reports_index_paths_for_nested_array_elements() -> None:
    report = validate(
        _shelf_spec(),
        {
            "books": [
                {"authors": [{"name": "X"}, {"born": 1950}]},
                {"authors": [{"name": "Z", "born": "1901"}]},
            ]
        },
    )

    summary = [(issue.kind, issue.identifier) for issue in report.errors]
    assert summary == [
        (ValidationErrorKind.MISSING_REQUIRED_FIELD, "books.authors/name"),
        (ValidationErrorKind.TYPE_MISMATCH, "books.authors/born"),
    ]
    assert report.errors[0].context["element_indices"] == ((0, 1),)
    assert report.errors[1].context["actual_value"] == [None, 1950, "1901"]


def test_validate_reports_missing_inner_array_for_each_parent_element() -> None:
    report = validate(
        _shelf_spec(),
        {"books": [{"authors": [{"name": "X"}]}, {"title": "No authors"}]},
    )

    summary = [
        (issue.identifier, issue.context["element_indices"]) for issue in report.errors
    ]
    assert summary == [("books/authors", (1,)), ("books.authors/name", ((1,),))]


def test_validate_reports_type_mismatch_inside_arrays() -> None:
    report = validate(
        _books_spec(),
        {"books": [{"title": "A", "year": "1999"}, {"title": "B", "year": 2001}]},
    )

    mismatches = report.of_kind(ValidationErrorKind.TYPE_MISMATCH)
    assert len(report.errors) == 1
    assert mismatches[0].identifier == "books/year"
    assert mismatches[0].context["expected"] == "int"
    assert mismatches[0].context["actual_value"] == ["1999", 2001]


def test_validate_reports_missing_array_container() -> None:
    report = validate(_books_spec(), {})

    assert [issue.identifier for issue in report.errors] == [
        "books",
        "books/title",
        "books/year",
    ]
    assert all(
        issue.kind is ValidationErrorKind.MISSING_REQUIRED_FIELD for issue in report.errors
    )


@pytest.mark.parametrize(
    ("value", "valid"),
    [
        ([1, 2, 3], True),
        ((1, 2, 3), True),
        ([1, 2], False),
        ([1, "x", 3], False),
        ([1, 2, True], False),
        ("1,2,3", False),
    ],
)
def test_validate_fixed_vector_shape(value, valid: bool) -> None:
    spec = define_spec(_field("rgb", "int-v-3"))

    report = validate(spec, {"rgb": value})

    assert report.valid is valid
    if not valid:
        assert report.errors[0].kind is ValidationErrorKind.TYPE_MISMATCH
        assert report.errors[0].context["expected"] == "int-v-3"


def test_validate_fixed_vector_ignores_many_cardinality() -> None:
    spec = define_spec(_field("point", "double-v-2", "many"))

    assert validate(spec, {"point": [1.5, 2]}).valid is True


def test_validate_reports_invalid_enum_with_allowed_values() -> None:
    spec = define_spec(
        _field("role", enum={"user": "Regular user", "admin": "Administrator"}),
    )

    report = validate(spec, {"role": "root"})

    assert len(report.errors) == 1
    issue = report.errors[0]
    assert issue.kind is ValidationErrorKind.INVALID_ENUM_VALUE
    assert issue.context == {"value": "root", "allowed_values": ["admin", "user"]}


def test_validate_checks_enum_values_of_many_fields() -> None:
    spec = define_spec(_field("roles", cardinality="many", enum={"admin": "A", "user": "U"}))

    assert validate(spec, {"roles": ["admin", "user"]}).valid is True
    assert validate(spec, {"roles": ["admin", "root"]}).of_kind(
        ValidationErrorKind.INVALID_ENUM_VALUE
    )


@pytest.mark.parametrize(
    ("field_type", "good", "bad"),
    [
        ("string", "text", 1),
        ("int", 3, True),
        ("int", 3, 3.5),
        ("float", 3.5, "3.5"),
        ("bool", False, 0),
        ("keyword", Keyword("active"), "active"),
        ("date", date(2024, 1, 15), datetime(2024, 1, 15, tzinfo=UTC)),
        ("datetime", datetime(2024, 1, 15, tzinfo=UTC), "2024-01-15T00:00:00Z"),
    ],
)
def test_validate_scalar_types(field_type: str, good, bad) -> None:
    spec = define_spec(_field("value", field_type))

    assert validate(spec, {"value": good}).valid is True
    assert validate(spec, {"value": bad}).of_kind(ValidationErrorKind.TYPE_MISMATCH)


def test_validate_many_field_requires_sequence_of_matching_elements() -> None:
    spec = define_spec(_field("tags", cardinality="many"))

    assert validate(spec, {"tags": ["a", "b"]}).valid is True
    assert validate(spec, {"tags": "a"}).of_kind(ValidationErrorKind.TYPE_MISMATCH)
    assert validate(spec, {"tags": ["a", 1]}).of_kind(ValidationErrorKind.TYPE_MISMATCH)


def test_validate_ref_fields_require_mappings() -> None:
    address = define_spec(_field("street"), name="Address")
    spec = define_spec(_field("home", "ref", ref_targets="Address"), refs=[address])

    assert validate(spec, {"home": {"street": "Main"}}).valid is True
    assert validate(spec, {"home": "Main street"}).of_kind(ValidationErrorKind.TYPE_MISMATCH)


def test_validate_uses_restored_identifiers_and_namespaces() -> None:
    spec = define_spec(_field("valid?", "bool"), _field("meta/source!"))

    assert validate(spec, {"valid?": True, "meta": {"source!": "web"}}).valid is True
    missing = validate(spec, {"valid": True, "meta": {"source": "web"}})
    assert [issue.identifier for issue in missing.errors] == ["valid?", "meta/source!"]


def test_validate_optional_fields_accept_null() -> None:
    spec = define_spec(_field("nickname", optional=True), _field("tags", "string", "many"))
    sink = CollectingDiagnosticSink()

    report = validate(spec, {"nickname": None, "tags": None}, diagnostics=sink)

    assert [issue.identifier for issue in report.errors] == ["tags"]
    assert sink.messages(logging.WARNING) == ["Spec validation failed"]
