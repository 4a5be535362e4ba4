"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from schema_prompt.configuration.loader import (
    ConfigurationError,
    build_spec_from_mapping,
    load_spec_document,
)
from schema_prompt.spec_modeling import Cardinality, FieldType, SingleRef, UnionRef, VectorType


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_spec_document_with_refs(tmp_path: Path) -> None:
    document_path = _write_file(
        tmp_path / "spec.yaml",
        """
spec:
  name: Person
  key_namespace: crm.person
  fields:
    - identifier: name
      type: string
      cardinality: one
      description: Full name
      humanize: true
    - identifier: home
      type: ref
      cardinality: one
      description: Home address
      ref_targets: Address
    - identifier: roles
      type: keyword
      cardinality: many
      description: Granted roles
      enum:
        admin: Administrator
        user: Regular user
    - identifier: location
      type: double-v-2
      cardinality: one
      description: Latitude and longitude
      optional: true
  refs:
    - name: Address
      fields:
        - identifier: street
          type: string
          cardinality: one
          description: Street line
""",
    )

    document = load_spec_document(document_path)
    spec = document.spec

    assert document.path == document_path
    assert spec.name == "Person"
    assert spec.key_namespace == "crm.person"
    assert [field.identifier for field in spec.fields] == ["name", "home", "roles", "location"]
    name, home, roles, location = spec.fields
    assert name.humanize is True
    assert name.optional is False
    assert home.ref_targets == SingleRef(name="Address")
    assert roles.field_type is FieldType.KEYWORD
    assert roles.cardinality is Cardinality.MANY
    assert dict(roles.enum) == {"admin": "Administrator", "user": "Regular user"}
    assert isinstance(location.field_type, VectorType)
    assert location.optional is True
    assert [ref.name for ref in spec.refs] == ["Address"]


def test_loads_json_spec_document_with_union_targets(tmp_path: Path) -> None:
    document_path = _write_file(
        tmp_path / "spec.json",
        json.dumps(
            {
                "spec": {
                    "fields": [
                        {
                            "identifier": "blocks",
                            "type": "ref",
                            "cardinality": "many",
                            "description": "Page blocks",
                            "ref_targets": ["Heading", "Paragraph"],
                        }
                    ],
                    "refs": [
                        {"name": "Heading", "fields": []},
                        {"name": "Paragraph", "fields": []},
                    ],
                }
            }
        ),
    )

    spec = load_spec_document(document_path).spec

    assert spec.name is None
    assert spec.fields[0].ref_targets == UnionRef(options=("Heading", "Paragraph"))


def test_missing_document_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Spec document not found"):
        load_spec_document(tmp_path / "missing.yaml")


def test_document_without_spec_section_raises(tmp_path: Path) -> None:
    document_path = _write_file(tmp_path / "spec.yaml", "other: {}\n")

    with pytest.raises(ConfigurationError, match="section 'spec' is required"):
        load_spec_document(document_path)


def test_document_root_must_be_mapping(tmp_path: Path) -> None:
    document_path = _write_file(tmp_path / "spec.yaml", "- one\n- two\n")

    with pytest.raises(ConfigurationError, match="root must be a mapping"):
        load_spec_document(document_path)


def test_fields_are_required() -> None:
    with pytest.raises(ConfigurationError, match=r"spec\.fields is required"):
        build_spec_from_mapping({"name": "Empty"})


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ConfigurationError, match=r"spec\.fields\[0\] has unknown keys: required"):
        build_spec_from_mapping(
            {
                "fields": [
                    {
                        "identifier": "name",
                        "type": "string",
                        "cardinality": "one",
                        "description": "Name",
                        "required": True,
                    }
                ]
            }
        )


def test_flags_must_be_booleans() -> None:
    with pytest.raises(ConfigurationError, match=r"spec\.fields\[0\]\.optional must be a boolean"):
        build_spec_from_mapping(
            {
                "fields": [
                    {
                        "identifier": "name",
                        "type": "string",
                        "cardinality": "one",
                        "description": "Name",
                        "optional": "yes",
                    }
                ]
            }
        )


def test_field_errors_are_wrapped_with_location() -> None:
    with pytest.raises(ConfigurationError, match=r"spec\.fields\[0\]: Field type must be") as excinfo:
        build_spec_from_mapping(
            {
                "fields": [
                    {
                        "identifier": "name",
                        "type": "uuid",
                        "cardinality": "one",
                        "description": "Name",
                    }
                ]
            }
        )

    assert excinfo.value.__cause__.kind == "invalid_field"


def test_unknown_ref_target_is_reported_for_the_spec() -> None:
    with pytest.raises(ConfigurationError, match=r"^spec: Field 'home' references target"):
        build_spec_from_mapping(
            {
                "fields": [
                    {
                        "identifier": "home",
                        "type": "ref",
                        "cardinality": "one",
                        "description": "Home",
                        "ref_targets": "Address",
                    }
                ]
            }
        )


def test_nested_ref_errors_use_ref_location() -> None:
    with pytest.raises(ConfigurationError, match=r"spec\.refs\[0\]\.fields is required"):
        build_spec_from_mapping({"fields": [], "refs": [{"name": "Address"}]})
