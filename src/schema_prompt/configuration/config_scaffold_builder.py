"""Spec document scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_SPEC_FILENAME = "spec.yaml"

_SPEC_SCAFFOLD_TEMPLATE = """# Spec document template for schema-prompt.
# Replace every <REQUIRED> placeholder before running render, decode or validate.
# Remove <OPTIONAL> entries your spec does not need.

spec:
  name: "<OPTIONAL>"
  # Prefix every decoded key as <key_namespace>/<key>.
  # key_namespace: "<OPTIONAL>"
  fields:
    # identifier: leaf or namespace.path/leaf; the leaf may end in ? ! * or +.
    - identifier: "<REQUIRED>"
      # string, int, float, bool, date, datetime, keyword, ref,
      # or a fixed-size vector: int-v-N, string-v-N, double-v-N.
      type: "<REQUIRED>"
      # one or many
      cardinality: "<REQUIRED>"
      # Must not contain [ ] ; = |
      description: "<REQUIRED>"
      optional: false
      humanize: false
      # enum:
      #   value: "<REQUIRED description>"
      # ref_targets is required for type ref: a ref name or a list of names.
      # ref_targets: "<OPTIONAL>"
  # Referenced specs; each needs a name.
  # refs:
  #   - name: "<REQUIRED>"
  #     fields: []
"""


def build_placeholder_spec_document() -> str:
    """Build a spec document template with placeholders and inline guidance."""
    return _SPEC_SCAFFOLD_TEMPLATE


def write_placeholder_spec_document(output_path: Path | str) -> Path:
    """Write the placeholder spec document to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Spec document already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_spec_document(), encoding="utf-8")
    return destination.resolve()
