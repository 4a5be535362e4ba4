"""Schema rendering exports."""

from .schema_renderer import render_block, render_field, render_spec
from .type_tokens import description_hint, field_type_token

__all__ = [
    "description_hint",
    "field_type_token",
    "render_block",
    "render_field",
    "render_spec",
]
