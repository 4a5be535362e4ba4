"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_SPEC_FILENAME,
    build_placeholder_spec_document,
    write_placeholder_spec_document,
)
from .loader import ConfigurationError, build_spec_from_mapping, load_spec_document
from .spec_document_models import SpecDocument

__all__ = [
    "SpecDocument",
    "ConfigurationError",
    "build_spec_from_mapping",
    "load_spec_document",
    "DEFAULT_SPEC_FILENAME",
    "build_placeholder_spec_document",
    "write_placeholder_spec_document",
]
