"""Path algebra exports."""

from .identifier_mapping import IdentifierMapping, build_identifier_mapping
from .identifier_paths import (
    RESERVED_PUNCTUATION,
    identifier_to_path,
    path_prefixes,
    path_segments,
    split_identifier,
    wire_name,
)
from .namespace_tree import GroupedFields, PathTree, build_path_tree, group_by_namespace

__all__ = [
    "GroupedFields",
    "IdentifierMapping",
    "PathTree",
    "RESERVED_PUNCTUATION",
    "build_identifier_mapping",
    "build_path_tree",
    "group_by_namespace",
    "identifier_to_path",
    "path_prefixes",
    "path_segments",
    "split_identifier",
    "wire_name",
]
