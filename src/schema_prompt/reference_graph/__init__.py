"""Reference graph exports."""

from .reference_registry import ReferenceRegistry, build_reference_registry
from .ref_usage import NamedSpec, RefPartition, count_ref_usages, partition_refs_by_usage

__all__ = [
    "NamedSpec",
    "RefPartition",
    "ReferenceRegistry",
    "build_reference_registry",
    "count_ref_usages",
    "partition_refs_by_usage",
]
