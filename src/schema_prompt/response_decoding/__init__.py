"""Response decoding exports."""

from .humanization import Humanizer, apply_humanizer
from .json_serialization import serialize
from .response_decoder import (
    apply_key_namespaces,
    collect_key_namespaces,
    collect_keyword_leaves,
    decode,
    parse_only,
    restore_identifiers,
    retype_keywords,
    wrap_bare_sequence,
)
from .response_parser import ParseResult, UnparsableResponse, parse_response

__all__ = [
    "Humanizer",
    "ParseResult",
    "UnparsableResponse",
    "apply_humanizer",
    "apply_key_namespaces",
    "collect_key_namespaces",
    "collect_keyword_leaves",
    "decode",
    "parse_only",
    "parse_response",
    "restore_identifiers",
    "retype_keywords",
    "serialize",
    "wrap_bare_sequence",
]
