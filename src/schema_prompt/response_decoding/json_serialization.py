"""JSON serialization of decoded data."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date
from typing import Any

from schema_prompt.spec_modeling.symbols import Keyword


def serialize(data: Any) -> str:
    """Serialize data to JSON text.

    Dates and datetimes become ISO 8601 strings and keywords become plain
    strings, at any depth.
    """
    return json.dumps(_prepare_for_json(data), ensure_ascii=False)


def _prepare_for_json(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Keyword):
        return str.__str__(value)
    if isinstance(value, Mapping):
        return {str(key): _prepare_for_json(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_prepare_for_json(item) for item in value]
    return value
