"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from schema_prompt.spec_modeling.spec_definitions import SpecDef


@dataclass(frozen=True)
class SpecDocument:
    """Spec loaded from a YAML/JSON spec document."""

    path: Path
    spec: SpecDef
