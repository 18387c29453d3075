"""Reads raw TOML component contents into a field mapping."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from typing import Any

from apekit.preprocessor import RawComponent


@dataclass
class ScannedComponent:
    """A component's type and its decoded, still untyped fields."""

    component_type: str = ""
    fields: dict[str, Any] = field(default_factory=dict)


class Scanner:
    """Decodes TOML contents of raw components."""

    def scan_component(self, raw: RawComponent) -> ScannedComponent:
        """Decode ``raw.data`` as TOML; raises ValueError when it is not valid."""
        try:
            decoded = tomllib.loads(raw.data.decode("utf-8"))
        except (UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ValueError(f"invalid TOML: {exc}") from exc
        return ScannedComponent(component_type=raw.component_type, fields=decoded)