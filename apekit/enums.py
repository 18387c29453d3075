"""Case-insensitive matching of free text against a fixed set of string values."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T", bound=str)
L = TypeVar("L")

UNDEFINED = "UNDEFINED"


@dataclass(frozen=True)
class EnumMatcher(Generic[T, L]):
    """Pairs a collection of known values with a lookup table keyed by lower-case text."""

    type_list: L
    match_map: Mapping[str, T] = field(default_factory=dict)
    undefined: str = UNDEFINED

    def types(self) -> L:
        """Return the collection of known values."""
        return self.type_list

    def match(self, src: str) -> T | str:
        """Look up ``src`` ignoring case and surrounding whitespace.

        Returns the undefined marker when nothing matches.
        """
        key = src.lower().strip()
        return self.match_map.get(key, self.undefined)