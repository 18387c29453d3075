"""State carried through compilation of a single component."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CompilationContext:
    """Where a component sits: its type, name, and whether it has a parent."""

    component_type: str = ""
    name: str | None = None
    is_root: bool = False
    parent_id: str | None = None


def check_optional_string(src: str | None) -> str | None:
    """Return ``src`` unless it is None or blank, in which case return None."""
    if src is None or src.strip() == "":
        return None
    return src