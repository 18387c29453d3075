"""Turns a file on disk into a raw component tagged with its type."""

from __future__ import annotations

from dataclasses import dataclass

from apekit.components import ComponentType

_PATH_TYPES: tuple[tuple[str, ComponentType], ...] = (
    ("props", ComponentType.PROP),
    ("objects", ComponentType.OBJECT),
    ("routes", ComponentType.ROUTE),
)


@dataclass
class RawComponent:
    """Unparsed component contents together with where they came from."""

    component_type: str = ""
    is_from_file: bool = False
    path: str = ""
    data: bytes = b""


class Preprocessor:
    """Determines a file's component type from its path."""

    def file(self, path: str, data: bytes) -> RawComponent:
        """Wrap ``data`` read from ``path`` in a RawComponent.

        Raises ValueError when the path names no known component kind.
        """
        lowered = path.lower()
        found = ""
        for key, ctype in _PATH_TYPES:
            if key in lowered:
                found = ctype
        if not found:
            raise ValueError(f"could not determine type for file {path}")
        return RawComponent(
            component_type=found, is_from_file=True, path=path, data=data
        )