"""Field lookup and component metadata parsing shared by the parsers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from apekit.components import ComponentType

KEY_NAME = "name"
KEY_CATEGORY = "category"
KEY_DESCRIPTION = "description"
KEY_TYPE = "type"
KEY_ARRAY = "array"
KEY_PROPS = "props"
KEY_REQUEST = "request"
KEY_RESPONSES = "responses"
KEY_HEADERS = "headers"
KEY_MESSAGE_BODY = "body"
KEY_STATUS_CODE = "status_code"

_CHILD_NAMES: dict[str, str] = {
    ComponentType.PROP: "prop",
    ComponentType.OBJECT: "object",
    ComponentType.ROUTE: "route",
    ComponentType.MESSAGE_BODY: "body",
    ComponentType.REQUEST: "request",
    ComponentType.RESPONSE: "response",
}

_NAME_REQUIRED: frozenset[str] = frozenset(
    {ComponentType.PROP, ComponentType.RESPONSE}
)


class ParseError(ValueError):
    """Raised when scanned fields do not describe a valid component."""


@dataclass
class ParsedComponentMetadata:
    """Name, category and description as found in a component's fields."""

    name: str | None = None
    category: str | None = None
    description: str | None = None


def get_string_from_map(mapping: Mapping[str, Any], key: str) -> str:
    """Return the string stored under ``key``.

    Raises ParseError when the key is missing or its value is not a string.
    """
    if key not in mapping:
        raise ParseError(f"missing {key}")
    value = mapping[key]
    if not isinstance(value, str):
        raise ParseError(f"invalid type for {key}: {value!r}")
    return value


def _optional_string(mapping: Mapping[str, Any], key: str) -> str | None:
    value = mapping.get(key)
    return value if isinstance(value, str) else None


def parse_component_metadata(
    fields: Mapping[str, Any], comp_type: str, is_root: bool
) -> ParsedComponentMetadata:
    """Read the common metadata of a component from its fields.

    A component without a name is given the default name of its type,
    unless it is a root component or a type that requires a name.
    """
    if KEY_NAME in fields:
        try:
            name = get_string_from_map(fields, KEY_NAME)
        except ParseError as exc:
            raise ParseError(f"error parsing {KEY_NAME}: {exc}") from exc
    elif is_root:
        raise ParseError("name missing")
    elif comp_type in _NAME_REQUIRED:
        raise ParseError(f"name missing, required for type {comp_type}")
    else:
        name = _CHILD_NAMES.get(comp_type, "")

    return ParsedComponentMetadata(
        name=name,
        category=_optional_string(fields, KEY_CATEGORY),
        description=_optional_string(fields, KEY_DESCRIPTION),
    )