"""Parsing of prop components and maps of props."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from apekit.components import PROP_TYPES, ComponentType, PropType
from apekit.context import CompilationContext
from apekit.parse_common import (
    KEY_ARRAY,
    KEY_CATEGORY,
    KEY_DESCRIPTION,
    KEY_NAME,
    KEY_TYPE,
    ParsedComponentMetadata,
    ParseError,
    get_string_from_map,
    parse_component_metadata,
)
from apekit.scanner import ScannedComponent

_METADATA_KEYS = frozenset({KEY_NAME, KEY_CATEGORY, KEY_DESCRIPTION, KEY_TYPE})


@dataclass
class ParsedPropMetadata:
    """The prop's type and whether it was declared as an array."""

    prop_type: str = ""
    is_array: bool | None = None


@dataclass
class ParsedProp:
    """A prop with its remaining fields kept as raw constraints."""

    component_metadata: ParsedComponentMetadata = field(
        default_factory=ParsedComponentMetadata
    )
    prop_metadata: ParsedPropMetadata = field(default_factory=ParsedPropMetadata)
    constraints: dict[str, Any] = field(default_factory=dict)
    context: CompilationContext = field(default_factory=CompilationContext)


def parse_prop(scanned: ScannedComponent, is_root: bool) -> ParsedProp:
    """Parse a scanned prop; raises ParseError on a missing or unknown type."""
    fields = scanned.fields
    try:
        metadata = parse_component_metadata(fields, ComponentType.PROP, is_root)
    except ParseError as exc:
        raise ParseError(f"error parsing component metadata: {exc}") from exc

    try:
        type_text = get_string_from_map(fields, KEY_TYPE)
    except ParseError as exc:
        raise ParseError(f"error finding {KEY_TYPE}: {exc}") from exc
    prop_type = PROP_TYPES.match(type_text)
    if prop_type == PropType.UNDEFINED:
        raise ParseError(f"invalid prop type {type_text!r}")

    is_array: bool | None = None
    if KEY_ARRAY in fields:
        value = fields[KEY_ARRAY]
        if not isinstance(value, bool):
            raise ParseError("invalid format for array, expected bool")
        is_array = value

    constraints = {k: v for k, v in fields.items() if k not in _METADATA_KEYS}

    return ParsedProp(
        component_metadata=metadata,
        prop_metadata=ParsedPropMetadata(prop_type=prop_type, is_array=is_array),
        constraints=constraints,
        context=CompilationContext(
            component_type=ComponentType.PROP,
            name=metadata.name,
            is_root=is_root,
        ),
    )


def parse_props(scanned_props: Mapping[str, Any]) -> dict[str, ParsedProp]:
    """Parse a mapping of prop name to prop fields into child props."""
    parsed: dict[str, ParsedProp] = {}
    for key, value in scanned_props.items():
        if not isinstance(value, Mapping):
            raise ParseError(f"invalid type for prop {key}: {value!r}")
        fields = dict(value)
        fields[KEY_NAME] = key
        try:
            parsed[key] = parse_prop(
                ScannedComponent(component_type=ComponentType.PROP, fields=fields),
                False,
            )
        except ParseError as exc:
            raise ParseError(f"error parsing prop {key}: {exc}") from exc
    return parsed