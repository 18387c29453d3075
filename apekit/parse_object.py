"""Parsing of object components."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from apekit.components import ComponentType
from apekit.context import CompilationContext
from apekit.parse_common import (
    KEY_PROPS,
    ParsedComponentMetadata,
    ParseError,
    parse_component_metadata,
)
from apekit.parse_props import ParsedProp, parse_props
from apekit.scanner import ScannedComponent


@dataclass
class ParsedObject:
    """An object with its parsed props."""

    component_metadata: ParsedComponentMetadata = field(
        default_factory=ParsedComponentMetadata
    )
    props: dict[str, ParsedProp] = field(default_factory=dict)
    context: CompilationContext = field(default_factory=CompilationContext)


def parse_object(scanned: ScannedComponent, is_root: bool) -> ParsedObject:
    """Parse a scanned object; its ``props`` table is optional."""
    fields = scanned.fields
    try:
        metadata = parse_component_metadata(fields, ComponentType.OBJECT, is_root)
    except ParseError as exc:
        raise ParseError(f"error parsing component metadata: {exc}") from exc

    props: dict[str, ParsedProp] = {}
    if KEY_PROPS in fields:
        raw_props = fields[KEY_PROPS]
        if not isinstance(raw_props, Mapping):
            raise ParseError(f"invalid type for Props: {raw_props!r}")
        props = parse_props(raw_props)

    return ParsedObject(
        component_metadata=metadata,
        props=props,
        context=CompilationContext(
            component_type=ComponentType.OBJECT,
            name=metadata.name,
            is_root=is_root,
        ),
    )