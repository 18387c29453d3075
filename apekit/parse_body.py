"""Parsing of message bodies for requests and responses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from apekit.components import ComponentType, MessageBodyType
from apekit.context import CompilationContext
from apekit.parse_common import (
    KEY_MESSAGE_BODY,
    ParsedComponentMetadata,
    ParseError,
    parse_component_metadata,
)
from apekit.parse_props import ParsedProp, parse_props


@dataclass
class ParsedMessageBody:
    """A message body given either as a reference or as inline props."""

    metadata: ParsedComponentMetadata = field(default_factory=ParsedComponentMetadata)
    body_type: str = ""
    ref: str | None = None
    props: dict[str, ParsedProp] | None = None
    context: CompilationContext = field(default_factory=CompilationContext)


def parse_message_body(
    raw_body_map: Mapping[str, Any], is_root: bool
) -> ParsedMessageBody | None:
    """Parse the ``body`` entry of a request or response.

    Returns None when there is no body. A string body is a reference; a
    table body holds props.
    """
    try:
        metadata = parse_component_metadata(
            raw_body_map, ComponentType.MESSAGE_BODY, is_root
        )
    except ParseError as exc:
        raise ParseError(f"error parsing component metadata: {exc}") from exc

    if KEY_MESSAGE_BODY not in raw_body_map:
        return None
    raw_body = raw_body_map[KEY_MESSAGE_BODY]

    context = CompilationContext(
        component_type=ComponentType.MESSAGE_BODY,
        name=metadata.name,
        is_root=is_root,
    )

    if isinstance(raw_body, str):
        return ParsedMessageBody(
            metadata=metadata,
            body_type=MessageBodyType.REF,
            ref=raw_body,
            context=context,
        )

    if not isinstance(raw_body, Mapping):
        raise ParseError(f"invalid body format: {raw_body!r}")

    return ParsedMessageBody(
        metadata=metadata,
        body_type=MessageBodyType.PROPS,
        props=parse_props(raw_body),
        context=context,
    )