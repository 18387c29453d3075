"""Parsing of route components with their request and responses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from apekit.components import ComponentType
from apekit.context import CompilationContext
from apekit.parse_body import ParsedMessageBody, parse_message_body
from apekit.parse_common import (
    KEY_HEADERS,
    KEY_NAME,
    KEY_REQUEST,
    KEY_RESPONSES,
    KEY_STATUS_CODE,
    ParsedComponentMetadata,
    ParseError,
    get_string_from_map,
    parse_component_metadata,
)
from apekit.scanner import ScannedComponent

KEY_URL = "url"
KEY_METHOD = "method"


@dataclass
class ParsedRouteMetadata:
    """The route's URL and HTTP method as written."""

    url: str = ""
    method: str | None = None


@dataclass
class ParsedRequest:
    """A route's request: optional headers and an optional body."""

    component_metadata: ParsedComponentMetadata = field(
        default_factory=ParsedComponentMetadata
    )
    headers: dict[str, str] | None = None
    body: ParsedMessageBody | None = None
    context: CompilationContext = field(default_factory=CompilationContext)


@dataclass
class ParsedResponse:
    """A single named response of a route."""

    metadata: ParsedComponentMetadata = field(default_factory=ParsedComponentMetadata)
    status_code: int | None = None
    body: ParsedMessageBody | None = None
    context: CompilationContext = field(default_factory=CompilationContext)


@dataclass
class ParsedRoute:
    """A route with its metadata, request and responses."""

    component_metadata: ParsedComponentMetadata = field(
        default_factory=ParsedComponentMetadata
    )
    route_metadata: ParsedRouteMetadata = field(default_factory=ParsedRouteMetadata)
    responses: dict[str, ParsedResponse] | None = None
    request: ParsedRequest | None = None
    context: CompilationContext = field(default_factory=CompilationContext)


def _parse_route_metadata(fields: Mapping[str, Any]) -> ParsedRouteMetadata:
    try:
        url = get_string_from_map(fields, KEY_URL)
    except ParseError as exc:
        raise ParseError("url not found") from exc
    try:
        method = get_string_from_map(fields, KEY_METHOD)
    except ParseError:
        method = ""
    return ParsedRouteMetadata(url=url, method=method)


def _parse_headers(request: Mapping[str, Any]) -> dict[str, str] | None:
    if KEY_HEADERS not in request:
        return None
    raw_headers = request[KEY_HEADERS]
    if not isinstance(raw_headers, Mapping):
        raise ParseError(f"incorrect headers format: {raw_headers!r}")
    headers: dict[str, str] = {}
    for key, value in raw_headers.items():
        if not isinstance(value, str):
            raise ParseError(f"invalid header value for {key}: {value!r}")
        headers[key] = value
    return headers


def parse_request(route_fields: Mapping[str, Any], is_root: bool) -> ParsedRequest:
    """Parse the required ``request`` table of a route."""
    if KEY_REQUEST not in route_fields:
        raise ParseError("no request object found")
    req_map = route_fields[KEY_REQUEST]
    if not isinstance(req_map, Mapping):
        raise ParseError("invalid request format")

    try:
        metadata = parse_component_metadata(req_map, ComponentType.REQUEST, is_root)
    except ParseError as exc:
        raise ParseError(f"error parsing component metadata: {exc}") from exc

    try:
        headers = _parse_headers(req_map)
    except ParseError as exc:
        raise ParseError(f"error parsing headers: {exc}") from exc

    try:
        body = parse_message_body(req_map, False)
    except ParseError as exc:
        raise ParseError(f"error parsing message body: {exc}") from exc

    return ParsedRequest(
        component_metadata=metadata,
        headers=headers,
        body=body,
        context=CompilationContext(
            component_type=ComponentType.REQUEST,
            name=metadata.name,
            is_root=is_root,
        ),
    )


def parse_responses(raw_responses: Mapping[str, Any]) -> dict[str, ParsedResponse]:
    """Parse a table of responses, naming each after its key."""
    responses: dict[str, ParsedResponse] = {}
    for key, value in raw_responses.items():
        if not isinstance(value, Mapping):
            raise ParseError(f"invalid response format for {key}: {value!r}")
        fields = dict(value)
        fields[KEY_NAME] = key
        try:
            responses[key] = parse_response(fields, False)
        except ParseError as exc:
            raise ParseError(f"error parsing response {key}: {exc}") from exc
    return responses


def parse_response(raw_response: Mapping[str, Any], is_root: bool) -> ParsedResponse:
    """Parse a single response: its status code, metadata and body."""
    status_code: int | None = None
    if KEY_STATUS_CODE in raw_response:
        raw_code = raw_response[KEY_STATUS_CODE]
        if isinstance(raw_code, bool) or not isinstance(raw_code, int):
            raise ParseError(f"invalid status code format: {raw_code!r}")
        status_code = raw_code

    try:
        metadata = parse_component_metadata(
            raw_response, ComponentType.RESPONSE, is_root
        )
    except ParseError as exc:
        raise ParseError(f"error parsing component metadata: {exc}") from exc

    try:
        body = parse_message_body(raw_response, False)
    except ParseError as exc:
        raise ParseError(f"error parsing message body: {exc}") from exc

    return ParsedResponse(
        metadata=metadata,
        status_code=status_code,
        body=body,
        context=CompilationContext(
            component_type=ComponentType.RESPONSE,
            name=metadata.name,
            is_root=is_root,
        ),
    )


def parse_route(scanned: ScannedComponent, is_root: bool) -> ParsedRoute:
    """Parse a scanned route; a request is required, responses are optional."""
    fields = scanned.fields
    try:
        metadata = parse_component_metadata(fields, ComponentType.ROUTE, is_root)
    except ParseError as exc:
        raise ParseError(f"error parsing component metadata: {exc}") from exc

    try:
        route_metadata = _parse_route_metadata(fields)
    except ParseError as exc:
        raise ParseError(f"error parsing route metadata: {exc}") from exc

    try:
        request = parse_request(fields, False)
    except ParseError as exc:
        raise ParseError(f"error parsing request: {exc}") from exc

    responses: dict[str, ParsedResponse] | None = None
    if KEY_RESPONSES in fields:
        raw_responses = fields[KEY_RESPONSES]
        if not isinstance(raw_responses, Mapping):
            raise ParseError("invalid responses format")
        try:
            responses = parse_responses(raw_responses)
        except ParseError as exc:
            raise ParseError(f"error parsing responses: {exc}") from exc

    return ParsedRoute(
        component_metadata=metadata,
        route_metadata=route_metadata,
        responses=responses,
        request=request,
        context=CompilationContext(
            component_type=ComponentType.ROUTE,
            name=metadata.name,
            is_root=is_root,
        ),
    )