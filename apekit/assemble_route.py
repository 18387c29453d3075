"""Assembly of routes with their requests and responses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace

from apekit.assemble_body import assemble_message_body
from apekit.assemble_common import assemble_component_metadata
from apekit.components import (
    MessageBody,
    Request,
    Response,
    ResponsesMap,
    Route,
    RouteMetadata,
)
from apekit.constraints import AssemblyError
from apekit.parse_common import ParsedComponentMetadata
from apekit.parse_route import (
    ParsedRequest,
    ParsedResponse,
    ParsedRoute,
    ParsedRouteMetadata,
)


def _with_parent(parsed, parent_id: str):
    return replace(parsed, context=replace(parsed.context, parent_id=parent_id))


def assemble_request(parsed: ParsedRequest) -> Request:
    """Assemble a request; its body, if any, becomes its child."""
    try:
        metadata = assemble_component_metadata(
            ParsedComponentMetadata(), parsed.context
        )
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling component metadata: {exc}") from exc

    headers = dict(parsed.headers or {})

    body = MessageBody()
    if parsed.body is not None:
        try:
            body = assemble_message_body(
                _with_parent(parsed.body, metadata.component_id)
            )
        except AssemblyError as exc:
            raise AssemblyError(f"error assembling message body: {exc}") from exc

    return Request(metadata=metadata, headers=headers, body=body)


def assemble_responses(
    parsed: Mapping[str, ParsedResponse], route_id: str
) -> ResponsesMap:
    """Assemble a route's responses, placing them under ``<route_id>.responses``."""
    parent_id = f"{route_id}.responses"
    responses: ResponsesMap = {}
    for key, value in parsed.items():
        try:
            responses[key] = assemble_response(_with_parent(value, parent_id))
        except AssemblyError as exc:
            raise AssemblyError(f"error assembling response {key}: {exc}") from exc
    return responses


def assemble_response(parsed: ParsedResponse) -> Response:
    """Assemble a single response; a body and a status code are required."""
    try:
        metadata = assemble_component_metadata(parsed.metadata, parsed.context)
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling component metadata: {exc}") from exc

    if parsed.body is None:
        raise AssemblyError(f"no body given for response {metadata.component_id}")
    try:
        body = assemble_message_body(_with_parent(parsed.body, metadata.component_id))
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling message body: {exc}") from exc

    if parsed.status_code is None:
        raise AssemblyError(
            f"no status code given for response {metadata.component_id}"
        )

    return Response(metadata=metadata, status_code=parsed.status_code, body=body)


def _assemble_route_metadata(metadata: ParsedRouteMetadata) -> RouteMetadata:
    if metadata.url == "":
        raise AssemblyError("no url given")
    return RouteMetadata(url=metadata.url, method=metadata.method or "")


def assemble_route(parsed: ParsedRoute) -> Route:
    """Assemble a route with its request and responses."""
    try:
        metadata = assemble_component_metadata(
            parsed.component_metadata, parsed.context
        )
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling component metadata: {exc}") from exc

    try:
        route_metadata = _assemble_route_metadata(parsed.route_metadata)
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling route metadata: {exc}") from exc

    request = Request()
    if parsed.request is not None:
        try:
            request = assemble_request(
                _with_parent(parsed.request, metadata.component_id)
            )
        except AssemblyError as exc:
            raise AssemblyError(f"error assembling request: {exc}") from exc

    if parsed.responses is None:
        raise AssemblyError(f"no responses given for route {metadata.component_id}")
    try:
        responses = assemble_responses(parsed.responses, metadata.component_id)
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling responses: {exc}") from exc

    return Route(
        metadata=metadata,
        route_metadata=route_metadata,
        request=request,
        responses=responses,
    )