from dataclasses import replace

import pytest

from apekit.assemble_route import (
    assemble_request,
    assemble_response,
    assemble_responses,
    assemble_route,
)
from apekit.components import ComponentType, MessageBodyType
from apekit.constraints import AssemblyError
from apekit.parse_route import (
    ParsedRoute,
    ParsedRouteMetadata,
    parse_request,
    parse_responses,
    parse_route,
)
from apekit.context import CompilationContext
from apekit.scanner import ScannedComponent

HEADERS = {"Content-Type": "application/json"}


def _fields():
    return {
        "name": "Login",
        "url": "/login",
        "method": "POST",
        "request": {
            "headers": dict(HEADERS),
            "body": {"email": {"type": "text"}},
        },
        "responses": {"ok": {"status_code": 200, "body": "objects.Session"}},
    }


def _route(fields=None):
    return parse_route(ScannedComponent(ComponentType.ROUTE, fields or _fields()), True)


def test_full_route():
    route = assemble_route(_route())
    route_id = route.metadata.component_id
    assert route_id == "routes.Login"
    assert route.route_metadata.url == "/login"
    assert route.route_metadata.method == "POST"

    request = route.request
    assert request.metadata.parent_id == route_id
    assert request.metadata.component_type == ComponentType.REQUEST
    assert request.headers == HEADERS
    assert request.body.body_type == MessageBodyType.PROPS
    assert request.body.metadata.parent_id == request.metadata.component_id
    assert set(request.body.props) == {"email"}

    response = route.responses["ok"]
    assert response.status_code == 200
    assert response.metadata.parent_id == f"{route_id}.responses"
    assert response.metadata.name == "ok"
    assert response.body.body_type == MessageBodyType.REF
    assert response.body.ref == "objects.Session"


def test_request_without_body_has_empty_body():
    parsed = parse_request({"request": {}}, False)
    request = assemble_request(
        replace(parsed, context=replace(parsed.context, parent_id="routes.Ping"))
    )
    assert request.body.body_type == ""
    assert request.headers == {}
    assert request.metadata.component_id.startswith("routes.Ping.")


def test_assemble_responses_places_under_route():
    parsed = parse_responses({"created": {"status_code": 201, "body": "objects.User"}})
    responses = assemble_responses(parsed, "routes.Signup")
    assert responses["created"].metadata.parent_id == "routes.Signup.responses"
    assert responses["created"].status_code == 201


def test_response_without_body_raises():
    parsed = parse_responses({"gone": {"status_code": 410}})
    with pytest.raises(AssemblyError):
        assemble_responses(parsed, "routes.Old")


def test_response_without_status_code_raises():
    parsed = parse_responses({"ok": {"body": "objects.User"}})["ok"]
    parsed = replace(parsed, context=replace(parsed.context, parent_id="routes.X.responses"))
    with pytest.raises(AssemblyError):
        assemble_response(parsed)


def test_route_without_responses_raises():
    fields = _fields()
    del fields["responses"]
    with pytest.raises(AssemblyError):
        assemble_route(_route(fields))


def test_route_without_url_raises():
    parsed = ParsedRoute(
        route_metadata=ParsedRouteMetadata(url=""),
        responses={},
        context=CompilationContext(ComponentType.ROUTE, "Login", True, None),
    )
    with pytest.raises(AssemblyError, match="no url given"):
        assemble_route(parsed)


def test_route_with_missing_method_defaults_to_empty():
    parsed = ParsedRoute(
        route_metadata=ParsedRouteMetadata(url="/ping", method=None),
        responses={},
        context=CompilationContext(ComponentType.ROUTE, "Ping", True, None),
    )
    route = assemble_route(parsed)
    assert route.route_metadata.method == ""
    assert route.responses == {}
    assert route.request.metadata.component_id == ""