import pytest

from apekit.components import ComponentType, PropType
from apekit.parse_common import ParseError
from apekit.parser import Parser
from apekit.scanner import ScannedComponent


@pytest.fixture
def parser():
    return Parser()


def test_parse_prop(parser):
    scanned = ScannedComponent(
        component_type=ComponentType.PROP,
        fields={"name": "Username", "type": "text", "min_length": 3},
    )
    prop = parser.parse_prop(scanned, True)
    assert prop.prop_metadata.prop_type == PropType.TEXT
    assert prop.constraints == {"min_length": 3}
    assert prop.component_metadata.name == "Username"


def test_parse_prop_unknown_type(parser):
    scanned = ScannedComponent(
        component_type=ComponentType.PROP,
        fields={"name": "Username", "type": "nonsense"},
    )
    with pytest.raises(ParseError):
        parser.parse_prop(scanned, True)


def test_parse_object(parser):
    scanned = ScannedComponent(
        component_type=ComponentType.OBJECT,
        fields={"name": "User", "props": {"age": {"type": "uint"}}},
    )
    obj = parser.parse_object(scanned, True)
    assert obj.component_metadata.name == "User"
    assert obj.props["age"].prop_metadata.prop_type == PropType.UINT
    assert obj.context.component_type == ComponentType.OBJECT


def test_parse_route(parser):
    scanned = ScannedComponent(
        component_type=ComponentType.ROUTE,
        fields={"name": "GetUser", "url": "/user", "method": "GET", "request": {}},
    )
    route = parser.parse_route(scanned, True)
    assert route.route_metadata.url == "/user"
    assert route.route_metadata.method == "GET"
    assert route.responses is None


def test_parse_route_error(parser):
    scanned = ScannedComponent(
        component_type=ComponentType.ROUTE,
        fields={"name": "GetUser", "request": {}},
    )
    with pytest.raises(ParseError, match="url not found"):
        parser.parse_route(scanned, True)