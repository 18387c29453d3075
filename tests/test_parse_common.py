import pytest

from apekit.components import ComponentType
from apekit.parse_common import (
    ParseError,
    get_string_from_map,
    parse_component_metadata,
)


def test_get_string_returns_value():
    assert get_string_from_map({"name": "Username"}, "name") == "Username"


def test_get_string_missing_key():
    with pytest.raises(ParseError, match="missing name"):
        get_string_from_map({}, "name")


def test_get_string_wrong_type():
    with pytest.raises(ParseError, match="invalid type for name"):
        get_string_from_map({"name": 3}, "name")


def test_metadata_uses_given_name():
    meta = parse_component_metadata({"name": "Todo"}, ComponentType.OBJECT, True)
    assert meta.name == "Todo"
    assert meta.category is None
    assert meta.description is None


def test_metadata_reads_category_and_description():
    fields = {"name": "Todo", "category": "core", "description": "a todo item"}
    meta = parse_component_metadata(fields, ComponentType.OBJECT, True)
    assert meta.category == "core"
    assert meta.description == "a todo item"


def test_metadata_ignores_non_string_category():
    fields = {"name": "Todo", "category": 5, "description": ["x"]}
    meta = parse_component_metadata(fields, ComponentType.OBJECT, True)
    assert meta.category is None
    assert meta.description is None


def test_root_without_name_fails():
    with pytest.raises(ParseError, match="name missing"):
        parse_component_metadata({}, ComponentType.OBJECT, True)


@pytest.mark.parametrize("ctype", [ComponentType.PROP, ComponentType.RESPONSE])
def test_child_of_required_type_without_name_fails(ctype):
    with pytest.raises(ParseError, match="required for type"):
        parse_component_metadata({}, ctype, False)


@pytest.mark.parametrize(
    "ctype, expected",
    [
        (ComponentType.OBJECT, "object"),
        (ComponentType.MESSAGE_BODY, "body"),
        (ComponentType.REQUEST, "request"),
    ],
)
def test_child_gets_default_name(ctype, expected):
    meta = parse_component_metadata({}, ctype, False)
    assert meta.name == expected


def test_non_string_name_fails():
    with pytest.raises(ParseError, match="error parsing name"):
        parse_component_metadata({"name": 1}, ComponentType.OBJECT, False)