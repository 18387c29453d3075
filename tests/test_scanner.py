import pytest

from apekit.components import ComponentType
from apekit.preprocessor import Preprocessor, RawComponent
from apekit.scanner import Scanner


def test_scans_flat_fields():
    raw = Preprocessor().file(
        "example/props/Username.toml",
        b'name = "Username"\ntype = "text"\nmin_length = 3\nalnum = true\n',
    )
    scanned = Scanner().scan_component(raw)
    assert scanned.component_type == ComponentType.PROP
    assert scanned.fields == {
        "name": "Username",
        "type": "text",
        "min_length": 3,
        "alnum": True,
    }


def test_scans_nested_tables():
    data = b'name = "Todo"\n[props.title]\ntype = "text"\n[props.done]\ntype = "bool"\n'
    scanned = Scanner().scan_component(
        RawComponent(component_type=ComponentType.OBJECT, data=data)
    )
    assert scanned.fields["props"] == {"title": {"type": "text"}, "done": {"type": "bool"}}
    assert isinstance(scanned.fields["props"]["title"], dict)


def test_empty_document_gives_no_fields():
    scanned = Scanner().scan_component(RawComponent(component_type=ComponentType.ROUTE))
    assert scanned.fields == {}
    assert scanned.component_type == ComponentType.ROUTE


@pytest.mark.parametrize("data", [b"name = ", b"\xff\xfe = 1"])
def test_invalid_contents_raise(data):
    with pytest.raises(ValueError, match="invalid TOML"):
        Scanner().scan_component(RawComponent(component_type=ComponentType.PROP, data=data))