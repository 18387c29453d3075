from dataclasses import replace

import pytest

from apekit.assemble_body import assemble_message_body
from apekit.components import ComponentType, MessageBodyType
from apekit.constraints import AssemblyError
from apekit.context import CompilationContext
from apekit.parse_body import ParsedMessageBody, parse_message_body

PARENT = "routes.Login.request"


def _with_parent(body, parent=PARENT):
    return replace(body, context=replace(body.context, parent_id=parent))


def test_ref_body():
    parsed = _with_parent(parse_message_body({"body": "objects.User"}, False))
    body = assemble_message_body(parsed)
    assert body.body_type == MessageBodyType.REF
    assert body.ref == "objects.User"
    assert body.props == {}
    assert body.metadata.component_id == ""


def test_props_body():
    parsed = _with_parent(parse_message_body({"body": {"email": {"type": "text"}}}, False))
    body = assemble_message_body(parsed)
    assert body.body_type == MessageBodyType.PROPS
    assert body.metadata.parent_id == PARENT
    assert body.metadata.component_id.startswith(PARENT + ".")
    assert body.metadata.component_type == ComponentType.MESSAGE_BODY
    assert set(body.props) == {"email"}
    assert body.props["email"].metadata.parent_id == body.metadata.component_id


def _context():
    return CompilationContext(ComponentType.MESSAGE_BODY, "body", False, PARENT)


def test_ref_without_content_raises():
    with pytest.raises(AssemblyError):
        assemble_message_body(
            ParsedMessageBody(body_type=MessageBodyType.REF, context=_context())
        )


def test_props_without_content_raises():
    with pytest.raises(AssemblyError):
        assemble_message_body(
            ParsedMessageBody(body_type=MessageBodyType.PROPS, context=_context())
        )


def test_invalid_body_type_raises():
    with pytest.raises(AssemblyError, match="invalid message body type"):
        assemble_message_body(ParsedMessageBody(body_type="XML", context=_context()))


def test_missing_parent_raises():
    parsed = parse_message_body({"body": "objects.User"}, False)
    with pytest.raises(AssemblyError):
        assemble_message_body(parsed)


def test_invalid_prop_in_body_raises():
    parsed = _with_parent(parse_message_body({"body": {"flag": {"type": "bool"}}}, False))
    with pytest.raises(AssemblyError):
        assemble_message_body(parsed)