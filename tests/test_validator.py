from dataclasses import dataclass, field

import pytest

from apekit.components import (
    ComponentMetadata,
    ComponentType,
    MessageBody,
    Object,
    Prop,
    PropConstraintsInt,
    PropConstraintsText,
    PropMetadata,
    Request,
    Response,
    Route,
)
from apekit.validator import ValidationError, Validator


def _meta(ctype, cid, name, is_root=True):
    return ComponentMetadata(
        component_type=ctype, component_id=cid, name=name, is_root=is_root
    )


def _prop(name, prop_type="INT", constraints=None):
    return Prop(
        metadata=_meta(ComponentType.PROP, f"objects.TEST.{name}", name, False),
        prop_metadata=PropMetadata(prop_type=prop_type),
        constraints=constraints,
    )


def _body():
    return MessageBody(
        metadata=_meta(ComponentType.MESSAGE_BODY, "routes.TEST.body", "body", False)
    )


def test_interface_cases_from_source():
    validator = Validator()
    invalid_obj = Object(metadata=ComponentMetadata(), props={})
    with pytest.raises(ValidationError):
        validator.validate_component(invalid_obj)
    valid_obj = Object(metadata=_meta(ComponentType.OBJECT, "objects.TEST", "TEST"))
    assert validator.validate_component(valid_obj) is None


def test_missing_id_reported():
    obj = Object(metadata=_meta(ComponentType.OBJECT, "", "TEST"))
    with pytest.raises(ValidationError, match="component id empty"):
        Validator().validate_component(obj)


def test_missing_name_reported():
    obj = Object(metadata=_meta(ComponentType.OBJECT, "objects.TEST", "  "))
    with pytest.raises(ValidationError, match="name empty"):
        Validator().validate_component(obj)


def test_missing_type_reported():
    obj = Object(metadata=_meta("", "objects.TEST", "TEST"))
    with pytest.raises(ValidationError, match="missing component type"):
        Validator().validate_component(obj)


def test_wrong_component_type_for_class():
    obj = Object(metadata=_meta(ComponentType.PROP, "objects.TEST", "TEST"))
    with pytest.raises(ValidationError, match="incorrect type for objects.TEST"):
        Validator().validate_component(obj)


def test_unknown_class_is_rejected():
    @dataclass
    class Stranger:
        metadata: ComponentMetadata = field(
            default_factory=lambda: _meta(ComponentType.OBJECT, "x.y", "y")
        )

    with pytest.raises(ValidationError, match="unrecognized component type"):
        Validator().validate_component(Stranger())


def test_object_without_metadata_is_rejected():
    with pytest.raises(ValidationError, match="unrecognized component type"):
        Validator().validate_component(object())


def test_invalid_prop_type():
    with pytest.raises(ValidationError, match="invalid prop type"):
        Validator().validate_component(_prop("username", prop_type="nonsense"))


def test_prop_type_match_ignores_case():
    validator = Validator()
    with pytest.raises(ValidationError, match="invalid prop type"):
        validator.validate_component(_prop("age", prop_type=""))
    assert validator.validate_component(
        _prop("age", prop_type=" int ", constraints=PropConstraintsInt(min=0))
    ) is None


def test_constraint_mismatch():
    prop = _prop("username", prop_type="INT", constraints=PropConstraintsText())
    with pytest.raises(ValidationError, match="incorrect prop type") as info:
        Validator().validate_component(prop)
    assert "want TEXT, got INT" in str(info.value)


def test_object_prop_name_mismatch():
    obj = Object(
        metadata=_meta(ComponentType.OBJECT, "objects.TEST", "TEST"),
        props={"username": _prop("email")},
    )
    with pytest.raises(ValidationError, match="name mismatch"):
        Validator().validate_component(obj)


def test_object_with_invalid_nested_prop():
    obj = Object(
        metadata=_meta(ComponentType.OBJECT, "objects.TEST", "TEST"),
        props={"username": _prop("username", prop_type="bad")},
    )
    with pytest.raises(ValidationError, match="error validating props"):
        Validator().validate_component(obj)


def test_request_body_must_be_valid():
    validator = Validator()
    req = Request(metadata=_meta(ComponentType.REQUEST, "routes.TEST.request", "request", False))
    with pytest.raises(ValidationError, match="error validating body on request"):
        validator.validate_component(req)
    req.body = _body()
    assert validator.validate_component(req) is None


def test_response_without_body_fails():
    resp = Response(
        metadata=_meta(ComponentType.RESPONSE, "routes.TEST.responses.ok", "ok", False)
    )
    with pytest.raises(ValidationError, match="error validating body on response"):
        Validator().validate_component(resp)


def test_response_with_body_passes_and_route_passes():
    validator = Validator()
    resp = Response(
        metadata=_meta(ComponentType.RESPONSE, "routes.TEST.responses.ok", "ok", False),
        body=_body(),
    )
    route = Route(metadata=_meta(ComponentType.ROUTE, "routes.TEST", "TEST"))
    with pytest.raises(ValidationError):
        validator.validate_component(Route(metadata=_meta(ComponentType.ROUTE, "", "TEST")))
    assert validator.validate_component(resp) is None
    assert validator.validate_component(route) is None