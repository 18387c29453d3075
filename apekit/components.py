"""Component model: props, objects, routes, requests, responses and message bodies."""

from __future__ import annotations

from dataclasses import MISSING, dataclass, field, fields, is_dataclass
from enum import Enum, StrEnum
from typing import Any, Union

from apekit.enums import EnumMatcher


class ComponentType(StrEnum):
    PROP = "PROP"
    OBJECT = "OBJECT"
    ROUTE = "ROUTE"
    REQUEST = "REQUEST"
    RESPONSE = "RESPONSE"
    MESSAGE_BODY = "MESSAGE_BODY"
    UNDEFINED = "UNDEFINED"


class PropType(StrEnum):
    UNDEFINED = "UNDEFINED"
    INT = "INT"
    UINT = "UINT"
    FLOAT = "FLOAT"
    TEXT = "TEXT"
    BOOL = "BOOL"
    BLOB = "BLOB"
    MAP = "MAP"
    REF = "REF"
    COMPONENT = "COMPONENT"


class PropConstraintType(StrEnum):
    UNDEFINED = "UNDEFINED"
    INT = "INT"
    UINT = "UINT"
    FLOAT = "FLOAT"
    TEXT = "TEXT"
    BOOL = "BOOL"
    BLOB = "BLOB"
    MAP = "MAP"
    REF = "REF"


class MessageBodyType(StrEnum):
    REF = "REF"
    PROPS = "PROPS"


class HttpMethod(StrEnum):
    GET = "GET"
    POST = "POST"


COMPONENT_TYPES: EnumMatcher[ComponentType, type[ComponentType]] = EnumMatcher(
    type_list=ComponentType,
    match_map={member.value.lower(): member for member in ComponentType},
)

PROP_TYPES: EnumMatcher[PropType, type[PropType]] = EnumMatcher(
    type_list=PropType,
    match_map={
        member.value.lower(): member
        for member in PropType
        if member is not PropType.COMPONENT
    },
)

_PROP_CONSTRAINT_TYPE_KEYS = {
    member.value.lower(): member for member in PropConstraintType
}

_TYPE_NAMES = {
    ComponentType.PROP: "prop",
    ComponentType.OBJECT: "object",
    ComponentType.ROUTE: "route",
    ComponentType.MESSAGE_BODY: "body",
    ComponentType.REQUEST: "request",
    ComponentType.RESPONSE: "response",
}

_TYPE_PLURAL_NAMES = {
    ComponentType.PROP: "props",
    ComponentType.OBJECT: "objects",
    ComponentType.ROUTE: "routes",
    ComponentType.MESSAGE_BODY: "bodies",
    ComponentType.REQUEST: "requests",
    ComponentType.RESPONSE: "responses",
}


def _f(key: str, default: Any = MISSING, factory: Any = MISSING,
       omit: str | None = None, flatten: bool = False) -> Any:
    """Declare a field with its JSON key and omission rule.

    ``omit`` is ``"none"`` to drop the key when the value is None, or
    ``"empty"`` to drop it when the value is None or empty.
    """
    meta = {"json": key, "omit": omit, "flatten": flatten}
    if factory is not MISSING:
        return field(default_factory=factory, metadata=meta)
    return field(default=default, metadata=meta)


@dataclass
class ComponentMetadata:
    component_type: str = _f("component_type", "")
    component_id: str = _f("component_id", "")
    name: str = _f("name", "")
    is_root: bool = _f("is_root", False)
    parent_id: str | None = _f("parent_id", None, omit="none")
    category: str | None = _f("category", None, omit="none")
    description: str | None = _f("description", None, omit="none")


@dataclass
class PropConstraintsRef:
    reference: str = _f("target_id", "")
    constraint_type: str = _f("PropConstraintType", PropConstraintType.REF)


@dataclass
class PropConstraintsInt:
    size: int | None = _f("size", None, omit="none")
    min: int | None = _f("min", None, omit="none")
    max: int | None = _f("max", None, omit="none")
    constraint_type: str = _f("PropConstraintType", PropConstraintType.INT)


@dataclass
class PropConstraintsUint:
    size: int | None = _f("size", None, omit="none")
    min: int | None = _f("min", None, omit="none")
    max: int | None = _f("max", None, omit="none")
    constraint_type: str = _f("PropConstraintType", PropConstraintType.UINT)


@dataclass
class PropConstraintsFloat:
    precision: str | None = _f("precision", None, omit="none")
    min: float | None = _f("min", None, omit="none")
    max: float | None = _f("max", None, omit="none")
    constraint_type: str = _f("PropConstraintType", PropConstraintType.FLOAT)


@dataclass
class PropConstraintsText:
    min_length: int | None = _f("min_length", None, omit="none")
    max_length: int | None = _f("max_length", None, omit="none")
    regex: str | None = _f("regex", None, omit="none")
    alnum: bool | None = _f("alnum", None, omit="none")
    alpha: bool | None = _f("alpha", None, omit="none")
    num: bool | None = _f("num", None, omit="none")
    constraint_type: str = _f("PropConstraintType", PropConstraintType.TEXT)


@dataclass
class PropConstraintsBlob:
    min_size: int | None = _f("min_size", None, omit="none")
    max_size: int | None = _f("max_size", None, omit="none")
    constraint_type: str = _f("PropConstraintType", PropConstraintType.BLOB)


@dataclass
class PropConstraintsBool:
    constraint_type: str = _f("PropConstraintType", PropConstraintType.BOOL)


PropConstraints = Union[
    PropConstraintsRef,
    PropConstraintsInt,
    PropConstraintsUint,
    PropConstraintsFloat,
    PropConstraintsText,
    PropConstraintsBlob,
    PropConstraintsBool,
]


@dataclass
class PropMetadata:
    prop_type: str = _f("PropType", "")
    is_array: bool = _f("IsArray", False)


@dataclass
class Prop:
    metadata: ComponentMetadata = _f("", factory=ComponentMetadata, flatten=True)
    prop_metadata: PropMetadata = _f("PropMetadata", factory=PropMetadata)
    constraints: PropConstraints | None = _f("Constraints", None)


PropsMap = dict[str, Prop]


@dataclass
class Object:
    metadata: ComponentMetadata = _f("", factory=ComponentMetadata, flatten=True)
    props: PropsMap = _f("props", factory=dict, omit="empty")


@dataclass
class MessageBody:
    metadata: ComponentMetadata = _f("", factory=ComponentMetadata, flatten=True)
    body_type: str = _f("BodyType", "")
    ref: str = _f("Ref", "")
    props: PropsMap = _f("Props", factory=dict)


@dataclass
class Request:
    metadata: ComponentMetadata = _f("", factory=ComponentMetadata, flatten=True)
    headers: dict[str, str] = _f("Headers", factory=dict)
    body: MessageBody = _f("Body", factory=MessageBody)


@dataclass
class Response:
    metadata: ComponentMetadata = _f("", factory=ComponentMetadata, flatten=True)
    name: str = _f("name", "")
    status_code: int = _f("status_code", 0)
    body: MessageBody | None = _f("body", None)


ResponsesMap = dict[str, Response]


@dataclass
class RouteMetadata:
    url: str = _f("url", "")
    method: str = _f("method", "")


@dataclass
class Route:
    metadata: ComponentMetadata = _f("", factory=ComponentMetadata, flatten=True)
    route_metadata: RouteMetadata = _f("RouteMetadata", factory=RouteMetadata)
    request: Request = _f("request", factory=Request)
    responses: ResponsesMap = _f("responses", factory=dict)


Component = Union[Prop, Object, Route, MessageBody, Request, Response]
Components = dict[str, Component]


@dataclass
class Reference:
    target_id: str = _f("TargetId", "")
    is_linked: bool = _f("IsLinked", False)
    target: Any = _f("Target", None)


def generate_component_id(meta: ComponentMetadata) -> str:
    """Build the dotted identifier of a component from its metadata.

    Raises ValueError when the metadata lacks what the identifier needs.
    """
    if not meta.component_type:
        raise ValueError("no component type given")

    parts: list[str] = []
    if meta.is_root:
        if meta.name.strip() == "":
            raise ValueError("no name given for root component")
        if meta.category is not None:
            parts.append(meta.category)
        plural = _TYPE_PLURAL_NAMES.get(meta.component_type)
        if plural is None:
            raise ValueError(f"invalid type {meta.component_type}")
        parts.append(plural)
        parts.append(meta.name)
    else:
        if meta.parent_id is None or meta.parent_id.lower() == "":
            raise ValueError("no parentId given for child")
        parts.append(meta.parent_id)
        if meta.name == "":
            parts.append(_TYPE_NAMES.get(meta.component_type, ""))
        else:
            parts.append(meta.name)

    return ".".join(parts)


def _omitted(value: Any, rule: str | None) -> bool:
    if rule is None:
        return False
    if value is None:
        return True
    if rule == "empty" and isinstance(value, (str, dict, list, tuple)):
        return len(value) == 0
    return False


def to_jsonable(value: Any) -> Any:
    """Convert components into plain JSON-compatible structures.

    Metadata is flattened into the enclosing component; a field of the
    component itself wins over a metadata key of the same name.
    """
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for f in fields(value):
            item = getattr(value, f.name)
            info = f.metadata
            if info.get("flatten"):
                out.update(to_jsonable(item))
                continue
            if _omitted(item, info.get("omit")):
                continue
            out[info.get("json", f.name)] = to_jsonable(item)
        return out
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value