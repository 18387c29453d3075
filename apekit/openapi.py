"""Conversion of OpenAPI component schemas into props."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

import yaml

from apekit.components import (
    ComponentMetadata,
    Components,
    ComponentType,
    Prop,
    PropConstraints,
    PropConstraintsBlob,
    PropConstraintsBool,
    PropConstraintsFloat,
    PropConstraintsInt,
    PropConstraintsText,
    PropConstraintsUint,
    PropMetadata,
    PropType,
)
from apekit.enums import EnumMatcher

_UINT_MASK = (1 << 64) - 1
_COMPONENT_NAME = re.compile(r"^[a-zA-Z0-9._-]+$")
_VALID_TYPES = frozenset(
    {"string", "number", "integer", "boolean", "array", "object", "null"}
)


class OpenApiError(ValueError):
    """Raised when an OpenAPI document cannot be loaded or converted."""


class SchemaType(StrEnum):
    UNDEFINED = "UNDEFINED"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


SCHEMA_TYPES: EnumMatcher[SchemaType, type[SchemaType]] = EnumMatcher(
    type_list=SchemaType,
    match_map={
        member.value: member for member in SchemaType
        if member is not SchemaType.UNDEFINED
    },
)


def _format(schema: Mapping[str, Any]) -> str:
    return str(schema.get("format") or "").strip().lower()


def _schema_types(schema: Mapping[str, Any]) -> list[str]:
    raw = schema.get("type")
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, list):
        return [str(item) for item in raw]
    return [str(raw)]


def classify_schema(schema: Mapping[str, Any]) -> str:
    """Return the schema's first type, or the undefined marker if it is unknown.

    Raises OpenApiError when the schema has no type.
    """
    types = _schema_types(schema)
    if not types:
        raise OpenApiError(f"schema '{schema.get('title', '')}' missing type")
    return SCHEMA_TYPES.match(types[0].lower().strip())


def convert_integer_constraints(schema: Mapping[str, Any]) -> PropConstraints:
    """Build integer constraints; a non-negative minimum makes them unsigned."""
    maximum = schema.get("maximum")
    max_value = int(maximum) if maximum is not None else None
    size = {"int32": 32, "int64": 64}.get(_format(schema))

    minimum = schema.get("minimum")
    if minimum is None:
        return PropConstraintsInt(size=size, max=max_value)
    min_value = int(minimum)
    if min_value >= 0:
        return PropConstraintsUint(
            size=size,
            min=min_value,
            max=None if max_value is None else max_value & _UINT_MASK,
        )
    return PropConstraintsInt(size=size, min=min_value, max=max_value)


def convert_float_constraints(schema: Mapping[str, Any]) -> PropConstraintsFloat:
    """Build float constraints; ``float`` and ``double`` formats set the precision."""
    fmt = _format(schema)
    minimum = schema.get("minimum")
    maximum = schema.get("maximum")
    return PropConstraintsFloat(
        precision=fmt if fmt in ("float", "double") else None,
        min=float(minimum) if minimum is not None else None,
        max=float(maximum) if maximum is not None else None,
    )


def convert_text_constraints(schema: Mapping[str, Any]) -> PropConstraints:
    """Build text constraints, or blob constraints for the ``binary`` format.

    The maximum length is taken only when a non-zero minimum length is given.
    """
    if _format(schema) == "binary":
        return PropConstraintsBlob()

    min_length = int(schema.get("minLength") or 0)
    max_value: int | None = None
    if min_length != 0 and schema.get("maxLength") is not None:
        max_value = int(schema["maxLength"])
    return PropConstraintsText(
        min_length=min_length if min_length != 0 else None,
        max_length=max_value,
    )


def convert_prop(name: str, schema: Mapping[str, Any], schema_type: str) -> Prop:
    """Convert a scalar schema into a named prop."""
    prop = Prop(
        metadata=ComponentMetadata(component_type=ComponentType.PROP, name=name)
    )
    if schema_type == SchemaType.INTEGER:
        constraints = convert_integer_constraints(schema)
        is_uint = isinstance(constraints, PropConstraintsUint)
        prop.prop_metadata = PropMetadata(
            prop_type=PropType.UINT if is_uint else PropType.INT
        )
        prop.constraints = constraints
    elif schema_type == SchemaType.NUMBER:
        prop.prop_metadata = PropMetadata(prop_type=PropType.FLOAT)
        prop.constraints = convert_float_constraints(schema)
    elif schema_type == SchemaType.STRING:
        constraints = convert_text_constraints(schema)
        is_blob = isinstance(constraints, PropConstraintsBlob)
        prop.prop_metadata = PropMetadata(
            prop_type=PropType.BLOB if is_blob else PropType.TEXT
        )
        prop.constraints = constraints
    elif schema_type == SchemaType.BOOLEAN:
        prop.prop_metadata = PropMetadata(prop_type=PropType.BOOL)
        prop.constraints = PropConstraintsBool()
    return prop


def _convert_array(name: str, schema: Mapping[str, Any], schema_type: str) -> Prop:
    current = schema
    seen = {id(current)}
    while current.get("items") is not None:
        items = current["items"]
        if not isinstance(items, Mapping):
            raise OpenApiError(f"invalid items in array schema '{name}'")
        if id(items) in seen:
            raise OpenApiError(f"cyclic items in array schema '{name}'")
        seen.add(id(items))
        current = items
    return Prop()


_ROUTER: dict[str, Callable[[str, Mapping[str, Any], str], Prop]] = {
    SchemaType.INTEGER: convert_prop,
    SchemaType.NUMBER: convert_prop,
    SchemaType.STRING: convert_prop,
    SchemaType.BOOLEAN: convert_prop,
    SchemaType.ARRAY: _convert_array,
}


def unmarshal_schemas(schemas: Mapping[str, Any]) -> Components:
    """Convert resolved component schemas into components keyed by schema name."""
    comps: Components = {}
    for name, schema in schemas.items():
        if schema is None:
            raise OpenApiError("null schema")
        if not isinstance(schema, Mapping):
            raise OpenApiError(f"invalid schema '{name}'")
        try:
            schema_type = classify_schema(schema)
        except OpenApiError as exc:
            raise OpenApiError(f"error classifying schema '{name}': {exc}") from exc
        converter = _ROUTER.get(schema_type)
        if converter is None:
            raise OpenApiError(
                f"error converting schema '{name}': unsupported type {schema_type}"
            )
        try:
            comps[name] = converter(name, schema, schema_type)
        except OpenApiError as exc:
            raise OpenApiError(f"error converting schema '{name}': {exc}") from exc
    return comps


def _lookup(doc: Any, ref: str) -> Any:
    if not ref.startswith("#"):
        raise OpenApiError(f"unsupported reference {ref}")
    pointer = ref[1:]
    if pointer == "":
        return doc
    if not pointer.startswith("/"):
        raise OpenApiError(f"invalid reference {ref}")
    node = doc
    for raw_segment in pointer[1:].split("/"):
        segment = raw_segment.replace("~1", "/").replace("~0", "~")
        if isinstance(node, Mapping) and segment in node:
            node = node[segment]
        elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            raise OpenApiError(f"unresolved reference {ref}")
    return node


def _resolve(node: Any, doc: Any, cache: dict[str, dict[str, Any]]) -> Any:
    if isinstance(node, Mapping):
        ref = node.get("$ref")
        if isinstance(ref, str):
            if ref in cache:
                return cache[ref]
            result: dict[str, Any] = {}
            cache[ref] = result
            target = _resolve(_lookup(doc, ref), doc, cache)
            if not isinstance(target, Mapping):
                raise OpenApiError(f"reference {ref} does not point to a schema")
            result.update(target)
            return result
        return {key: _resolve(value, doc, cache) for key, value in node.items()}
    if isinstance(node, list):
        return [_resolve(item, doc, cache) for item in node]
    return node


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_schema(schema: Any, where: str, seen: set[int]) -> None:
    if not isinstance(schema, Mapping):
        raise OpenApiError(f"schema {where} is not an object")
    if id(schema) in seen:
        return
    seen.add(id(schema))

    types = _schema_types(schema)
    for type_name in types:
        if type_name not in _VALID_TYPES:
            raise OpenApiError(f"unsupported 'type' value '{type_name}' in {where}")
    if "array" in types and schema.get("items") is None:
        raise OpenApiError(
            f"when schema type is 'array', schema 'items' must be non-null in {where}"
        )
    for key in ("minimum", "maximum"):
        if key in schema and not _is_number(schema[key]):
            raise OpenApiError(f"'{key}' must be a number in {where}")
    for key in ("minLength", "maxLength"):
        if key in schema:
            value = schema[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise OpenApiError(f"'{key}' must be a non-negative integer in {where}")

    if schema.get("items") is not None:
        _validate_schema(schema["items"], f"{where}.items", seen)
    properties = schema.get("properties") or {}
    if not isinstance(properties, Mapping):
        raise OpenApiError(f"'properties' must be an object in {where}")
    for key, value in properties.items():
        _validate_schema(value, f"{where}.properties.{key}", seen)
    for key in ("allOf", "anyOf", "oneOf"):
        for index, value in enumerate(schema.get(key) or []):
            _validate_schema(value, f"{where}.{key}[{index}]", seen)
    for key in ("not", "additionalProperties"):
        if isinstance(schema.get(key), Mapping):
            _validate_schema(schema[key], f"{where}.{key}", seen)


def _validate_components(components: Mapping[str, Any]) -> None:
    schemas = components.get("schemas") or {}
    if not isinstance(schemas, Mapping):
        raise OpenApiError("'schemas' must be an object")
    seen: set[int] = set()
    for name, schema in schemas.items():
        if not _COMPONENT_NAME.match(str(name)):
            raise OpenApiError(f"invalid component name '{name}'")
        _validate_schema(schema, f"'{name}'", seen)


def unmarshal(path: str) -> Components:
    """Load an OpenAPI document and convert its component schemas."""
    try:
        with open(path, encoding="utf-8") as handle:
            doc = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError, UnicodeDecodeError) as exc:
        raise OpenApiError(f"error loading {path}: {exc}") from exc
    if not isinstance(doc, Mapping):
        raise OpenApiError(f"error loading {path}: document is not an object")

    raw_components = doc.get("components")
    if raw_components is None:
        return {}
    if not isinstance(raw_components, Mapping):
        raise OpenApiError("error validating OpenApi file: invalid components")

    try:
        components = _resolve(raw_components, doc, {})
        _validate_components(components)
    except OpenApiError as exc:
        raise OpenApiError(f"error validating OpenApi file: {exc}") from exc

    try:
        return unmarshal_schemas(components.get("schemas") or {})
    except OpenApiError as exc:
        raise OpenApiError(f"error converting schemas: {exc}") from exc