"""Structural validation of components before they are stored."""

from __future__ import annotations

from typing import Any

from apekit.components import (
    PROP_TYPES,
    ComponentMetadata,
    ComponentType,
    MessageBody,
    Object,
    Prop,
    PropConstraintsBlob,
    PropConstraintsFloat,
    PropConstraintsInt,
    PropConstraintsRef,
    PropConstraintsText,
    PropConstraintsUint,
    PropConstraintType,
    PropsMap,
    PropType,
    Request,
    Response,
    Route,
)


class ValidationError(ValueError):
    """Raised when a component fails validation."""


_EXPECTED_COMPONENT_TYPES: dict[type, ComponentType] = {
    Prop: ComponentType.PROP,
    Object: ComponentType.OBJECT,
    Route: ComponentType.ROUTE,
    MessageBody: ComponentType.MESSAGE_BODY,
    Request: ComponentType.REQUEST,
    Response: ComponentType.RESPONSE,
}

_EXPECTED_CONSTRAINT_TYPES: dict[type, PropConstraintType] = {
    PropConstraintsRef: PropConstraintType.REF,
    PropConstraintsInt: PropConstraintType.INT,
    PropConstraintsUint: PropConstraintType.UINT,
    PropConstraintsFloat: PropConstraintType.FLOAT,
    PropConstraintsText: PropConstraintType.TEXT,
    PropConstraintsBlob: PropConstraintType.BLOB,
}


def _is_valid(text: str | None) -> bool:
    return (text or "").strip() != ""


def _metadata_of(comp: Any) -> ComponentMetadata:
    meta = getattr(comp, "metadata", None)
    if not isinstance(meta, ComponentMetadata):
        raise ValidationError("unrecognized component type")
    return meta


class Validator:
    """Checks components for missing metadata and inconsistent types."""

    def validate_component(self, comp: Any) -> None:
        """Validate a component, raising ValidationError on the first problem found."""
        meta = _metadata_of(comp)
        try:
            self._validate_component_metadata(meta)
        except ValidationError as exc:
            raise ValidationError(
                f"error validating component metadata: {exc}"
            ) from exc
        try:
            self._validate_component_type(comp, meta)
        except ValidationError as exc:
            raise ValidationError(
                f"error validating component type for {meta.name}: {exc}"
            ) from exc
        try:
            self._validate_component_specific(comp)
        except ValidationError as exc:
            raise ValidationError(
                f"error validating component {meta.name}: {exc}"
            ) from exc

    @staticmethod
    def _validate_component_metadata(meta: ComponentMetadata) -> None:
        if not _is_valid(meta.component_id):
            raise ValidationError("component id empty")
        if not _is_valid(meta.name):
            raise ValidationError("name empty")
        if not _is_valid(meta.component_type):
            raise ValidationError("missing component type")

    @staticmethod
    def _validate_component_type(comp: Any, meta: ComponentMetadata) -> None:
        expected = _EXPECTED_COMPONENT_TYPES.get(type(comp))
        if expected is None:
            raise ValidationError("unrecognized component type")
        if str(meta.component_type) != str(expected):
            raise ValidationError(
                f"incorrect type for {meta.component_id}: "
                f"want {expected}, got {meta.component_type}"
            )

    def _validate_component_specific(self, comp: Any) -> None:
        kind = type(comp)
        if kind not in _EXPECTED_COMPONENT_TYPES:
            raise ValidationError("unrecognized component type")
        handlers = {
            Prop: (self._validate_prop, "prop"),
            Object: (self._validate_object, "object"),
            Request: (self._validate_request, "request"),
            Response: (self._validate_response, "response"),
        }
        entry = handlers.get(kind)
        if entry is None:
            # Routes and message bodies carry no checks beyond their metadata.
            return
        handler, label = entry
        try:
            handler(comp)
        except ValidationError as exc:
            raise ValidationError(f"error validating {label}: {exc}") from exc

    def _validate_prop(self, prop: Prop) -> None:
        parsed_type = PROP_TYPES.match(str(prop.prop_metadata.prop_type))
        if str(parsed_type) == str(PropType.UNDEFINED):
            raise ValidationError("invalid prop type")
        try:
            self._validate_prop_constraints(prop, str(parsed_type))
        except ValidationError as exc:
            raise ValidationError(
                f"error validating prop constraints on {prop.metadata.name}: {exc}"
            ) from exc

    @staticmethod
    def _validate_prop_constraints(prop: Prop, parsed_type: str) -> None:
        expected = _EXPECTED_CONSTRAINT_TYPES.get(type(prop.constraints))
        if expected is not None and parsed_type != str(expected):
            raise ValidationError(
                f"incorrect prop type for {prop.metadata.component_id}: "
                f"want {expected}, got {parsed_type}"
            )

    def _validate_props(self, props: PropsMap) -> None:
        for key, prop in props.items():
            if key != prop.metadata.name:
                raise ValidationError(
                    f"name mismatch for prop {prop.metadata.component_id}: "
                    f"got {prop.metadata.name}, want {key}"
                )
            try:
                self._validate_prop(prop)
            except ValidationError as exc:
                raise ValidationError(
                    f"error validating prop {prop.metadata.component_id}: {exc}"
                ) from exc

    def _validate_object(self, obj: Object) -> None:
        try:
            self._validate_props(obj.props)
        except ValidationError as exc:
            raise ValidationError(f"error validating props: {exc}") from exc

    def _validate_request(self, request: Request) -> None:
        try:
            self.validate_component(request.body)
        except ValidationError as exc:
            raise ValidationError(
                f"error validating body on request {request.metadata.component_id}: {exc}"
            ) from exc

    def _validate_response(self, response: Response) -> None:
        try:
            if response.body is None:
                raise ValidationError("no body")
            self.validate_component(response.body)
        except ValidationError as exc:
            raise ValidationError(
                f"error validating body on response {response.metadata.component_id}: {exc}"
            ) from exc