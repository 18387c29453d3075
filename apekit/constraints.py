"""Assembly of typed prop constraints from a prop's raw fields."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from apekit.components import (
    PropConstraints,
    PropConstraintsBlob,
    PropConstraintsFloat,
    PropConstraintsInt,
    PropConstraintsRef,
    PropConstraintsText,
    PropConstraintsUint,
    PropType,
)

SIZE = "size"
MIN = "min"
MAX = "max"
PRECISION = "precision"
TARGET = "target"
MIN_LENGTH = "min_length"
MAX_LENGTH = "max_length"
REGEX = "regex"
ALPHA = "alpha"
ALNUM = "alnum"
NUM = "num"

_UINT_MASK = (1 << 64) - 1


class AssemblyError(ValueError):
    """Raised when parsed components cannot be assembled."""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_float(value: Any) -> bool:
    return isinstance(value, float)


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _extract(fields: Mapping[str, Any], key: str, check: Callable[[Any], bool]) -> Any:
    """Return the value under ``key`` or None; raise if it has the wrong type."""
    if key not in fields:
        return None
    value = fields[key]
    if not check(value):
        raise AssemblyError(f"error finding {key}: incorrect format for {key}")
    return value


def _as_uint(value: int | None) -> int | None:
    return None if value is None else value & _UINT_MASK


def _assemble_ref(fields: Mapping[str, Any]) -> PropConstraints:
    target = _extract(fields, TARGET, _is_str)
    if target is None:
        raise AssemblyError("ref missing target")
    return PropConstraintsRef(reference=target)


def _assemble_int(fields: Mapping[str, Any]) -> PropConstraints:
    return PropConstraintsInt(
        size=_as_uint(_extract(fields, SIZE, _is_int)),
        min=_extract(fields, MIN, _is_int),
        max=_extract(fields, MAX, _is_int),
    )


def _assemble_uint(fields: Mapping[str, Any]) -> PropConstraints:
    return PropConstraintsUint(
        size=_as_uint(_extract(fields, SIZE, _is_int)),
        min=_as_uint(_extract(fields, MIN, _is_int)),
        max=_as_uint(_extract(fields, MAX, _is_int)),
    )


def _assemble_float(fields: Mapping[str, Any]) -> PropConstraints:
    return PropConstraintsFloat(
        precision=_extract(fields, PRECISION, _is_str),
        min=_extract(fields, MIN, _is_float),
        max=_extract(fields, MAX, _is_float),
    )


def _assemble_text(fields: Mapping[str, Any]) -> PropConstraints:
    return PropConstraintsText(
        min_length=_as_uint(_extract(fields, MIN_LENGTH, _is_int)),
        max_length=_as_uint(_extract(fields, MAX_LENGTH, _is_int)),
        regex=_extract(fields, REGEX, _is_str),
        alpha=_extract(fields, ALPHA, _is_bool),
        num=_extract(fields, NUM, _is_bool),
        alnum=_extract(fields, ALNUM, _is_bool),
    )


def _assemble_blob(fields: Mapping[str, Any]) -> PropConstraints:
    return PropConstraintsBlob()


_ASSEMBLERS: dict[str, Callable[[Mapping[str, Any]], PropConstraints]] = {
    PropType.REF: _assemble_ref,
    PropType.INT: _assemble_int,
    PropType.UINT: _assemble_uint,
    PropType.FLOAT: _assemble_float,
    PropType.TEXT: _assemble_text,
    PropType.BLOB: _assemble_blob,
}


def assemble_constraints(prop_type: str, fields: Mapping[str, Any]) -> PropConstraints:
    """Build the constraints object matching ``prop_type`` from ``fields``.

    Raises AssemblyError for prop types without constraints or for fields
    of the wrong type.
    """
    assembler = _ASSEMBLERS.get(str(prop_type))
    if assembler is None:
        raise AssemblyError(f"unrecognized prop type {prop_type}")
    return assembler(fields)