"""Assembly of props from parsed props."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace

from apekit.assemble_common import assemble_component_metadata
from apekit.components import Prop, PropMetadata, PropsMap
from apekit.constraints import AssemblyError, assemble_constraints
from apekit.parse_props import ParsedProp


def assemble_prop(parsed: ParsedProp) -> Prop:
    """Assemble a single prop with its metadata and typed constraints."""
    prop_type = parsed.prop_metadata.prop_type
    if not prop_type:
        raise AssemblyError("no prop type given")

    try:
        metadata = assemble_component_metadata(
            parsed.component_metadata, parsed.context
        )
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling component metadata: {exc}") from exc

    try:
        constraints = assemble_constraints(prop_type, parsed.constraints)
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling constraints: {exc}") from exc

    return Prop(
        metadata=metadata,
        prop_metadata=PropMetadata(
            prop_type=prop_type, is_array=bool(parsed.prop_metadata.is_array)
        ),
        constraints=constraints,
    )


def assemble_props(props: Mapping[str, ParsedProp], parent_id: str | None) -> PropsMap:
    """Assemble every prop of a map as a child of ``parent_id``."""
    assembled: PropsMap = {}
    for key, parsed in props.items():
        child = replace(parsed, context=replace(parsed.context, parent_id=parent_id))
        try:
            assembled[key] = assemble_prop(child)
        except AssemblyError as exc:
            raise AssemblyError(f"error assembling prop {key}: {exc}") from exc
    return assembled