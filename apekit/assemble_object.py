"""Assembly of object components."""

from __future__ import annotations

from apekit.assemble_common import assemble_component_metadata
from apekit.assemble_props import assemble_props
from apekit.components import Object
from apekit.constraints import AssemblyError
from apekit.parse_object import ParsedObject


def assemble_object(parsed: ParsedObject) -> Object:
    """Assemble an object and its props, which become its children."""
    try:
        metadata = assemble_component_metadata(
            parsed.component_metadata, parsed.context
        )
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling component metadata: {exc}") from exc

    try:
        props = assemble_props(parsed.props, metadata.component_id)
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling props: {exc}") from exc

    return Object(metadata=metadata, props=props)