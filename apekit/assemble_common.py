"""Assembly of component metadata from parsed metadata and its context."""

from __future__ import annotations

from apekit.components import ComponentMetadata, generate_component_id
from apekit.constraints import AssemblyError
from apekit.context import CompilationContext
from apekit.parse_common import ParsedComponentMetadata


def assemble_component_metadata(
    metadata: ParsedComponentMetadata, ctx: CompilationContext
) -> ComponentMetadata:
    """Combine parsed metadata with its context and give it an identifier.

    A component without a name is named after its identifier. Raises
    AssemblyError when no identifier can be built.
    """
    meta = ComponentMetadata(
        component_type=ctx.component_type,
        name=ctx.name if ctx.name is not None else "",
        is_root=ctx.is_root,
        parent_id=ctx.parent_id,
        category=metadata.category,
        description=metadata.description,
    )
    try:
        meta.component_id = generate_component_id(meta)
    except ValueError as exc:
        raise AssemblyError(f"error generating component id: {exc}") from exc
    if meta.name == "":
        meta.name = meta.component_id
    return meta