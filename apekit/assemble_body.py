"""Assembly of message bodies."""

from __future__ import annotations

from apekit.assemble_common import assemble_component_metadata
from apekit.assemble_props import assemble_props
from apekit.components import MessageBody, MessageBodyType
from apekit.constraints import AssemblyError
from apekit.parse_body import ParsedMessageBody


def assemble_message_body(body: ParsedMessageBody) -> MessageBody:
    """Assemble a message body given either as a reference or as props."""
    try:
        metadata = assemble_component_metadata(body.metadata, body.context)
    except AssemblyError as exc:
        raise AssemblyError(f"error assembling component metadata: {exc}") from exc

    if body.body_type == MessageBodyType.REF:
        if body.ref is None:
            raise AssemblyError("no content on message body")
        return MessageBody(body_type=MessageBodyType.REF, ref=body.ref)

    if body.body_type == MessageBodyType.PROPS:
        if body.props is None:
            raise AssemblyError("no content on message body")
        try:
            props = assemble_props(body.props, metadata.component_id)
        except AssemblyError as exc:
            raise AssemblyError(f"error assembling message body props: {exc}") from exc
        return MessageBody(
            metadata=metadata, body_type=MessageBodyType.PROPS, props=props
        )

    raise AssemblyError(f"invalid message body type {body.body_type}")