"""Entry point for turning parsed components into assembled components."""

from __future__ import annotations

from apekit.assemble_object import assemble_object
from apekit.assemble_props import assemble_prop
from apekit.assemble_route import assemble_route
from apekit.components import Object, Prop, Route
from apekit.parse_object import ParsedObject
from apekit.parse_props import ParsedProp
from apekit.parse_route import ParsedRoute


class Assembler:
    """Assembles parsed props, objects and routes."""

    def assemble_prop(self, parsed: ParsedProp) -> Prop:
        """Assemble a parsed prop."""
        return assemble_prop(parsed)

    def assemble_object(self, parsed: ParsedObject) -> Object:
        """Assemble a parsed object."""
        return assemble_object(parsed)

    def assemble_route(self, parsed: ParsedRoute) -> Route:
        """Assemble a parsed route."""
        return assemble_route(parsed)