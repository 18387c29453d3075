"""Entry point for turning scanned components into parsed ones."""

from __future__ import annotations

from apekit.parse_object import ParsedObject, parse_object
from apekit.parse_props import ParsedProp, parse_prop
from apekit.parse_route import ParsedRoute, parse_route
from apekit.scanner import ScannedComponent


class Parser:
    """Parses scanned props, objects and routes."""

    def parse_prop(self, scanned: ScannedComponent, is_root: bool) -> ParsedProp:
        """Parse a scanned prop."""
        return parse_prop(scanned, is_root)

    def parse_object(self, scanned: ScannedComponent, is_root: bool) -> ParsedObject:
        """Parse a scanned object."""
        return parse_object(scanned, is_root)

    def parse_route(self, scanned: ScannedComponent, is_root: bool) -> ParsedRoute:
        """Parse a scanned route."""
        return parse_route(scanned, is_root)