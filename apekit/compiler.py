"""Compiles a component file into assembled components."""

from __future__ import annotations

from apekit.assembler import Assembler
from apekit.components import Components
from apekit.parser import Parser
from apekit.preprocessor import Preprocessor
from apekit.scanner import Scanner


class CompileError(ValueError):
    """Raised when a file cannot be compiled into components."""


class Compiler:
    """Runs the preprocess, scan, parse and assemble stages over one file."""

    def file(self, path: str, data: bytes) -> Components:
        """Compile ``data`` read from ``path`` into a map of id to component."""
        try:
            raw = Preprocessor().file(path, data)
        except ValueError as exc:
            raise CompileError(f"preprocessing failed: {exc}") from exc

        try:
            scanned = Scanner().scan_component(raw)
        except ValueError as exc:
            raise CompileError(f"scanning failed: {exc}") from exc

        try:
            parsed = Parser().parse_object(scanned, True)
        except ValueError as exc:
            raise CompileError(f"parsing failed: {exc}") from exc

        try:
            assembled = Assembler().assemble_object(parsed)
        except ValueError as exc:
            raise CompileError(f"assembly failed: {exc}") from exc

        return {assembled.metadata.component_id: assembled}