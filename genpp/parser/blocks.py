"""
Generic block data structures.

These dataclasses represent what the scanner captures between an open and
a close marker, independent of how the dispatch construct is rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class SourceLocation:
    """Source location for error reporting."""
    file: Optional[str]
    line: int

    def __str__(self) -> str:
        if self.file is None:
            return f"line {self.line}"
        return f"{self.file}:{self.line}"


@dataclass
class GenericBlock:
    """
    A generic block being captured.

    ``lead`` is any non-indentation text that preceded the open marker on
    its line; it is emitted just before the dispatch construct.
    """
    loopvar: str
    indent: str = ""
    lead: str = ""
    body_lines: list[str] = field(default_factory=list)
    location: Optional[SourceLocation] = None

    def add_line(self, line: str) -> None:
        """Append a whole body line, blank or not."""
        self.body_lines.append(line.rstrip("\r\n"))

    def add_fragment(self, text: str) -> None:
        """Append text sharing a line with a marker, unless it is only whitespace."""
        if text.strip():
            self.body_lines.append(text.rstrip("\r\n"))
