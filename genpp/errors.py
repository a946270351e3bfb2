"""
Error taxonomy for the generic-block preprocessor.

Generator-time failures are raised as exceptions and abort the whole
expansion. The fourth kind of failure, an unknown runtime tag, is not a
Python exception at all: it is the statement emitted into the default case
of every generated dispatch construct.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .parser.blocks import SourceLocation


class GenppError(Exception):
    """Base exception for all preprocessor errors."""

    kind = "GenppError"

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        self.message = message
        self.location = location
        super().__init__(self.describe())

    def describe(self) -> str:
        """Human-readable diagnostic, prefixed with the location if known."""
        if self.location is None:
            return f"{self.kind}: {self.message}"
        return f"{self.location}: {self.kind}: {self.message}"


class ConfigError(GenppError):
    """Invalid configuration file or command-line override."""

    kind = "ConfigError"


class TypeTableError(GenppError):
    """Duplicate tag or malformed type table entry."""

    kind = "TypeTableError"


# =============================================================================
# Structural (template) errors
# =============================================================================

class StructuralError(GenppError):
    """Malformed generic-block structure in the input stream."""

    kind = "StructuralError"


class UnterminatedBlock(StructuralError):
    """Input ended while a generic block was still open."""

    kind = "UnterminatedBlock"


class UnexpectedClose(StructuralError):
    """Close marker seen with no open block."""

    kind = "UnexpectedClose"


class NestedBlock(StructuralError):
    """Open marker seen while a block was already open."""

    kind = "NestedBlock"


class UnbalancedMarker(StructuralError):
    """Open marker whose loop-variable parentheses never close on its line."""

    kind = "UnbalancedMarker"
