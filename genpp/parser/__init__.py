"""
Marker scanning and generic block data model.
"""

from .blocks import GenericBlock, SourceLocation
from .markers import (
    DEFAULT_CLOSE,
    DEFAULT_OPEN,
    DEFAULT_PLACEHOLDER,
    CloseMatch,
    MarkerSyntax,
    OpenMatch,
    word_pattern,
)

__all__ = [
    "GenericBlock",
    "SourceLocation",
    "DEFAULT_CLOSE",
    "DEFAULT_OPEN",
    "DEFAULT_PLACEHOLDER",
    "CloseMatch",
    "MarkerSyntax",
    "OpenMatch",
    "word_pattern",
]
