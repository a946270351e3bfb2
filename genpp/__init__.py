"""
genpp - generic-type preprocessor

Expands GENERICLOOP ... ENDGENERICLOOP blocks in C sources into switch
statements specialized for every data type of the array library.
"""

__version__ = "0.1.0"
__author__ = "genpp Team"

from .config import GenppConfig
from .errors import (
    ConfigError,
    GenppError,
    NestedBlock,
    StructuralError,
    TypeTableError,
    UnbalancedMarker,
    UnexpectedClose,
    UnterminatedBlock,
)
from .expander import GenericBlockExpander, expand
from .types import TypeRegistry, TypeTable, TypeTableEntry, default_table

__all__ = [
    "GenppConfig",
    "ConfigError",
    "GenppError",
    "NestedBlock",
    "StructuralError",
    "TypeTableError",
    "UnbalancedMarker",
    "UnexpectedClose",
    "UnterminatedBlock",
    "GenericBlockExpander",
    "expand",
    "TypeRegistry",
    "TypeTable",
    "TypeTableEntry",
    "default_table",
    "__version__",
]
