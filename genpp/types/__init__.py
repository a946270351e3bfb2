"""
Type table for generic-block expansion.
"""

from .registry import (
    DATATYPES,
    Tag,
    TypeInfo,
    TypeRegistry,
    TypeTable,
    TypeTableEntry,
    default_table,
)

__all__ = [
    "DATATYPES",
    "Tag",
    "TypeInfo",
    "TypeRegistry",
    "TypeTable",
    "TypeTableEntry",
    "default_table",
]
