"""
Type registry for generic-block expansion.

This module defines the ordered type table that drives expansion: one
``(tag, spelling)`` pair per concrete data type. The table is built once,
before any expansion, and is immutable afterwards so it can be shared by
any number of concurrent expansions.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional, Union, overload

from ..errors import TypeTableError

Tag = Union[int, str]


@dataclass(frozen=True)
class TypeTableEntry:
    """A concrete data type: runtime tag and the token that replaces the placeholder."""
    tag: Tag
    spelling: str

    def __post_init__(self):
        if isinstance(self.tag, bool) or not isinstance(self.tag, (int, str)):
            raise TypeTableError(f"tag must be an int or a string, got {self.tag!r}")
        if isinstance(self.tag, str) and not self.tag.strip():
            raise TypeTableError("tag must not be empty")
        if not isinstance(self.spelling, str) or not self.spelling.strip():
            raise TypeTableError(f"spelling for tag {self.tag!r} must be a non-empty string")

    def __str__(self) -> str:
        return f"{self.tag} -> {self.spelling}"


class TypeTable(Sequence):
    """
    Immutable, ordered sequence of TypeTableEntry.

    Iteration order is declaration order and is what the generated dispatch
    construct follows case by case.
    """

    def __init__(self, entries: Iterable[Union[TypeTableEntry, tuple]] = ()):
        items = []
        seen: set[Tag] = set()
        for entry in entries:
            if not isinstance(entry, TypeTableEntry):
                tag, spelling = entry
                entry = TypeTableEntry(tag, spelling)
            if entry.tag in seen:
                raise TypeTableError(f"duplicate tag {entry.tag!r}")
            seen.add(entry.tag)
            items.append(entry)
        self._entries: tuple[TypeTableEntry, ...] = tuple(items)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Tag, str]]) -> "TypeTable":
        """Build a table from ``(tag, spelling)`` pairs."""
        return cls(TypeTableEntry(tag, spelling) for tag, spelling in pairs)

    @classmethod
    def from_mapping(cls, mapping: Mapping[Tag, str]) -> "TypeTable":
        """Build a table from an insertion-ordered mapping of tag to spelling."""
        return cls.from_pairs(mapping.items())

    @overload
    def __getitem__(self, index: int) -> TypeTableEntry: ...

    @overload
    def __getitem__(self, index: slice) -> "TypeTable": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return TypeTable(self._entries[index])
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TypeTableEntry]:
        return iter(self._entries)

    def __eq__(self, other):
        if not isinstance(other, TypeTable):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self):
        return hash(self._entries)

    def __repr__(self) -> str:
        pairs = ", ".join(f"({e.tag!r}, {e.spelling!r})" for e in self._entries)
        return f"TypeTable([{pairs}])"

    @property
    def tags(self) -> list[Tag]:
        return [e.tag for e in self._entries]

    def lookup(self, tag: Tag) -> Optional[TypeTableEntry]:
        """Find the entry for a tag, or None."""
        for entry in self._entries:
            if entry.tag == tag:
                return entry
        return None

    def updated(self, entries: Iterable[Union[TypeTableEntry, tuple]]) -> "TypeTable":
        """
        Return a new table with overrides applied.

        Entries whose tag already exists replace the spelling in place (the
        position is kept); new tags are appended in the given order.
        """
        result = list(self._entries)
        index = {e.tag: i for i, e in enumerate(result)}
        for entry in entries:
            if not isinstance(entry, TypeTableEntry):
                entry = TypeTableEntry(*entry)
            if entry.tag in index:
                result[index[entry.tag]] = entry
            else:
                index[entry.tag] = len(result)
                result.append(entry)
        return TypeTable(result)


# =============================================================================
# Host array library data types
# =============================================================================

# (name, tag, C spelling), in the library's declaration order
DATATYPES: list[tuple[str, str, str]] = [
    ("byte", "PDL_B", "unsigned char"),
    ("short", "PDL_S", "short"),
    ("ushort", "PDL_US", "unsigned short"),
    ("long", "PDL_L", "long"),
    ("float", "PDL_F", "float"),
    ("double", "PDL_D", "double"),
]


@dataclass
class TypeInfo:
    """A named data type known to the registry."""
    name: str
    tag: Tag
    spelling: str

    @property
    def entry(self) -> TypeTableEntry:
        return TypeTableEntry(self.tag, self.spelling)


class TypeRegistry:
    """
    Collaborator that supplies the type table.

    Types are registered by name; ``table()`` snapshots the current set into
    an immutable TypeTable in registration order.
    """

    def __init__(self, types: Optional[Iterable[tuple[str, Tag, str]]] = None):
        """
        Initialize the registry.

        Args:
            types: ``(name, tag, spelling)`` triples; defaults to DATATYPES
        """
        self._types: dict[str, TypeInfo] = {}
        for name, tag, spelling in (DATATYPES if types is None else types):
            self.register(name, tag, spelling)

    def register(self, name: str, tag: Tag, spelling: str) -> TypeInfo:
        """Register a type, replacing any previous type of the same name."""
        for other in self._types.values():
            if other.tag == tag and other.name != name:
                raise TypeTableError(
                    f"tag {tag!r} already registered for type '{other.name}'"
                )
        entry = TypeTableEntry(tag, spelling)
        info = TypeInfo(name, entry.tag, entry.spelling)
        self._types[name] = info
        return info

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[TypeInfo]:
        return iter(self._types.values())

    def table(self) -> TypeTable:
        """Snapshot the registry as an immutable type table."""
        return TypeTable(info.entry for info in self._types.values())


def default_table() -> TypeTable:
    """Type table of the host library's data types."""
    return TypeRegistry().table()
