"""
Marker syntax for generic blocks.

A generic block looks like::

    GENERICLOOP(x.datatype)
       generic *xx = x.data;
    ENDGENERICLOOP

The open keyword takes a parenthesized loop-variable expression and an
optional ``;``. The close keyword takes an optional ``;``. Every whole-word
occurrence of the placeholder inside the block is replaced per type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from ..errors import ConfigError

DEFAULT_OPEN = "GENERICLOOP"
DEFAULT_CLOSE = "ENDGENERICLOOP"
DEFAULT_PLACEHOLDER = "generic"

_TERMINATOR = re.compile(r"\s*;")


@dataclass(frozen=True)
class OpenMatch:
    """
    Open marker found in a piece of text.

    ``balanced`` is False when the loop-variable argument never closes; the
    match then extends to the end of the text.
    """
    start: int
    end: int
    indent: str
    loopvar: str
    balanced: bool = True

    @property
    def keyword_start(self) -> int:
        return self.start + len(self.indent)


@dataclass(frozen=True)
class CloseMatch:
    """Close marker found in a piece of text."""
    start: int
    end: int


@dataclass(frozen=True)
class MarkerSyntax:
    """Keywords recognized by the scanner, compiled to regexes."""

    open_keyword: str = DEFAULT_OPEN
    close_keyword: str = DEFAULT_CLOSE
    placeholder: str = DEFAULT_PLACEHOLDER

    _open_re: re.Pattern = field(init=False, repr=False, compare=False)
    _close_re: re.Pattern = field(init=False, repr=False, compare=False)
    _placeholder_re: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for what, word in (
            ("open keyword", self.open_keyword),
            ("close keyword", self.close_keyword),
            ("placeholder", self.placeholder),
        ):
            if not isinstance(word, str) or not word.isidentifier():
                raise ConfigError(f"{what} must be an identifier, got {word!r}")
        if self.open_keyword == self.close_keyword:
            raise ConfigError("open and close keywords must differ")

        object.__setattr__(self, "_open_re", re.compile(
            r"(?P<indent>[ \t]*)\b" + re.escape(self.open_keyword)
            + r"\s*\("
        ))
        object.__setattr__(self, "_close_re", re.compile(
            r"\b" + re.escape(self.close_keyword) + r"\b(?:\s*;)?"
        ))
        object.__setattr__(self, "_placeholder_re", word_pattern(self.placeholder))

    def find_open(self, text: str) -> Optional[OpenMatch]:
        """
        Leftmost open marker in text, or None.

        The loop-variable argument runs to the matching close parenthesis,
        at any nesting depth.
        """
        m = self._open_re.search(text)
        if m is None:
            return None

        depth = 1
        for pos in range(m.end(), len(text)):
            if text[pos] == "(":
                depth += 1
            elif text[pos] == ")":
                depth -= 1
                if depth == 0:
                    break
        else:
            return OpenMatch(
                start=m.start(),
                end=len(text),
                indent=m.group("indent"),
                loopvar=text[m.end():].strip(),
                balanced=False,
            )

        end = pos + 1
        terminator = _TERMINATOR.match(text, end)
        if terminator is not None:
            end = terminator.end()
        return OpenMatch(
            start=m.start(),
            end=end,
            indent=m.group("indent"),
            loopvar=text[m.end():pos].strip(),
        )

    def find_close(self, text: str) -> Optional[CloseMatch]:
        """Leftmost close marker in text, or None."""
        m = self._close_re.search(text)
        if m is None:
            return None
        return CloseMatch(start=m.start(), end=m.end())

    def has_marker(self, text: str) -> bool:
        """Quick check used for the passthrough fast path."""
        return (
            self.open_keyword in text or self.close_keyword in text
        ) and (
            self._open_re.search(text) is not None
            or self._close_re.search(text) is not None
        )

    def specialize(self, line: str, spelling: str) -> str:
        """Replace every whole-word placeholder in line with spelling."""
        return self._placeholder_re.sub(lambda _: spelling, line)


def word_pattern(word: str) -> re.Pattern:
    """Regex matching word on word boundaries."""
    return re.compile(r"\b" + re.escape(word) + r"\b")
