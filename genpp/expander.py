"""
Generic block expansion.

Preprocesses ``*.g`` sources into ``*.c`` sources: every block between the
open and close markers is replaced by a switch statement with one case per
data type, the placeholder word substituted by that type's C spelling::

    pdl x;
    GENERICLOOP(x.datatype)
       generic *xx = x.data;
    ENDGENERICLOOP

becomes::

    pdl x;
    switch (x.datatype) {
    case PDL_B:
       {
          unsigned char *xx = x.data;
       } break;
    ...

Lines outside blocks are copied through unchanged. Reserved words from the
substitution table are replaced on every line before markers are looked for.
"""

from __future__ import annotations

import logging
import re
from enum import Enum, auto
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .config import GenppConfig
from .errors import NestedBlock, UnbalancedMarker, UnexpectedClose, UnterminatedBlock
from .generators.dispatch import DispatchGenerator
from .parser.blocks import GenericBlock, SourceLocation
from .types.registry import TypeTable, TypeTableEntry

logger = logging.getLogger("genpp.expander")

_LINE_BREAK = re.compile(r"(?<=\n)")

# (source name, 1-based line number, line text)
LocatedLine = tuple[Optional[str], int, str]


class ScanState(Enum):
    """Scanner state."""
    SCANNING = auto()   # outside a block
    CAPTURING = auto()  # inside a block


class GenericBlockExpander:
    """
    Expands generic blocks into per-type dispatch constructs.

    The expander itself is read-only after construction; each call to
    ``expand`` owns its scan state and buffers, so one expander (and its
    type table) can serve several streams, including concurrently.
    """

    def __init__(
        self,
        table: Optional[Iterable[Union[TypeTableEntry, tuple]]] = None,
        config: Optional[GenppConfig] = None,
    ):
        """
        Initialize the expander.

        Args:
            table: Type table driving expansion (from config if omitted)
            config: Marker, substitution and dispatch configuration
        """
        self.config = config if config is not None else GenppConfig()
        # pairs are converted and duplicate tags rejected here
        self.table = TypeTable(table) if table is not None else self.config.type_table()
        self.generator = DispatchGenerator(self.config)
        self.syntax = self.generator.syntax
        self.substitutions = self.config.substitution_patterns()

    def expand(self, lines: Iterable[str], source: Optional[str] = None) -> list[str]:
        """
        Expand one stream of lines.

        Args:
            lines: Input lines, normally with their line terminators
            source: Name used in diagnostics

        Returns:
            Output lines

        Raises:
            UnterminatedBlock, UnexpectedClose, NestedBlock, UnbalancedMarker
        """
        located = ((source, n, line) for n, line in enumerate(lines, start=1))
        return self.expand_located(located)

    def expand_located(self, lines: Iterable[LocatedLine]) -> list[str]:
        """Expand lines that carry their own source name and line number."""
        run = _Expansion(self)
        for source, lineno, line in lines:
            run.feed(line, SourceLocation(source, lineno))
        return run.finish()

    def expand_text(self, text: str, source: Optional[str] = None) -> str:
        """Expand a whole text; line terminators are preserved."""
        return "".join(self.expand(split_lines(text), source))

    def expand_files(self, paths: Iterable[Union[str, Path]]) -> list[str]:
        """Expand several files as one concatenated stream, in order."""
        return self.expand_located(_read_files(paths))

    def substitute(self, line: str) -> str:
        """Apply the reserved-word substitutions to one line."""
        for pattern, value in self.substitutions:
            line = pattern.sub(lambda _: value, line)
        return line


class _Expansion:
    """Scan state for a single stream."""

    def __init__(self, expander: GenericBlockExpander):
        self.expander = expander
        self.syntax = expander.syntax
        self.state = ScanState.SCANNING
        self.block: Optional[GenericBlock] = None
        self.output: list[str] = []
        self._pending = ""

    def feed(self, line: str, location: SourceLocation) -> None:
        line = self.expander.substitute(line)

        if self.state is ScanState.SCANNING and not self.syntax.has_marker(line):
            self.output.append(line)
            return

        rest = line
        at_line_start = True
        while True:
            open_m = self.syntax.find_open(rest)
            close_m = self.syntax.find_close(rest)

            if self.state is ScanState.SCANNING:
                if close_m is not None and (
                    open_m is None or close_m.start < open_m.keyword_start
                ):
                    raise UnexpectedClose(
                        f"found {self.syntax.close_keyword} while searching for "
                        f"{self.syntax.open_keyword}",
                        location,
                    )
                if open_m is None:
                    self._write(rest)
                    break
                if not open_m.balanced:
                    raise UnbalancedMarker(
                        f"unbalanced parentheses in {self.syntax.open_keyword}"
                        f"({open_m.loopvar}",
                        location,
                    )

                # an unfinished output line is completed by the dispatch construct
                self.block = GenericBlock(
                    loopvar=open_m.loopvar,
                    indent=open_m.indent,
                    lead=self._pending + rest[:open_m.start],
                    location=location,
                )
                self._pending = ""
                self.state = ScanState.CAPTURING
                logger.debug("Block on '%s' opened at %s", open_m.loopvar, location)
                rest = rest[open_m.end:]
                at_line_start = False
                continue

            if open_m is not None and (
                close_m is None or open_m.keyword_start < close_m.start
            ):
                raise NestedBlock(
                    f"found {self.syntax.open_keyword} while searching for "
                    f"{self.syntax.close_keyword} (block opened at {self.block.location})",
                    location,
                )
            if close_m is None:
                if at_line_start:
                    self.block.add_line(rest)
                else:
                    self.block.add_fragment(rest)
                break

            self.block.add_fragment(rest[:close_m.start])
            self._flush_block(location)
            rest = rest[close_m.end:]
            at_line_start = False

        if self._pending:
            self.output.append(self._pending)
            self._pending = ""

    def finish(self) -> list[str]:
        if self.state is ScanState.CAPTURING:
            raise UnterminatedBlock(
                f"input ended while searching for {self.syntax.close_keyword}",
                self.block.location,
            )
        return self.output

    def _flush_block(self, location: SourceLocation) -> None:
        block = self.block
        text = self.expander.generator.render(block, self.expander.table)
        self._write(block.lead + text)
        logger.debug(
            "Block on '%s' closed at %s, %d cases emitted",
            block.loopvar, location, len(self.expander.table),
        )
        self.block = None
        self.state = ScanState.SCANNING

    def _write(self, text: str) -> None:
        *complete, self._pending = _LINE_BREAK.split(self._pending + text)
        self.output.extend(complete)


def split_lines(text: str) -> list[str]:
    """Split text after each newline, keeping terminators."""
    return [line for line in _LINE_BREAK.split(text) if line]


def _read_files(paths: Iterable[Union[str, Path]]) -> Iterator[LocatedLine]:
    for path in paths:
        path = Path(path)
        logger.info("Reading: %s", path)
        with open(path, encoding="utf-8", newline="") as f:
            for lineno, line in enumerate(f, start=1):
                yield str(path), lineno, line


def expand(
    lines: Iterable[str],
    table: Optional[Iterable[Union[TypeTableEntry, tuple]]] = None,
    config: Optional[GenppConfig] = None,
) -> list[str]:
    """Expand generic blocks in lines with the given type table."""
    return GenericBlockExpander(table, config).expand(lines)
