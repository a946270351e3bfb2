"""
Dispatch construct generator.

Turns a captured GenericBlock into a C switch statement with one case per
type table entry::

    switch (x.datatype) {
    case PDL_L:
       {
          long *xx = x.data;
       } break;
    ...
    default:
       croak("Not a known data type code=%d", x.datatype);
    }
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from jinja2 import TemplateError, Template

from ..errors import ConfigError
from ..parser.blocks import GenericBlock
from ..types.registry import Tag, TypeTable
from .base import Generator

logger = logging.getLogger("genpp.dispatch")

TEMPLATE_NAME = "dispatch.c.j2"

# Prepended to every non-blank body line inside a case
BODY_PREFIX = "   "


@dataclass
class DispatchCase:
    """One specialized copy of the block body."""
    tag: Tag
    spelling: str
    lines: list[str] = field(default_factory=list)


class DispatchGenerator(Generator):
    """Renders the switch statement for a generic block."""

    def __init__(self, config=None):
        super().__init__(config)
        self.syntax = self.config.markers.syntax()
        self._unknown_tag: Optional[Template] = None

    @property
    def unknown_tag_template(self) -> Template:
        """Compiled default-case statement."""
        if self._unknown_tag is None:
            source = self.config.dispatch.unknown_tag
            try:
                self._unknown_tag = self.env.from_string(source)
            except TemplateError as e:
                raise ConfigError(f"invalid unknown_tag template {source!r}: {e}") from e
        return self._unknown_tag

    def cases(self, block: GenericBlock, table: TypeTable) -> list[DispatchCase]:
        """Specialize the block body once per table entry, in table order."""
        return [
            DispatchCase(
                tag=entry.tag,
                spelling=entry.spelling,
                lines=[self.syntax.specialize(line, entry.spelling) for line in block.body_lines],
            )
            for entry in table
        ]

    def render(self, block: GenericBlock, table: TypeTable) -> str:
        """
        Render the dispatch construct for a block.

        Args:
            block: Captured generic block
            table: Type table driving the cases

        Returns:
            The construct without a trailing newline; the text following the
            close marker completes its last line.
        """
        try:
            unknown_tag = self.unknown_tag_template.render(loopvar=block.loopvar)
        except TemplateError as e:
            raise ConfigError(f"failed to render unknown_tag template: {e}") from e

        text = self.env.get_template(TEMPLATE_NAME).render(
            indent=block.indent,
            loopvar=block.loopvar,
            cases=self.cases(block, table),
            body_prefix=BODY_PREFIX,
            unknown_tag=unknown_tag,
        )

        logger.debug(
            "Rendered switch on '%s' with %d cases, %d body lines",
            block.loopvar, len(table), len(block.body_lines),
        )
        return text
