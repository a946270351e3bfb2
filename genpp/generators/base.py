"""
Base classes for code generators.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

if TYPE_CHECKING:
    from ..config import GenppConfig


@dataclass
class GeneratedFile:
    """Represents a generated file."""
    path: Path
    content: str
    source: Optional[Path] = None  # Original source file


class Generator(ABC):
    """
    Abstract base class for code generators.

    Subclasses render one construct of the output from a Jinja2 template
    shipped in ``genpp/templates``.
    """

    def __init__(self, config: Optional["GenppConfig"] = None):
        """
        Initialize the generator.

        Args:
            config: Preprocessor configuration (defaults if omitted)
        """
        if config is None:
            from ..config import GenppConfig
            config = GenppConfig()
        self.config = config
        self._env: Optional[Environment] = None

    @property
    def env(self) -> Environment:
        """Lazy-load Jinja2 environment."""
        if self._env is None:
            self._env = self._create_jinja_env()
        return self._env

    def _create_jinja_env(self) -> Environment:
        """Create and configure Jinja2 environment."""
        # Generated C is never HTML: autoescape is off for files and strings
        return Environment(
            loader=PackageLoader("genpp", "templates"),
            autoescape=select_autoescape(default_for_string=False, default=False),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )

    @abstractmethod
    def render(self, *args, **kwargs) -> str:
        """Render the construct as text."""
        pass
