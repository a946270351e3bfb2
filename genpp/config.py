"""
Configuration system for genpp.

Supports:
- TOML configuration files (genpp.toml)
- CLI argument overrides
- Custom marker keywords, type tables and word substitutions
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ConfigError, TypeTableError
from .parser.markers import (
    DEFAULT_CLOSE,
    DEFAULT_OPEN,
    DEFAULT_PLACEHOLDER,
    MarkerSyntax,
    word_pattern,
)
from .types.registry import TypeTable, TypeTableEntry, default_table

CONFIG_FILENAME = "genpp.toml"

# Open flag for non-blocking I/O; platforms that lack it override this
DEFAULT_SUBSTITUTIONS: dict[str, str] = {
    "O_NONBLOCK": "O_NONBLOCK",
}

DEFAULT_UNKNOWN_TAG = 'croak("Not a known data type code=%d", {{ loopvar }});'


@dataclass
class MarkersConfig:
    """Marker keywords."""

    open: str = DEFAULT_OPEN
    close: str = DEFAULT_CLOSE
    placeholder: str = DEFAULT_PLACEHOLDER

    def syntax(self) -> MarkerSyntax:
        return MarkerSyntax(self.open, self.close, self.placeholder)


@dataclass
class DispatchConfig:
    """Dispatch construct options."""

    # Jinja2 template for the default-case statement; receives `loopvar`
    unknown_tag: str = DEFAULT_UNKNOWN_TAG


@dataclass
class GenerationConfig:
    """Generation options."""

    overwrite: bool = False
    suffix: str = ".c"


@dataclass
class GenppConfig:
    """Main configuration container."""

    markers: MarkersConfig = field(default_factory=MarkersConfig)
    types: Optional[list[TypeTableEntry]] = None  # None: default table
    substitutions: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SUBSTITUTIONS))
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)

    def type_table(self) -> TypeTable:
        """Effective type table."""
        if self.types is None:
            return default_table()
        return TypeTable(self.types)

    def substitution_patterns(self) -> list[tuple[re.Pattern, str]]:
        """Compiled word substitutions, in declaration order."""
        patterns = []
        for word, value in self.substitutions.items():
            if not word.isidentifier():
                raise ConfigError(f"substitution word must be an identifier, got {word!r}")
            patterns.append((word_pattern(word), value))
        return patterns

    @classmethod
    def from_file(cls, path: Path) -> "GenppConfig":
        """Load configuration from a TOML file."""
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"{path}: {e}") from e

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "GenppConfig":
        """Create config from dictionary."""
        markers_data = _section(data, "markers")
        dispatch_data = _section(data, "dispatch")
        gen_data = _section(data, "generation")

        markers = MarkersConfig(
            open=markers_data.get("open", DEFAULT_OPEN),
            close=markers_data.get("close", DEFAULT_CLOSE),
            placeholder=markers_data.get("placeholder", DEFAULT_PLACEHOLDER),
        )
        # fail early on bad keywords
        markers.syntax()

        types = None
        if "types" in data:
            types = _parse_types(data["types"])

        substitutions = dict(DEFAULT_SUBSTITUTIONS)
        for word, value in _section(data, "substitutions").items():
            if not isinstance(value, str):
                raise ConfigError(f"substitution for {word!r} must be a string")
            substitutions[word] = value

        unknown_tag = dispatch_data.get("unknown_tag", DEFAULT_UNKNOWN_TAG)
        if not isinstance(unknown_tag, str):
            raise ConfigError("dispatch.unknown_tag must be a string")

        generation = GenerationConfig(
            overwrite=bool(gen_data.get("overwrite", False)),
            suffix=gen_data.get("suffix", ".c"),
        )

        config = cls(
            markers=markers,
            types=types,
            substitutions=substitutions,
            dispatch=DispatchConfig(unknown_tag=unknown_tag),
            generation=generation,
        )
        config.substitution_patterns()
        return config

    @classmethod
    def find_config(cls, start_path: Optional[Path] = None) -> Optional[Path]:
        """Find genpp.toml in current or parent directories."""
        if start_path is None:
            start_path = Path.cwd()

        current = start_path.resolve()

        for _ in range(10):  # Max 10 levels up
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return config_path

            parent = current.parent
            if parent == current:
                break
            current = parent

        return None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "GenppConfig":
        """Load configuration, auto-discovering if path not provided."""
        if config_path is not None:
            if not config_path.exists():
                raise ConfigError(f"configuration file not found: {config_path}")
            return cls.from_file(config_path)

        config_path = cls.find_config()
        if config_path is not None:
            return cls.from_file(config_path)

        return cls()


def _section(data: dict, name: str) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _parse_types(items: Any) -> list[TypeTableEntry]:
    """Parse the [[types]] array of tables."""
    if not isinstance(items, list):
        raise ConfigError("types must be an array of tables")

    entries = []
    for i, item in enumerate(items):
        if not isinstance(item, dict) or "tag" not in item or "spelling" not in item:
            raise ConfigError(f"types[{i}] needs 'tag' and 'spelling'")
        try:
            entries.append(TypeTableEntry(item["tag"], item["spelling"]))
        except TypeTableError as e:
            raise ConfigError(f"types[{i}]: {e.message}") from e

    try:
        TypeTable(entries)
    except TypeTableError as e:
        raise ConfigError(e.message) from e
    return entries
