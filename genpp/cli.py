"""
Command-line interface for genpp.

Usage:
    genpp [options] [FILE ...]

All FILEs are read as one stream (standard input if none are given) and
the expanded source is written to standard output. With --outdir each
FILE is expanded on its own into OUTDIR/<stem>.c instead.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .config import GenppConfig
from .errors import GenppError
from .expander import GenericBlockExpander, LocatedLine
from .generators import GeneratedFile
from .types.registry import Tag, TypeTableEntry

logger = logging.getLogger("genpp.cli")

STDIN = "-"


def parse_assignment(text: str) -> tuple[str, str]:
    """Parse NAME=VALUE."""
    name, sep, value = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    return name, value


def parse_tag(text: str) -> Tag:
    """Integer tags stay integers, anything else is a symbolic tag."""
    try:
        return int(text, 0)
    except ValueError:
        return text


def read_inputs(inputs: Iterable[str]) -> Iterator[LocatedLine]:
    """Lines of all inputs in order, ``-`` being standard input."""
    for name in inputs:
        if name == STDIN:
            logger.info("Reading: <stdin>")
            for lineno, line in enumerate(sys.stdin, start=1):
                yield "<stdin>", lineno, line
            continue

        logger.info("Reading: %s", name)
        with open(name, encoding="utf-8", newline="") as f:
            for lineno, line in enumerate(f, start=1):
                yield name, lineno, line


def write_output(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def expand_stream(
    expander: GenericBlockExpander,
    inputs: list[str],
    output: Optional[Path] = None,
) -> int:
    """Expand all inputs as one stream to stdout or a single file."""
    try:
        content = "".join(expander.expand_located(read_inputs(inputs)))
    except GenppError as e:
        print(f"genpp: {e.describe()}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"genpp: {e}", file=sys.stderr)
        return 1

    if output is None:
        sys.stdout.write(content)
        sys.stdout.flush()
    else:
        write_output(output, content)
        logger.info("Generated: %s", output)
    return 0


def expand_per_file(
    expander: GenericBlockExpander,
    inputs: list[str],
    outdir: Path,
) -> int:
    """Expand every input on its own into outdir."""
    config = expander.config
    success_count = 0
    error_count = 0
    # target -> input it was generated from in this run
    written: dict[Path, Path] = {}

    for name in inputs:
        source = Path(name)
        target = outdir / (source.stem + config.generation.suffix)

        if target in written:
            print(
                f"genpp: {source}: output {target} already written from {written[target]}",
                file=sys.stderr,
            )
            error_count += 1
            continue

        # Check if file exists and overwrite is disabled
        if target.exists() and not config.generation.overwrite:
            logger.info("Skipping (exists): %s", target)
            continue

        try:
            result = GeneratedFile(
                path=target,
                content="".join(expander.expand_files([source])),
                source=source,
            )
        except GenppError as e:
            print(f"genpp: {e.describe()}", file=sys.stderr)
            error_count += 1
            continue
        except OSError as e:
            print(f"genpp: error processing {source}: {e}", file=sys.stderr)
            error_count += 1
            continue

        write_output(result.path, result.content)
        written[target] = source
        logger.info("Generated: %s", result.path)
        success_count += 1

    print(f"Generated {success_count} files, {error_count} errors")
    return 0 if error_count == 0 else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genpp",
        description="Expand generic-type blocks into per-type switch statements",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preprocess one file to stdout
  genpp foo.g > foo.c

  # Several files as one stream
  genpp a.g b.g -o ab.c

  # Each file on its own into build/
  genpp -d build *.g

  # Custom type table
  genpp -t 1=long -t 2=float foo.g
""",
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="FILE",
        help="Input files ('-' or none for standard input)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file (genpp.toml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Verbose output (-vv for debug)",
    )

    out = parser.add_mutually_exclusive_group()
    out.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: standard output)",
    )
    out.add_argument(
        "--outdir", "-d",
        type=Path,
        help="Expand each FILE separately into this directory",
    )

    parser.add_argument(
        "--type", "-t",
        dest="types",
        type=parse_assignment,
        action="append",
        default=[],
        metavar="TAG=SPELLING",
        help="Add a type or override a type's spelling",
    )
    parser.add_argument(
        "--define", "-D",
        dest="defines",
        type=parse_assignment,
        action="append",
        default=[],
        metavar="WORD=VALUE",
        help="Replace WORD by VALUE on every line",
    )
    parser.add_argument(
        "--placeholder",
        help="Placeholder word inside generic blocks",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite existing files in --outdir mode",
    )
    parser.add_argument(
        "--list-types",
        action="store_true",
        help="Print the type table and exit",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Setup logging
    if args.verbose >= 2:
        log_level = logging.DEBUG
    elif args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )
    logging.getLogger("genpp").setLevel(log_level)

    try:
        # Load configuration
        config = GenppConfig.load(args.config)

        # Apply CLI overrides
        if args.overwrite:
            config.generation.overwrite = True
        if args.placeholder:
            config.markers.placeholder = args.placeholder
        for word, value in args.defines:
            config.substitutions[word] = value
        if args.types:
            table = config.type_table().updated(
                TypeTableEntry(parse_tag(tag), spelling) for tag, spelling in args.types
            )
            config.types = list(table)

        expander = GenericBlockExpander(config=config)
    except GenppError as e:
        print(f"genpp: {e.describe()}", file=sys.stderr)
        return 1

    if args.list_types:
        for entry in expander.table:
            print(f"{entry.tag}\t{entry.spelling}")
        return 0

    inputs = args.inputs or [STDIN]

    if args.outdir is not None:
        if STDIN in inputs:
            parser.error("--outdir needs input files")
        return expand_per_file(expander, inputs, args.outdir)

    return expand_stream(expander, inputs, args.output)


if __name__ == "__main__":
    sys.exit(main())
