"""Command-line interface for bibparse."""

import argparse
import logging
import sys
from pathlib import Path

from .bibfile import read_entries, read_text, write_entries
from .config import RenderConfig
from .exceptions import BibparseError
from .interop import write_bibtexparser
from .lexer import tokenize
from .render import render_entries
from .serialize import entries_to_json
from .tokens import TokenKind


def setup_logging(verbosity: int = 0) -> None:
    """Configure logging for the CLI application.

    Args:
        verbosity: Logging verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s:%(lineno)d – %(message)s",
    )


def _emit_output(text: str, output: str | None) -> None:
    """Write ``text`` to the output file, or to stdout when none is given."""
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logging.getLogger(__name__).info(f"✓ Saved to: {output_path}")
    else:
        sys.stdout.write(text + "\n")


def cmd_check(args: argparse.Namespace) -> None:
    """Report how many entries in each file parse cleanly."""
    logger = logging.getLogger(__name__)
    all_clean = True

    try:
        for name in args.files:
            path = Path(name)
            entries = read_entries(path)
            text = read_text(path)
            candidates = sum(1 for token in tokenize(text) if token.kind is TokenKind.ENTRY_START)
            skipped = candidates - len(entries)

            if skipped:
                all_clean = False
                logger.warning(f"{path}: {skipped} of {candidates} entries could not be parsed")
            else:
                logger.info(f"✓ {path}: {len(entries)} entries")
            sys.stdout.write(f"{path}: {len(entries)} parsed, {skipped} skipped\n")

    except (FileNotFoundError, BibparseError) as e:
        logger.error(f"Check error: {e}")
        sys.exit(1)

    if args.strict and not all_clean:
        logger.error("✗ Some entries could not be parsed")
        sys.exit(1)
    sys.exit(0)


def cmd_format(args: argparse.Namespace) -> None:
    """Rewrite a .bib file in canonical form."""
    logger = logging.getLogger(__name__)

    try:
        config = RenderConfig.from_options(indent_width=args.indent, align=not args.no_align)
        entries = read_entries(Path(args.file))

        if args.in_place:
            count = write_entries(entries, Path(args.file), config)
            logger.info(f"✓ Formatted {count} entries in place")
        else:
            _emit_output(render_entries(entries, config), args.output)
        sys.exit(0)

    except (FileNotFoundError, ValueError, BibparseError) as e:
        logger.error(f"Format error: {e}")
        sys.exit(1)


def cmd_tokens(args: argparse.Namespace) -> None:
    """Dump the token stream of a file, one token per line."""
    logger = logging.getLogger(__name__)
    try:
        text = read_text(Path(args.file))
    except (FileNotFoundError, BibparseError) as e:
        logger.error(f"Tokens error: {e}")
        sys.exit(1)

    for token in tokenize(text):
        sys.stdout.write(f"{token.offset:>6}  {token}\n")
    sys.exit(0)


def cmd_json(args: argparse.Namespace) -> None:
    """Export entries as JSON."""
    logger = logging.getLogger(__name__)

    try:
        entries = read_entries(Path(args.file))
        _emit_output(entries_to_json(entries), args.output)
        logger.info(f"✓ Exported {len(entries)} entries")
        sys.exit(0)

    except (FileNotFoundError, BibparseError) as e:
        logger.error(f"JSON export error: {e}")
        sys.exit(1)


def cmd_export(args: argparse.Namespace) -> None:
    """Export entries through bibtexparser's writer."""
    logger = logging.getLogger(__name__)

    try:
        entries = read_entries(Path(args.file))
        _emit_output(write_bibtexparser(entries).rstrip("\n"), args.output)
        logger.info(f"✓ Exported {len(entries)} entries with bibtexparser")
        sys.exit(0)

    except (FileNotFoundError, BibparseError) as e:
        logger.error(f"Export error: {e}")
        sys.exit(1)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="bibparse",
        description="Parse BibTeX files into entries and write them back in canonical form.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (use -v for INFO, -vv for DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check", help="Count parsed and skipped entries in .bib files"
    )
    check_parser.add_argument("files", nargs="+", help="Paths to .bib files")
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any entry could not be parsed",
    )
    check_parser.set_defaults(func=cmd_check)

    # format subcommand
    format_parser = subparsers.add_parser("format", help="Rewrite a .bib file in canonical form")
    format_parser.add_argument("file", help="Path to the .bib file")
    format_parser.add_argument("-o", "--output", type=str, help="Output file (default: stdout)")
    format_parser.add_argument(
        "--in-place", action="store_true", help="Overwrite the input file"
    )
    format_parser.add_argument(
        "--indent", type=int, default=1, help="Spaces before each attribute (default: 1)"
    )
    format_parser.add_argument(
        "--no-align", action="store_true", help="Do not align '=' signs"
    )
    format_parser.set_defaults(func=cmd_format)

    # tokens subcommand
    tokens_parser = subparsers.add_parser("tokens", help="Dump the token stream of a file")
    tokens_parser.add_argument("file", help="Path to the .bib file")
    tokens_parser.set_defaults(func=cmd_tokens)

    # json subcommand
    json_parser = subparsers.add_parser("json", help="Export entries as JSON")
    json_parser.add_argument("file", help="Path to the .bib file")
    json_parser.add_argument("-o", "--output", type=str, help="Output file (default: stdout)")
    json_parser.set_defaults(func=cmd_json)

    # export subcommand
    export_parser = subparsers.add_parser(
        "export", help="Write entries through bibtexparser's writer"
    )
    export_parser.add_argument("file", help="Path to the .bib file")
    export_parser.add_argument("-o", "--output", type=str, help="Output file (default: stdout)")
    export_parser.set_defaults(func=cmd_export)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the bibparse CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging based on verbosity
    setup_logging(args.verbose)

    # Handle case where no subcommand is provided
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    # Execute the subcommand
    args.func(args)


if __name__ == "__main__":
    main()
