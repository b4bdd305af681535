"""
Command-line interface for DOCX Tidy.

Usage:
    docx-tidy tidy input.docx --output tidied.docx
    docx-tidy tidy input.docx --no-remove --parts "word/document.xml"
    docx-tidy xml document.xml --output tidied.xml
    docx-tidy version
"""

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import TidyOptions
from .document import tidy_document
from .engine.markup_tidier import MarkupTidier
from .exceptions import DocxTidyError
from .utils.logger import configure_logging

EXIT_OK = 0
EXIT_INPUT_MISSING = 1
EXIT_TIDY_FAILED = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="docx-tidy",
        description="DOCX Tidy - merge redundant runs and text elements of DOCX markup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  docx-tidy tidy document.docx --output tidied.docx
  docx-tidy tidy document.docx --pattern '<w:lang [^>]*/>'
  docx-tidy xml word/document.xml -o -
  docx-tidy version
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    tidy_parser = subparsers.add_parser("tidy", help="Tidy the XML parts of a DOCX file")
    tidy_parser.add_argument("input", help="Input DOCX file")
    tidy_parser.add_argument(
        "-o", "--output",
        help="Output DOCX file (default: overwrite input)"
    )
    _add_removal_arguments(tidy_parser)
    tidy_parser.add_argument(
        "--no-verify",
        action="store_true",
        help="Do not re-parse tidied parts for well-formedness"
    )
    tidy_parser.add_argument(
        "--parts",
        nargs="+",
        metavar="GLOB",
        help="Archive members to tidy (default: word/*.xml)"
    )

    xml_parser = subparsers.add_parser("xml", help="Tidy a single XML part")
    xml_parser.add_argument("input", help="Input XML file, '-' for stdin")
    xml_parser.add_argument(
        "-o", "--output",
        default="-",
        help="Output XML file, '-' for stdout (default)"
    )
    _add_removal_arguments(xml_parser)

    subparsers.add_parser("version", help="Show version information")

    return parser


def _add_removal_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--no-remove",
        action="store_true",
        help="Skip removal of cosmetic markup (proofing, language, hints)"
    )
    group.add_argument(
        "--pattern",
        action="append",
        metavar="REGEX",
        help="Removal pattern replacing the default set (repeatable)"
    )


def _remove_patterns(args):
    if args.no_remove:
        return False
    return args.pattern


def cmd_tidy(args) -> int:
    """Handle tidy command."""
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return EXIT_INPUT_MISSING

    overrides = {}
    remove_patterns = _remove_patterns(args)
    if remove_patterns is not None:
        overrides["remove_patterns"] = remove_patterns
    if args.no_verify:
        overrides["verify_xml"] = False
    if args.parts:
        overrides["part_patterns"] = tuple(args.parts)

    try:
        options = TidyOptions.from_env(**overrides)
        report = tidy_document(input_path, args.output, options)
    except DocxTidyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_TIDY_FAILED

    stats = report.stats
    print(f"Tidied {len(report.parts)} parts: {report.output}")
    print(f"   Runs: {stats.runs_before} -> {stats.runs_after}")
    print(f"   Elements merged: {stats.elements_merged}")
    print(f"   Size: {report.bytes_before:,} -> {report.bytes_after:,} bytes")
    return EXIT_OK


def cmd_xml(args) -> int:
    """Handle xml command."""
    if args.input == "-":
        xml = sys.stdin.read()
    else:
        input_path = Path(args.input)
        if not input_path.exists():
            print(f"Error: File not found: {input_path}", file=sys.stderr)
            return EXIT_INPUT_MISSING
        xml = input_path.read_text(encoding="utf-8")

    try:
        tidier = MarkupTidier(TidyOptions(remove_patterns=_remove_patterns(args)))
        result = tidier.tidy(xml)
    except DocxTidyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_TIDY_FAILED

    if args.output == "-":
        sys.stdout.write(result)
    else:
        Path(args.output).write_text(result, encoding="utf-8")
    return EXIT_OK


def cmd_version(args=None) -> int:
    """Handle version command."""
    print(f"DOCX Tidy v{__version__}")
    return EXIT_OK


def main(argv=None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else "WARNING", args.log_file)

    if args.command == "tidy":
        return cmd_tidy(args)
    elif args.command == "xml":
        return cmd_xml(args)
    elif args.command == "version":
        return cmd_version(args)

    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
