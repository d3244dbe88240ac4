"""Command line interface for reformatting JSON documents."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Optional

from .matching import describe
from .parsing import parse
from .result import Err
from .serialization import stringify


class CLIError(RuntimeError):
    """Raised when CLI input cannot be read."""


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="typed-json",
        description="Validate and reformat a JSON document",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Path to a JSON file; standard input is read when omitted",
    )
    spacing = parser.add_mutually_exclusive_group()
    spacing.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indent nested members with N spaces (clamped to 0..10)",
    )
    spacing.add_argument(
        "--indent-text",
        default=None,
        help="Indent nested members with TEXT (first 10 characters)",
    )
    parser.add_argument(
        "--describe",
        action="store_true",
        help="Print a tagged outline of the document instead of JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = read_input(args.input)
    except CLIError as exc:
        parser.error(str(exc))
        return 2

    parsed = parse(text)
    if isinstance(parsed, Err):
        print(f"Invalid JSON: {parsed.error}", file=sys.stderr)
        return 1

    if args.describe:
        print(describe(parsed.value))
        return 0

    space = args.indent_text if args.indent_text is not None else args.indent
    rendered = stringify(parsed.value, None, space)
    if isinstance(rendered, Err):
        print(f"Unable to serialize document: {rendered.error}", file=sys.stderr)
        return 1

    print(rendered.value)
    return 0


def read_input(path: Optional[str]) -> str:
    """Return the document text from ``path``, or from stdin when ``path`` is ``None``."""
    if path is None:
        try:
            return sys.stdin.read()
        except OSError as exc:
            raise CLIError(f"Failed to read standard input: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise CLIError(f"Standard input is not valid UTF-8: {exc}") from exc
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"Failed to read JSON file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise CLIError(f"JSON file {path} is not valid UTF-8: {exc}") from exc


if __name__ == "__main__":
    raise SystemExit(main())
