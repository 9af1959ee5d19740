"""Command line entry point: ``regcheck check`` / ``regcheck import``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, Callable

from .applier import RegImporter
from .errors import RegCheckError
from .integrity import find_mismatch
from .provider import KeyValueProvider
from .reader import read_file
from .settings import get_settings

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2

ProviderFactory = Callable[[str], KeyValueProvider]


def _default_provider(view: str) -> KeyValueProvider:
    from .winreg_provider import WinRegProvider
    return WinRegProvider(view)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="regcheck",
        description="Check .reg files against the registry and import them.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="exit 0 if the registry already matches FILE")
    check.add_argument("file")
    check.add_argument("--view", choices=("32", "64"), default=settings.default_view)

    imp = sub.add_parser("import", help="import FILE unless the registry already matches")
    imp.add_argument("file")
    imp.add_argument("--view", "--arch", dest="view", choices=("32", "64"),
                     default=settings.default_view)
    imp.add_argument("--force", action="store_true", help="import even if already applied")
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_check(args, provider_factory: ProviderFactory, dest: IO[str]) -> int:
    doc = read_file(args.file)
    mismatch = find_mismatch(doc, provider_factory(args.view))
    if mismatch is None:
        print(f"{args.file}: up to date", file=dest)
        return EXIT_OK
    print(f"{args.file}: {mismatch}", file=dest)
    return EXIT_MISMATCH


def _cmd_import(args, provider_factory: ProviderFactory, importer: RegImporter, dest: IO[str]) -> int:
    doc = read_file(args.file)
    if not args.force and find_mismatch(doc, provider_factory(args.view)) is None:
        print(f"{args.file}: already applied, skipping", file=dest)
        return EXIT_OK
    importer.apply(doc, args.view)
    print(f"{args.file}: imported", file=dest)
    return EXIT_OK


def main(
    argv: list[str] | None = None,
    provider_factory: ProviderFactory = _default_provider,
    importer: RegImporter | None = None,
    dest: IO[str] | None = None,
) -> int:
    """``regcheck`` console script / ``python -m regcheck``."""
    args = build_parser().parse_args(argv)
    dest = dest or sys.stdout

    level = logging.DEBUG if args.verbose else get_settings().log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "check":
            return _cmd_check(args, provider_factory, dest)
        return _cmd_import(args, provider_factory, importer or RegImporter(), dest)
    except RegCheckError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
