"""Command-line interface for unescaper."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from unescaper.errors import EscapeError
from unescaper.tokens import Dialect

DIALECT_NAMES = [d.name.lower() for d in Dialect]


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    dialect: Dialect
    strict: bool
    raw: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="unescaper",
        description="Resolve backslash escapes in literal text",
    )
    p.add_argument("input", nargs="?", default="-", help="Input file (default: stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-d",
        "--dialect",
        choices=DIALECT_NAMES,
        default=None,
        help="Escape dialect (default: unicode)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Reject escapes the dialect does not support instead of keeping them",
    )
    p.add_argument(
        "--raw",
        action="store_true",
        help="Write the resolved bytes without checking they are valid UTF-8",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover unescaper.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump recognised escapes to stderr")
    return p


def parse_dialect_arg(s: str) -> Dialect:
    """Parse a dialect name (case-insensitive) into a Dialect."""
    try:
        return Dialect[s.upper()]
    except KeyError:
        raise argparse.ArgumentTypeError(
            f"invalid dialect (expected one of {', '.join(DIALECT_NAMES)}): {s}"
        ) from None


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "unescaper.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    dialect = Dialect.UNICODE
    cfg_dialect = config.get("dialect")
    if cfg_dialect is not None:
        dialect = parse_dialect_arg(str(cfg_dialect))
    if args.dialect is not None:
        dialect = parse_dialect_arg(args.dialect)

    strict = False
    cfg_strict = config.get("strict")
    if isinstance(cfg_strict, bool):
        strict = cfg_strict
    if args.strict is not None:
        strict = args.strict

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        dialect=dialect,
        strict=strict,
        raw=args.raw,
        debug=args.debug,
    )


def unescape_file(options: CliOptions) -> bytes:
    """Read the input and return its escape-resolved bytes."""
    from unescaper.debug import dump_tokens
    from unescaper.resolver import Resolver

    if options.input_file is None:
        source = sys.stdin.buffer.read()
    else:
        source = options.input_file.read_bytes()

    resolver = Resolver(source, options.dialect, strict=options.strict)
    data = resolver.resolve()

    if options.debug:
        dump_tokens(resolver.tokens, options.dialect)

    if not options.raw:
        resolver.decode(data)
    return data


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    filename = str(options.input_file) if options.input_file is not None else "<stdin>"
    try:
        data = unescape_file(options)
        if options.output_file:
            options.output_file.write_bytes(data)
        else:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
    except EscapeError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0


def run() -> None:
    """Console-script wrapper around main()."""
    sys.exit(main())
