"""CLI entrypoints for goku commands."""

from __future__ import annotations

import argparse
import sys
from importlib import metadata
from pathlib import Path

from .analyzers.extractor import StructInfoExtractor
from .analyzers.source import SourceUnit
from .config import load_config
from .errors import GokuError
from .generation.builder import GeneratorOptions, InterfaceGenerator
from .logging import configure_logging, get_logger
from .postproc.gofmt import GofmtFormatter, GoSourceFormatter
from .scanner import PackageScanner

_LOGGER = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goku",
        description="Generate Go interfaces and mocks from a struct's methods.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    iface_parser = subparsers.add_parser(
        "iface",
        help="Generate an interface from a struct's methods.",
    )
    _add_verbose_option(iface_parser, suppress_default=True)
    _add_log_file_option(iface_parser, suppress_default=True)
    iface_parser.add_argument("struct", help="Name of the struct to generate an interface for.")
    iface_parser.add_argument(
        "-d",
        "--dir",
        default=".",
        help="Package directory to scan (defaults to current directory).",
    )
    iface_parser.add_argument(
        "-m",
        "--mock",
        default=None,
        help="Also generate a mock implementation with this name.",
    )
    iface_parser.add_argument(
        "-n",
        "--name",
        default=None,
        help="Interface name (defaults to <STRUCT>Interface).",
    )
    iface_parser.add_argument(
        "-p",
        "--pkg",
        default=None,
        help="Package name to use in the generated file.",
    )
    iface_parser.add_argument(
        "--private",
        action="store_true",
        default=None,
        help="Include unexported methods.",
    )
    iface_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the generated source to this file instead of stdout.",
    )
    iface_parser.add_argument(
        "--formatter",
        choices=("builtin", "gofmt"),
        default=None,
        help="Formatter applied to the generated source.",
    )

    subparsers.add_parser("version", help="Print version.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for goku commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    configure_logging(
        verbose=bool(getattr(args, "verbose", False)),
        log_file=Path(log_file) if log_file else None,
    )

    if args.command == "version":
        print(_version())
        return

    try:
        text = run_iface(args)
    except (GokuError, OSError) as exc:
        parser.exit(1, f"goku iface failed: {exc}\n")

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        _LOGGER.info("Wrote %s", args.output)
    else:
        sys.stdout.write(text)


def run_iface(args: argparse.Namespace) -> str:
    """Scan, extract and render according to parsed ``iface`` arguments."""
    directory = Path(args.dir)
    config = load_config(directory)

    scanner = PackageScanner(config.exclude_paths)
    output = Path(args.output).resolve() if args.output else None
    unit = SourceUnit()
    for path in scanner.scan(directory):
        if output is not None and path.resolve() == output:
            continue
        unit.ingest_file(path)

    contract = StructInfoExtractor(unit).extract(args.struct)

    options = GeneratorOptions(
        mock_name=args.mock or config.mock_name or "",
        include_private=bool(args.private if args.private is not None else config.include_private),
        package_override=args.pkg or config.package_override or "",
    )
    formatter_name = args.formatter or config.formatter
    formatter = GofmtFormatter() if formatter_name == "gofmt" else GoSourceFormatter()
    interface_name = args.name or f"{args.struct}{config.interface_suffix}"
    return InterfaceGenerator(formatter=formatter).generate(contract, interface_name, options)


def _version() -> str:
    try:
        return metadata.version("goku")
    except metadata.PackageNotFoundError:
        return "unknown"


if __name__ == "__main__":
    main(sys.argv[1:])
