"""CLI entry point: ``autowire scan``."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from autowire import __version__
from autowire.autowire import Autowire
from autowire.config import Settings
from autowire.container import InMemoryContainer
from autowire.export.manifest import ManifestFile
from autowire.logging_config import set_package_level, setup_logging


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"autowire {__version__}")
        return

    if args.command == "scan":
        _run_scan(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="autowire",
        description=(
            "Discover TypeScript service classes and wire them "
            "into a dependency-injection container."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    scan = sub.add_parser(
        "scan",
        help="Analyze a source tree",
    )
    scan.add_argument(
        "root",
        type=str,
        help="Directory containing the service classes",
    )
    scan.add_argument(
        "--tsconfig",
        default=None,
        help="tsconfig.json with path aliases (default: ./tsconfig.json)",
    )
    scan.add_argument(
        "--exclude",
        "-x",
        action="append",
        default=[],
        help="Path relative to root to skip (repeatable)",
    )
    scan.add_argument(
        "--marker",
        default=None,
        help="Source-root directory name namespaces start below",
    )
    scan.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the service manifest here (.json, .yml or .yaml)",
    )
    scan.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every skipped file and argument",
    )

    return parser


def _run_scan(args: argparse.Namespace) -> None:
    """Execute the scan command."""
    root = Path(args.root).resolve()
    if not root.is_dir():
        print(f"Error: {root} is not a directory", file=sys.stderr)
        sys.exit(1)

    overrides: dict[str, object] = {}
    if args.marker:
        overrides["source_root_marker"] = args.marker
    settings = Settings(**overrides)  # type: ignore[arg-type]

    setup_logging(settings.log_level)
    if args.verbose:
        set_package_level("DEBUG")

    autowire = Autowire(
        InMemoryContainer(default_dir=root),
        Path(args.tsconfig).resolve() if args.tsconfig else None,
        settings=settings,
    )
    for rel in args.exclude:
        autowire.add_exclude(rel)
    if args.output:
        autowire.manifest_exporter = ManifestFile(Path(args.output))

    report = asyncio.run(autowire.process())
    print(json.dumps(report.model_dump(), indent=2))


if __name__ == "__main__":
    main()
