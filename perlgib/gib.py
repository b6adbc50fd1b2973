"""Generate Markdown documentation and run embedded tests for Perl libraries.

Documentation lives in comments: ``##!`` lines after the ``package``
statement describe the module, ``###`` lines before a ``sub`` (or a Moose
``has``/``around``... declaration) describe that item. A fenced block inside
a ``###`` comment is the routine's test, run through ``prove``.
"""

import argparse
import logging
from pathlib import Path
from typing import Any

from perlgib.load_config import load_config
from perlgib.run_gib import run_doc, run_test


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="perlgib",
        description="Generate Perl library documentation and run module tests.",
    )
    ap.add_argument(
        "command",
        choices=["doc", "test"],
        help="'doc' writes Markdown pages, 'test' runs embedded module tests",
    )
    ap.add_argument(
        "--library-path",
        type=Path,
        help="Directory with Perl modules and Markdown files (default: lib)",
    )
    ap.add_argument(
        "--output-path",
        type=Path,
        help="Output directory for documentation (default: doc)",
    )
    ap.add_argument(
        "--library-name",
        help="Library name, used as index header (default: Library)",
    )
    ap.add_argument(
        "--document-private-items",
        action="store_true",
        help="Include subroutines and attributes whose name starts with '_'",
    )
    ap.add_argument(
        "--document-ignored-items",
        action="store_true",
        help="Include items marked with #[ignore(item)]",
    )
    ap.add_argument(
        "--no-index",
        action="store_true",
        help="Do not generate the index page",
    )
    ap.add_argument(
        "--timeout",
        type=float,
        help="Seconds before a module test run is aborted (default: 300)",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return ap.parse_args(argv)


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the options given on the command line."""
    overrides: dict[str, Any] = {}
    if args.library_path:
        overrides["library_path"] = str(args.library_path)
    if args.output_path:
        overrides["output_path"] = str(args.output_path)
    if args.library_name:
        overrides["library_name"] = args.library_name
    for flag in ("document_private_items", "document_ignored_items", "no_index"):
        if getattr(args, flag):
            overrides[flag] = True
    if args.timeout is not None:
        overrides["test"] = {"timeout": args.timeout}
    return overrides


def main(argv: list[str] | None = None) -> int:
    """Run the requested command."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config, _overrides(args))
    if args.command == "test":
        return run_test(config)
    return run_doc(config)


if __name__ == "__main__":
    raise SystemExit(main())
