"""Command-line entry point for mdbundle."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from mdbundle.bundler import BundleOptions, BundleReport, bundle_paths
from mdbundle.config import (
    DEFAULT_LAYOUT,
    DEFAULT_MAX_HEADING_SKIP,
    DEFAULT_OUTPUT_FORMAT,
    MDBUNDLE_INPUT_PATH,
    MDBUNDLE_OUTPUT_PATH,
)
from mdbundle.exceptions import MdbundleError
from mdbundle.output_writer import write_bundle, write_stream
from mdbundle.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdbundle",
        description="Validate Markdown topic files and bundle them into Markdown or HTML.",
    )
    parser.add_argument("paths", nargs="*", help="Markdown files or directories (default: $MDBUNDLE_INPUT_PATH)")
    parser.add_argument(
        "-o",
        "--output",
        default=MDBUNDLE_OUTPUT_PATH,
        help="Output file or directory, '-' for stdout (default: $MDBUNDLE_OUTPUT_PATH or '-')",
    )
    parser.add_argument("--format", dest="output_format", choices=("markdown", "html"), default=DEFAULT_OUTPUT_FORMAT)
    parser.add_argument("--layout", choices=("single", "per-document"), default=DEFAULT_LAYOUT)
    parser.add_argument("--title", help="Title for the combined output")
    parser.add_argument("--no-toc", action="store_true", help="Do not render contents")
    parser.add_argument("--strict-toc", action="store_true", help="Fail documents with unresolved contents entries")
    parser.add_argument("--max-heading-skip", type=int, default=DEFAULT_MAX_HEADING_SKIP, metavar="N")
    parser.add_argument("--check", action="store_true", help="Validate only, write nothing")
    parser.add_argument("--partial", action="store_true", help="Write healthy documents even if others failed")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="count", default=0)
    verbosity.add_argument("-q", "--quiet", action="store_true")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    paths = list(args.paths) or ([MDBUNDLE_INPUT_PATH] if MDBUNDLE_INPUT_PATH else [])
    if not paths:
        parser.error("no input paths given and MDBUNDLE_INPUT_PATH is not set")
    if args.max_heading_skip < 0:
        parser.error("--max-heading-skip must be zero or greater")
    if args.layout == "per-document" and args.output == "-" and not args.check:
        parser.error("--layout per-document needs an output directory, not stdout")

    configure_logging(_log_level(args))
    options = BundleOptions(
        output_format=args.output_format,
        layout=args.layout,
        include_toc=not args.no_toc,
        strict_toc=args.strict_toc,
        title=args.title,
        max_heading_skip=args.max_heading_skip,
    )

    try:
        return asyncio.run(_run(paths, options, output=args.output, check=args.check, partial=args.partial))
    except MdbundleError as exc:
        logger.error("%s", exc)
        return EXIT_FAILED


async def _run(
    paths: list[str],
    options: BundleOptions,
    *,
    output: str,
    check: bool,
    partial: bool,
) -> int:
    report = await bundle_paths(paths, options=options)
    _log_report(report)

    if check:
        return EXIT_OK if report.ok else EXIT_FAILED
    if not report.ok and not partial:
        logger.error("Nothing written: %d document(s) failed", len(report.failures))
        return EXIT_FAILED

    if output == "-":
        write_stream(report.result, sys.stdout)
    else:
        written = await write_bundle(report.result, Path(output))
        logger.info("Wrote %d file(s)", len(written), extra={"destination": output})
    return EXIT_OK if report.ok else EXIT_FAILED


def _log_report(report: BundleReport) -> None:
    if report.result is not None:
        for line in report.result.summary.splitlines():
            logger.info(line)
    if report.warnings:
        logger.warning("%d unresolved contents entries", len(report.warnings))


def _log_level(args: argparse.Namespace) -> int:
    if args.quiet:
        return logging.ERROR
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    return logging.WARNING
