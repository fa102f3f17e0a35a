"""Bundling pipeline: parse, link, and render a set of topic files."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Literal

from mdbundle.config import (
    DEFAULT_ENCODING,
    DEFAULT_LAYOUT,
    DEFAULT_MAX_HEADING_SKIP,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_SOURCE_SUFFIXES,
)
from mdbundle.exceptions import AmbiguousAnchorError, BundleError, ParseError
from mdbundle.files import discover_sources, read_source
from mdbundle.linker import link_document
from mdbundle.output_formatter import render_bundle
from mdbundle.parser import parse_document
from mdbundle.schemas import BundleResult, Document, DocumentFailure, LinkReport, UnresolvedTocEntry

logger = logging.getLogger(__name__)


@dataclass
class BundleOptions:
    """Options for a bundling run.

    Attributes:
        output_format: Rendered format ("markdown" or "html").
        layout: "single" for one combined output, "per-document" for one
            output per source file.
        include_toc: If True, render generated and declared contents.
        strict_toc: If True, unresolved contents entries fail the document.
        title: Optional title for the combined output.
        max_heading_skip: Heading depths that may be skipped before a
            heading counts as badly nested.
        encoding: Source file encoding.
        suffixes: File suffixes collected from input directories.
    """

    output_format: Literal["markdown", "html"] = DEFAULT_OUTPUT_FORMAT
    layout: Literal["single", "per-document"] = DEFAULT_LAYOUT
    include_toc: bool = True
    strict_toc: bool = False
    title: str | None = None
    max_heading_skip: int = DEFAULT_MAX_HEADING_SKIP
    encoding: str = DEFAULT_ENCODING
    suffixes: tuple[str, ...] = DEFAULT_SOURCE_SUFFIXES


@dataclass
class BundleReport:
    """Everything a bundling run produced."""

    documents: list[Document] = field(default_factory=list)
    link_reports: list[LinkReport] = field(default_factory=list)
    failures: list[DocumentFailure] = field(default_factory=list)
    result: BundleResult | None = None

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def warnings(self) -> list[UnresolvedTocEntry]:
        return [entry for report in self.link_reports for entry in report.unresolved]

    def raise_for_failures(self) -> None:
        """Raise BundleError if any document failed."""
        if self.failures:
            raise BundleError(self.failures)


@dataclass
class DocumentOutcome:
    """Result of parsing and linking a single document."""

    document: Document | None = None
    report: LinkReport | None = None
    failure: DocumentFailure | None = None


def process_text(text: str, *, source: str | None = None, options: BundleOptions | None = None) -> DocumentOutcome:
    """Parse and link one document, turning per-document errors into failures."""
    opts = options or BundleOptions()
    name = source or "<text>"
    try:
        document = parse_document(text, source=source, max_heading_skip=opts.max_heading_skip)
    except ParseError as exc:
        return DocumentOutcome(
            failure=DocumentFailure(
                document=exc.document, source=source, kind="parse", message=str(exc), line=exc.line
            )
        )

    try:
        report = link_document(document)
    except AmbiguousAnchorError as exc:
        return DocumentOutcome(
            failure=DocumentFailure(
                document=document.title, source=source, kind="ambiguous_anchor", message=str(exc)
            )
        )

    if opts.strict_toc and report.unresolved:
        first = report.unresolved[0]
        return DocumentOutcome(
            report=report,
            failure=DocumentFailure(
                document=document.title,
                source=source,
                kind="unresolved_toc",
                message=f"{len(report.unresolved)} unresolved contents entries; first: {first.describe()}",
                line=first.line,
            ),
        )

    logger.debug("Linked %s (%s)", document.title, name)
    return DocumentOutcome(document=document, report=report)


async def bundle_texts(
    texts: Iterable[tuple[str, str]],
    *,
    options: BundleOptions | None = None,
) -> BundleReport:
    """Run the pipeline over in-memory ``(name, text)`` pairs.

    Documents are processed concurrently in worker threads; the report keeps
    the input order.
    """
    opts = options or BundleOptions()
    outcomes = await asyncio.gather(
        *(asyncio.to_thread(process_text, text, source=name, options=opts) for name, text in texts)
    )
    return _collect(outcomes, opts)


async def bundle_paths(
    paths: Iterable[Path | str],
    *,
    options: BundleOptions | None = None,
) -> BundleReport:
    """Discover, parse, link, and render Markdown files.

    Args:
        paths: Files and directories to bundle.
        options: Processing options. Uses defaults if None.

    Returns:
        A BundleReport. Documents that failed to parse or link are listed in
        ``failures``; every healthy document is still rendered.

    Raises:
        SourceError: If an input path is missing or unreadable.
    """
    opts = options or BundleOptions()
    sources = discover_sources(paths, opts.suffixes)
    logger.info("Bundling %d source file(s)", len(sources))

    async def _process(path: Path) -> DocumentOutcome:
        text = await asyncio.to_thread(read_source, path, opts.encoding)
        return await asyncio.to_thread(process_text, text, source=str(path), options=opts)

    outcomes = await asyncio.gather(*(_process(path) for path in sources))
    return _collect(outcomes, opts)


def _collect(outcomes: Iterable[DocumentOutcome], opts: BundleOptions) -> BundleReport:
    report = BundleReport()
    for outcome in outcomes:
        if outcome.report is not None:
            report.link_reports.append(outcome.report)
            for entry in outcome.report.unresolved:
                logger.warning(entry.describe())
        if outcome.failure is not None:
            logger.error("%s", outcome.failure.message, extra={"kind": outcome.failure.kind})
            report.failures.append(outcome.failure)
            continue
        if outcome.document is not None:
            report.documents.append(outcome.document)

    report.result = render_bundle(
        report.documents,
        output_format=opts.output_format,
        layout=opts.layout,
        include_toc=opts.include_toc,
        title=opts.title,
    )
    return report
