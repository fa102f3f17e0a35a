"""mdbundle: validate and bundle Markdown topic files."""

from mdbundle.bundler import BundleOptions, BundleReport, bundle_paths, bundle_texts
from mdbundle.exceptions import (
    AmbiguousAnchorError,
    BundleError,
    MdbundleError,
    ParseError,
    RenderError,
    SourceError,
)
from mdbundle.html_renderer import render_html
from mdbundle.linker import link_document
from mdbundle.output_formatter import render_bundle, render_document_markdown, render_markdown
from mdbundle.parser import parse_document
from mdbundle.schemas import (
    BundleResult,
    CodeBlock,
    Document,
    LinkReport,
    Section,
    TocEntry,
    UnresolvedTocEntry,
)
from mdbundle.slugs import slugify

__all__ = [
    "AmbiguousAnchorError",
    "BundleError",
    "BundleOptions",
    "BundleReport",
    "BundleResult",
    "CodeBlock",
    "Document",
    "LinkReport",
    "MdbundleError",
    "ParseError",
    "RenderError",
    "Section",
    "SourceError",
    "TocEntry",
    "UnresolvedTocEntry",
    "bundle_paths",
    "bundle_texts",
    "link_document",
    "parse_document",
    "render_bundle",
    "render_document_markdown",
    "render_html",
    "render_markdown",
    "slugify",
]
