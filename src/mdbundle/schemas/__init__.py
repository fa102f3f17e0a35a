"""Shared schemas for mdbundle."""

from mdbundle.schemas.document import Block, CodeBlock, Document, ProseBlock, Section, TocEntry, block_markdown
from mdbundle.schemas.output import BundleResult, RenderedOutput
from mdbundle.schemas.reports import DocumentFailure, LinkReport, UnresolvedTocEntry

__all__ = [
    "Block",
    "BundleResult",
    "CodeBlock",
    "Document",
    "DocumentFailure",
    "LinkReport",
    "ProseBlock",
    "RenderedOutput",
    "Section",
    "TocEntry",
    "UnresolvedTocEntry",
    "block_markdown",
]
