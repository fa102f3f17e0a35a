"""Custom exceptions for mdbundle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from mdbundle.schemas import DocumentFailure


class MdbundleError(Exception):
    """Base exception for mdbundle operations."""


class SourceError(MdbundleError):
    """Error while discovering or reading source files."""


class ParseError(MdbundleError):
    """Malformed document structure.

    Attributes:
        document: Title (or source name) of the document being parsed.
        line: 1-based line number closest to the problem.
        section: Title of the heading being parsed, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        document: str,
        line: int | None = None,
        section: str | None = None,
    ) -> None:
        self.document = document
        self.line = line
        self.section = section
        location = f"{document}, line {line}" if line is not None else document
        super().__init__(f"{location}: {message}")


class AmbiguousAnchorError(MdbundleError):
    """Two or more sections of one document share the same anchor."""

    def __init__(self, *, document: str, anchor: str, titles: Sequence[str]) -> None:
        self.document = document
        self.anchor = anchor
        self.titles = tuple(titles)
        quoted = ", ".join(repr(title) for title in self.titles)
        super().__init__(f"{document}: anchor '#{anchor}' is claimed by sections {quoted}")


class RenderError(MdbundleError):
    """Error while writing rendered output."""


class BundleError(MdbundleError):
    """One or more documents failed to parse or link."""

    def __init__(self, failures: Sequence[DocumentFailure]) -> None:
        self.failures = tuple(failures)
        names = ", ".join(failure.document for failure in self.failures)
        super().__init__(f"{len(self.failures)} document(s) failed: {names}")
