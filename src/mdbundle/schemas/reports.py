"""Linking and bundling report models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from mdbundle.schemas.document import TocEntry


class UnresolvedTocEntry(BaseModel):
    """A contents entry whose anchor matches no section."""

    model_config = ConfigDict(frozen=True)

    document: str
    label: str
    anchor: str
    line: int
    suggestion: str | None = None

    def describe(self) -> str:
        text = f"{self.document}, line {self.line}: contents entry '{self.label}' points to missing anchor '#{self.anchor}'"
        if self.suggestion:
            text += f" (did you mean '#{self.suggestion}'?)"
        return text


class LinkReport(BaseModel):
    """Outcome of checking a document's contents against its sections."""

    model_config = ConfigDict(frozen=True)

    document: str
    resolved: tuple[TocEntry, ...] = ()
    unresolved: tuple[UnresolvedTocEntry, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.unresolved


class DocumentFailure(BaseModel):
    """A document that could not be bundled."""

    model_config = ConfigDict(frozen=True)

    document: str
    source: str | None = None
    kind: Literal["parse", "ambiguous_anchor", "unresolved_toc"]
    message: str
    line: int | None = None
