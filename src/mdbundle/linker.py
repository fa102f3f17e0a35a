"""Check declared contents against section anchors."""

from __future__ import annotations

import logging

from mdbundle.exceptions import AmbiguousAnchorError
from mdbundle.schemas import Document, LinkReport, Section, TocEntry, UnresolvedTocEntry
from mdbundle.slugs import closest_anchor

logger = logging.getLogger(__name__)


def anchor_index(document: Document) -> dict[str, Section]:
    """Map each anchor to its section.

    Raises:
        AmbiguousAnchorError: If two sections carry the same anchor.
    """
    claims: dict[str, list[Section]] = {}
    for section in document.sections:
        claims.setdefault(section.anchor, []).append(section)

    for anchor, sections in claims.items():
        if len(sections) > 1:
            raise AmbiguousAnchorError(
                document=document.title,
                anchor=anchor,
                titles=[section.title for section in sections],
            )
    return {anchor: sections[0] for anchor, sections in claims.items()}


def link_document(document: Document) -> LinkReport:
    """Resolve every contents entry of ``document`` to a section.

    Entries whose anchor matches no section are returned as unresolved
    findings rather than raised, so callers can decide whether to warn or
    reject.

    Raises:
        AmbiguousAnchorError: If an anchor would resolve to more than one
            section.
    """
    index = anchor_index(document)
    resolved: list[TocEntry] = []
    unresolved: list[UnresolvedTocEntry] = []

    for entry in document.toc:
        if entry.anchor in index:
            resolved.append(entry)
            continue
        finding = UnresolvedTocEntry(
            document=document.title,
            label=entry.label,
            anchor=entry.anchor,
            line=entry.line,
            suggestion=closest_anchor(entry.anchor, index),
        )
        logger.debug("Unresolved contents entry: %s", finding.describe())
        unresolved.append(finding)

    return LinkReport(document=document.title, resolved=tuple(resolved), unresolved=tuple(unresolved))
