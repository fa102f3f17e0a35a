"""Parse Markdown topic files into documents."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterable
from urllib.parse import unquote

from mdbundle.config import DEFAULT_MAX_HEADING_SKIP, DEFAULT_TOC_TITLES, DEFAULT_UNTITLED
from mdbundle.exceptions import ParseError
from mdbundle.schemas import CodeBlock, Document, ProseBlock, Section, TocEntry
from mdbundle.slugs import AnchorRegistry, normalize_title

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
_FENCE_OPEN_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")
_TOC_ITEM_RE = re.compile(
    r"^\s*(?:[-*+]|\d+[.)])\s+\[(?P<label>[^\]]+)\]\((?P<target>[^)\s]+)(?:\s+\"[^\"]*\")?\)"
)


@dataclass
class _OpenFence:
    fence: str
    info: str
    line: int
    newline: str = "\n"
    lines: list[str] = field(default_factory=list)

    def closed_by(self, line: str) -> bool:
        match = _FENCE_CLOSE_RE.match(line)
        if not match:
            return False
        run = match.group(1)
        return run[0] == self.fence[0] and len(run) >= len(self.fence)

    def to_block(self, closing_newline: str) -> CodeBlock:
        language = self.info.split()[0] if self.info.strip() else ""
        return CodeBlock(
            language=language,
            info=self.info,
            fence=self.fence,
            content="".join(self.lines),
            line=self.line,
            newline=self.newline,
            closing_newline=closing_newline,
        )


@dataclass
class _PendingSection:
    level: int
    title: str
    anchor: str
    line: int
    newline: str = "\n"
    blocks: list[ProseBlock | CodeBlock] = field(default_factory=list)
    prose: list[str] = field(default_factory=list)
    links: list[TocEntry] = field(default_factory=list)

    def flush(self) -> None:
        if self.prose:
            self.blocks.append(ProseBlock(text="".join(self.prose)))
            self.prose = []


class _DocumentBuilder:
    def __init__(self, source: str | None, max_heading_skip: int) -> None:
        self.source = source
        self.max_heading_skip = max_heading_skip
        self.title: str | None = None
        self.anchors = AnchorRegistry()
        self.preamble = _PendingSection(level=1, title="", anchor="", line=1)
        self.sections: list[_PendingSection] = []

    @property
    def current(self) -> _PendingSection:
        return self.sections[-1] if self.sections else self.preamble

    @property
    def name(self) -> str:
        if self.title:
            return self.title
        if self.source:
            return PurePath(self.source).stem or self.source
        return DEFAULT_UNTITLED

    def start_section(self, level: int, title: str, line: int, newline: str = "\n") -> None:
        if not title:
            raise ParseError("heading has no text", document=self.name, line=line)
        if self.sections:
            parent_level = self.sections[-1].level
            if level > parent_level + 1 + self.max_heading_skip:
                raise ParseError(
                    f"heading level {level} follows level {parent_level} without an intervening parent",
                    document=self.name,
                    line=line,
                    section=title,
                )
        if level == 1 and self.title is None:
            self.title = title
        self.current.flush()
        self.sections.append(
            _PendingSection(
                level=level, title=title, anchor=self.anchors.assign(title), line=line, newline=newline
            )
        )

    def add_prose(self, raw: str, line: int) -> None:
        self.current.prose.append(raw)
        match = _TOC_ITEM_RE.match(raw)
        if match and match.group("target").startswith("#"):
            self.current.links.append(
                TocEntry(
                    label=match.group("label").strip(),
                    anchor=unquote(match.group("target")[1:]),
                    line=line,
                )
            )

    def add_code(self, fence: _OpenFence, closing_newline: str) -> None:
        self.current.flush()
        self.current.blocks.append(fence.to_block(closing_newline))

    def build(self, toc_titles: Iterable[str]) -> Document:
        self.current.flush()
        sections = tuple(
            Section(
                level=pending.level,
                title=pending.title,
                anchor=pending.anchor,
                line=pending.line,
                blocks=tuple(pending.blocks),
                newline=pending.newline,
            )
            for pending in self.sections
        )
        toc, toc_anchor = self._declared_contents(set(toc_titles))
        return Document(
            title=self.name,
            source=self.source,
            preamble=tuple(self.preamble.blocks),
            sections=sections,
            toc=toc,
            toc_anchor=toc_anchor,
        )

    def _declared_contents(self, toc_titles: set[str]) -> tuple[tuple[TocEntry, ...], str | None]:
        for pending in self.sections:
            if normalize_title(pending.title).rstrip(":") in toc_titles:
                return tuple(pending.links), pending.anchor

        entries = list(self.preamble.links)
        if self.sections and self.sections[0].level == 1:
            entries.extend(self.sections[0].links)
        return tuple(entries), None


def parse_document(
    text: str,
    *,
    source: str | None = None,
    max_heading_skip: int = DEFAULT_MAX_HEADING_SKIP,
    toc_titles: Iterable[str] = DEFAULT_TOC_TITLES,
) -> Document:
    """Parse Markdown text into a Document.

    Headings outside code fences split the text into sections; fenced code
    blocks are kept verbatim. The declared contents are the fragment links
    listed under a ``Contents``-style heading, or in the document's lead-in
    when no such heading exists.

    Args:
        text: Raw Markdown text.
        source: Optional path or name of the file, used for the title
            fallback and in error messages.
        max_heading_skip: How many heading depths may be skipped between a
            heading and the one before it.
        toc_titles: Normalized heading titles that mark a contents section.

    Returns:
        The parsed, immutable Document.

    Raises:
        ParseError: If a code fence is never closed, a heading is empty, or
            heading levels skip too deep.
    """
    builder = _DocumentBuilder(source, max_heading_skip)
    fence: _OpenFence | None = None

    for lineno, raw in enumerate(text.splitlines(keepends=True), start=1):
        line = raw.rstrip("\r\n")
        newline = raw[len(line) :]

        if fence is not None:
            if fence.closed_by(line):
                builder.add_code(fence, newline)
                fence = None
            else:
                fence.lines.append(raw)
            continue

        opening = _FENCE_OPEN_RE.match(line)
        if opening and not (opening.group(2)[0] == "`" and "`" in opening.group(3)):
            fence = _OpenFence(
                fence=opening.group(2), info=opening.group(3).strip(), line=lineno, newline=newline
            )
            continue

        heading = _HEADING_RE.match(line)
        if heading:
            builder.start_section(len(heading.group(1)), (heading.group(2) or "").strip(), lineno, newline)
            continue

        builder.add_prose(raw, lineno)

    if fence is not None:
        section = builder.sections[-1].title if builder.sections else None
        raise ParseError(
            f"code fence {fence.fence!r} opened here is never closed",
            document=builder.name,
            line=fence.line,
            section=section,
        )

    document = builder.build(toc_titles)
    logger.debug(
        "Parsed %s: %d sections, %d code blocks, %d contents entries",
        document.title,
        len(document.sections),
        len(document.code_blocks),
        len(document.toc),
    )
    return document
