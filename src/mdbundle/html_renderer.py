"""Render parsed documents as a static HTML page."""

from __future__ import annotations

import re
from typing import Sequence

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML rendering (pip install beautifulsoup4)."
    ) from exc

from mdbundle.schemas import CodeBlock, Document, ProseBlock
from mdbundle.slugs import slugify, unique_names

_PAGE_SKELETON = (
    "<!DOCTYPE html>"
    '<html lang="en"><head><meta charset="utf-8"/><title></title></head>'
    "<body></body></html>"
)
_DEFAULT_BUNDLE_TITLE = "Documentation"
_PARAGRAPH_SPLIT_RE = re.compile(r"\n[ \t]*\n")
_INLINE_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")


def render_html(
    documents: Sequence[Document],
    *,
    include_toc: bool = True,
    title: str | None = None,
) -> str:
    """Render documents into one HTML page.

    Section anchors become heading ids. When several documents share the
    page, ids are prefixed with the document's own slug so anchors from
    different documents cannot collide. Code blocks are emitted as
    ``<pre><code>`` with their content untouched.
    """
    soup = BeautifulSoup(_PAGE_SKELETON, "html.parser")
    if title is None:
        title = documents[0].title if len(documents) == 1 else _DEFAULT_BUNDLE_TITLE
    soup.title.string = title
    body = soup.body

    document_ids = unique_names(slugify(document.title) for document in documents)
    prefixed = len(documents) > 1

    if prefixed:
        heading = soup.new_tag("h1")
        heading.string = title
        body.append(heading)
        if include_toc:
            body.append(_bundle_nav(soup, documents, document_ids))

    for document, document_id in zip(documents, document_ids):
        prefix = f"{document_id}--" if prefixed else ""
        body.append(_render_article(soup, document, document_id, prefix, include_toc=include_toc))

    return str(soup)


def _render_article(
    soup: BeautifulSoup,
    document: Document,
    document_id: str,
    prefix: str,
    *,
    include_toc: bool,
) -> Tag:
    article = soup.new_tag("article", attrs={"id": document_id})
    anchors = set(document.anchors)
    _append_blocks(soup, article, document.preamble, prefix)

    for section in document.sections:
        heading = soup.new_tag(f"h{section.level}", attrs={"id": prefix + section.anchor})
        heading.string = section.title
        article.append(heading)

        if include_toc and section.anchor == document.toc_anchor:
            article.append(_document_nav(soup, document, anchors, prefix))
            code_only = [block for block in section.blocks if isinstance(block, CodeBlock)]
            _append_blocks(soup, article, code_only, prefix)
            continue
        _append_blocks(soup, article, section.blocks, prefix)

    return article


def _append_blocks(
    soup: BeautifulSoup,
    parent: Tag,
    blocks: Sequence[ProseBlock | CodeBlock],
    prefix: str,
) -> None:
    for block in blocks:
        if isinstance(block, CodeBlock):
            parent.append(_code_block(soup, block))
            continue
        text = block.text.replace("\r\n", "\n").strip("\n")
        for paragraph in _PARAGRAPH_SPLIT_RE.split(text):
            if paragraph.strip():
                parent.append(_paragraph(soup, paragraph, prefix))


def _code_block(soup: BeautifulSoup, block: CodeBlock) -> Tag:
    pre = soup.new_tag("pre")
    attrs = {"class": f"language-{block.language}"} if block.language else {}
    code = soup.new_tag("code", attrs=attrs)
    code.string = block.content
    pre.append(code)
    return pre


def _paragraph(soup: BeautifulSoup, text: str, prefix: str) -> Tag:
    paragraph = soup.new_tag("p")
    position = 0
    for match in _INLINE_LINK_RE.finditer(text):
        if match.start() > position:
            paragraph.append(text[position : match.start()])
        href = match.group(2)
        if href.startswith("#"):
            href = f"#{prefix}{href[1:]}"
        link = soup.new_tag("a", attrs={"href": href})
        link.string = match.group(1)
        paragraph.append(link)
        position = match.end()
    if position < len(text):
        paragraph.append(text[position:])
    return paragraph


def _document_nav(soup: BeautifulSoup, document: Document, anchors: set[str], prefix: str) -> Tag:
    nav = soup.new_tag("nav", attrs={"class": "toc"})
    items = soup.new_tag("ul")
    for entry in document.toc:
        item = soup.new_tag("li")
        if entry.anchor in anchors:
            target = soup.new_tag("a", attrs={"href": f"#{prefix}{entry.anchor}"})
        else:
            target = soup.new_tag("span", attrs={"class": "unresolved"})
        target.string = entry.label
        item.append(target)
        items.append(item)
    nav.append(items)
    return nav


def _bundle_nav(soup: BeautifulSoup, documents: Sequence[Document], document_ids: list[str]) -> Tag:
    nav = soup.new_tag("nav", attrs={"class": "bundle-toc"})
    items = soup.new_tag("ul")
    for document, document_id in zip(documents, document_ids):
        item = soup.new_tag("li")
        link = soup.new_tag("a", attrs={"href": f"#{document_id}"})
        link.string = document.title
        item.append(link)
        items.append(item)
    nav.append(items)
    return nav
