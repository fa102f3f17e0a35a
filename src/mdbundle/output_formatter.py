"""Format parsed documents into summary, tree, and rendered outputs."""

from __future__ import annotations

from pathlib import PurePath
from typing import Iterable, Literal, Sequence

try:
    import tiktoken
except ImportError:  # pragma: no cover - optional dependency
    tiktoken = None

from mdbundle.config import OUTPUT_SUFFIXES
from mdbundle.html_renderer import render_html
from mdbundle.schemas import BundleResult, Document, RenderedOutput, Section, block_markdown
from mdbundle.slugs import slugify, unique_names

OutputFormat = Literal["markdown", "html"]
Layout = Literal["single", "per-document"]

_BUNDLE_NAME = "bundle"


def render_bundle(
    documents: Sequence[Document],
    *,
    output_format: OutputFormat = "markdown",
    layout: Layout = "single",
    include_toc: bool = True,
    title: str | None = None,
) -> BundleResult:
    """Create summary, sections tree, and rendered outputs.

    Raises:
        ValueError: If ``output_format`` or ``layout`` is not supported.
    """
    if output_format not in OUTPUT_SUFFIXES:
        raise ValueError(f"Unsupported output format: {output_format!r}")
    if layout not in ("single", "per-document"):
        raise ValueError(f"Unsupported layout: {layout!r}")

    suffix = OUTPUT_SUFFIXES[output_format]
    outputs: list[RenderedOutput] = []
    if documents and layout == "single":
        name = _BUNDLE_NAME if title is None and len(documents) > 1 else _output_stem(documents[0], title)
        content = _render(documents, output_format, include_toc=include_toc, title=title)
        outputs.append(RenderedOutput(name=name + suffix, content=content))
    elif documents:
        names = unique_names(_output_stem(document) for document in documents)
        for document, name in zip(documents, names):
            content = _render([document], output_format, include_toc=include_toc, title=None)
            outputs.append(RenderedOutput(name=name + suffix, content=content))

    tree = "Sections:\n" + _create_sections_tree(documents)
    summary_lines = []
    if title:
        summary_lines.append(f"Title: {title}")
    summary_lines.append(f"Documents: {len(documents)}")
    summary_lines.append(f"Sections: {count_sections(documents)}")
    summary_lines.append(f"Code blocks: {count_code_blocks(documents)}")
    summary_lines.append(f"Format: {output_format}")
    token_estimate = _format_token_count("".join(output.content for output in outputs))
    if token_estimate:
        summary_lines.append(f"Estimated tokens: {token_estimate}")

    return BundleResult(
        summary="\n".join(summary_lines),
        sections_tree=tree,
        output_format=output_format,
        layout=layout,
        outputs=outputs,
    )


def render_markdown(
    documents: Sequence[Document],
    *,
    include_toc: bool = True,
    title: str | None = None,
) -> str:
    """Concatenate documents into one Markdown reference.

    A single untitled document is reproduced on its own. Otherwise the
    documents follow an optional title and a generated contents tree.
    """
    if len(documents) == 1 and title is None:
        return render_document_markdown(documents[0])

    blocks: list[str] = []
    if title:
        blocks.append(f"# {title}")
    if include_toc:
        toc = _render_toc(documents)
        if toc:
            blocks.append("## Contents\n" + toc)
    for document in documents:
        blocks.append(render_document_markdown(document).strip("\r\n"))
    return "\n\n".join(block for block in blocks if block) + "\n"


def render_document_markdown(document: Document) -> str:
    """Render one document back to Markdown, code fences verbatim."""
    parts = [block_markdown(block) for block in document.preamble]
    for section in document.sections:
        parts.append(f"{'#' * section.level} {section.title}{section.newline}")
        parts.append(section.body)
    return "".join(parts)


def count_sections(documents: Iterable[Document]) -> int:
    """Count total sections across documents."""
    return sum(len(document.sections) for document in documents)


def count_code_blocks(documents: Iterable[Document]) -> int:
    return sum(len(document.code_blocks) for document in documents)


def _render(
    documents: Sequence[Document],
    output_format: OutputFormat,
    *,
    include_toc: bool,
    title: str | None,
) -> str:
    if output_format == "html":
        return render_html(documents, include_toc=include_toc, title=title)
    return render_markdown(documents, include_toc=include_toc, title=title)


def _output_stem(document: Document, title: str | None = None) -> str:
    if title:
        return slugify(title)
    if document.source:
        return PurePath(document.source).stem
    return slugify(document.title)


def _visible_sections(document: Document) -> list[Section]:
    return [
        section
        for section in document.sections
        if not (section.level == 1 and section.title == document.title)
    ]


def _render_toc(documents: Sequence[Document]) -> str:
    lines: list[str] = []
    for document in documents:
        lines.append("- " + document.title)
        sections = _visible_sections(document)
        if not sections:
            continue
        base = min(section.level for section in sections)
        for section in sections:
            lines.append("  " * (section.level - base + 1) + "- " + section.title)
    return "\n".join(lines)


def _create_sections_tree(documents: Sequence[Document]) -> str:
    lines: list[str] = []
    for document in documents:
        lines.append(document.title)
        for section in document.sections:
            lines.append(" " * (section.level * 4) + section.title)
    return "\n".join(lines)


def _format_token_count(text: str) -> str | None:
    if not tiktoken or not text:
        return None
    try:
        encoding = tiktoken.get_encoding("o200k_base")
        total_tokens = len(encoding.encode(text, disallowed_special=()))
    except Exception:
        return None

    if total_tokens >= 1_000_000:
        return f"{total_tokens / 1_000_000:.1f}M"
    if total_tokens >= 1_000:
        return f"{total_tokens / 1_000:.1f}k"
    return str(total_tokens)
