"""Parsed document models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ProseBlock(BaseModel):
    """Raw prose between headings and code fences, line endings preserved."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["prose"] = "prose"
    text: str


class CodeBlock(BaseModel):
    """A fenced example snippet, kept as opaque text.

    Attributes:
        language: First word of the info string (may be empty).
        info: Full info string following the opening fence.
        fence: The opening fence run, e.g. three backticks.
        content: Raw text between the fences, byte-for-byte.
        line: 1-based line of the opening fence.
        newline: Line ending of the opening fence line.
        closing_newline: Line ending of the closing fence line, empty at
            the end of a file without a final newline.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["code"] = "code"
    language: str = ""
    info: str = ""
    fence: str = "```"
    content: str
    line: int = Field(..., ge=1)
    newline: str = "\n"
    closing_newline: str = "\n"

    @property
    def raw(self) -> str:
        """The fenced block as it appears in Markdown."""
        content = self.content
        if content and not content.endswith(("\n", "\r")):
            content += self.newline
        return f"{self.fence}{self.info}{self.newline}{content}{self.fence}{self.closing_newline}"


Block = Annotated[Union[ProseBlock, CodeBlock], Field(discriminator="kind")]


class Section(BaseModel):
    """A heading and everything up to the next heading."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1, le=6)
    title: str
    anchor: str
    line: int = Field(..., ge=1)
    blocks: tuple[Block, ...] = ()
    newline: str = "\n"

    @property
    def code_blocks(self) -> tuple[CodeBlock, ...]:
        return tuple(block for block in self.blocks if isinstance(block, CodeBlock))

    @property
    def body(self) -> str:
        return "".join(block_markdown(block) for block in self.blocks)


class TocEntry(BaseModel):
    """A declared table-of-contents link."""

    model_config = ConfigDict(frozen=True)

    label: str
    anchor: str
    line: int = Field(..., ge=1)


class Document(BaseModel):
    """One parsed topic file."""

    model_config = ConfigDict(frozen=True)

    title: str
    source: str | None = None
    preamble: tuple[Block, ...] = ()
    sections: tuple[Section, ...] = ()
    toc: tuple[TocEntry, ...] = ()
    toc_anchor: str | None = None

    @property
    def code_blocks(self) -> tuple[CodeBlock, ...]:
        blocks = [block for block in self.preamble if isinstance(block, CodeBlock)]
        for section in self.sections:
            blocks.extend(section.code_blocks)
        return tuple(blocks)

    @property
    def anchors(self) -> tuple[str, ...]:
        return tuple(section.anchor for section in self.sections)


def block_markdown(block: ProseBlock | CodeBlock) -> str:
    """Markdown source of a block, code fences included."""
    if isinstance(block, CodeBlock):
        return block.raw
    return block.text
