"""Rendered output models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RenderedOutput(BaseModel):
    """One rendered artifact and its suggested file name."""

    name: str
    content: str


class BundleResult(BaseModel):
    """Final rendering output."""

    summary: str
    sections_tree: str
    output_format: str
    layout: str = "single"
    outputs: list[RenderedOutput] = Field(default_factory=list)
