"""Local configuration for mdbundle."""

from __future__ import annotations

import os


DEFAULT_ENCODING = "utf-8"
DEFAULT_SOURCE_SUFFIXES = (".md", ".markdown")
DEFAULT_TOC_TITLES = ("contents", "table of contents", "toc", "index")
DEFAULT_MAX_HEADING_SKIP = 1
DEFAULT_OUTPUT_FORMAT = "markdown"
DEFAULT_LAYOUT = "single"
DEFAULT_UNTITLED = "Untitled document"
DEFAULT_SLUG_FALLBACK = "section"

OUTPUT_SUFFIXES = {"markdown": ".md", "html": ".html"}

# Only input and output locations are taken from the environment.
MDBUNDLE_INPUT_PATH = os.getenv("MDBUNDLE_INPUT_PATH")
MDBUNDLE_OUTPUT_PATH = os.getenv("MDBUNDLE_OUTPUT_PATH", "-")
