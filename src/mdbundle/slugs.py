"""Anchor slugs for section titles."""

from __future__ import annotations

import difflib
import re
from typing import Iterable

from mdbundle.config import DEFAULT_SLUG_FALLBACK

_PUNCTUATION_RE = re.compile(r"[^\w\s-]", re.UNICODE)
_WHITESPACE_RE = re.compile(r"\s+")


def slugify(title: str) -> str:
    """Turn a section title into an anchor.

    Lower-cases the title, strips punctuation and joins whitespace runs with
    a single hyphen. Titles made only of punctuation fall back to ``section``.
    """
    text = _PUNCTUATION_RE.sub("", title.strip().lower())
    text = _WHITESPACE_RE.sub("-", text.strip())
    return text or DEFAULT_SLUG_FALLBACK


def normalize_title(title: str) -> str:
    """Normalize titles for comparison."""
    return _WHITESPACE_RE.sub(" ", title.strip().lower())


class AnchorRegistry:
    """Hands out anchors for one document.

    A repeated title is suffixed in order of occurrence: the first
    ``Overview`` gets ``overview``, the next ``overview-1`` and so on. A
    different title whose slug is already claimed (``Overview!`` after
    ``Overview``) keeps the bare slug, so the linker reports the collision.
    """

    def __init__(self) -> None:
        self._owners: dict[str, str] = {}
        self._counts: dict[str, int] = {}

    def assign(self, title: str) -> str:
        base = slugify(title)
        if self._owners.setdefault(base, title) != title:
            return base
        count = self._counts.get(base, 0)
        self._counts[base] = count + 1
        if count == 0:
            return base
        return f"{base}-{count}"


def unique_names(names: Iterable[str]) -> list[str]:
    """Suffix repeated names with ``-1``, ``-2``, ... until each is distinct."""
    taken: set[str] = set()
    result: list[str] = []
    for name in names:
        candidate, count = name, 0
        while candidate in taken:
            count += 1
            candidate = f"{name}-{count}"
        taken.add(candidate)
        result.append(candidate)
    return result


def closest_anchor(anchor: str, candidates: Iterable[str]) -> str | None:
    """Suggest the known anchor that looks most like ``anchor``."""
    matches = difflib.get_close_matches(anchor, list(candidates), n=1, cutoff=0.6)
    return matches[0] if matches else None
