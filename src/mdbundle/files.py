"""Source discovery and file I/O helpers."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable

from mdbundle.config import DEFAULT_ENCODING, DEFAULT_SOURCE_SUFFIXES
from mdbundle.exceptions import SourceError


def discover_sources(
    paths: Iterable[Path | str],
    suffixes: Iterable[str] = DEFAULT_SOURCE_SUFFIXES,
) -> list[Path]:
    """Expand input paths into an ordered list of Markdown files.

    Directories are searched recursively and their files sorted; explicit
    files are kept in the order given regardless of suffix. Duplicates are
    dropped.

    Args:
        paths: Files and directories to collect.
        suffixes: File suffixes picked up from directories.

    Returns:
        Paths of the source files in processing order.

    Raises:
        SourceError: If a path does not exist.
    """
    wanted = {suffix.lower() for suffix in suffixes}
    seen: set[Path] = set()
    sources: list[Path] = []

    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found = sorted(
                child for child in path.rglob("*") if child.is_file() and child.suffix.lower() in wanted
            )
        elif path.is_file():
            found = [path]
        else:
            raise SourceError(f"Input path not found: {path}")

        for source in found:
            key = source.resolve()
            if key not in seen:
                seen.add(key)
                sources.append(source)
    return sources


def read_source(path: Path, encoding: str = DEFAULT_ENCODING) -> str:
    """Read a source file, keeping its line endings.

    Raises:
        SourceError: If the file cannot be read or decoded.
    """
    try:
        with path.open("r", encoding=encoding, newline="") as handle:
            return handle.read()
    except UnicodeDecodeError as exc:
        raise SourceError(f"{path} is not valid {encoding} text: {exc}") from exc
    except OSError as exc:
        raise SourceError(f"Cannot read {path}: {exc}") from exc


async def write_text_async(path: Path, content: str, encoding: str = DEFAULT_ENCODING) -> None:
    """Write text to a file asynchronously using a thread pool.

    Args:
        path: Path to the file to write.
        content: Text content to write.
        encoding: Text encoding to use.
    """
    await asyncio.to_thread(_write_text, path, content, encoding)


async def mkdir_async(path: Path, parents: bool = False, exist_ok: bool = False) -> None:
    """Create a directory asynchronously using a thread pool.

    Args:
        path: Path to the directory to create.
        parents: If True, create parent directories as needed.
        exist_ok: If True, don't raise an error if directory exists.
    """
    await asyncio.to_thread(path.mkdir, parents=parents, exist_ok=exist_ok)


def _write_text(path: Path, content: str, encoding: str) -> None:
    # newline="" keeps code block line endings exactly as parsed
    with path.open("w", encoding=encoding, newline="") as handle:
        handle.write(content)
