"""Write rendered bundles to files or streams."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from mdbundle.config import DEFAULT_ENCODING
from mdbundle.exceptions import RenderError
from mdbundle.files import mkdir_async, write_text_async
from mdbundle.schemas import BundleResult

logger = logging.getLogger(__name__)


async def write_bundle(
    result: BundleResult,
    destination: Path,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> list[Path]:
    """Write every rendered output under ``destination``.

    A single-layout bundle goes to ``destination`` itself unless it is an
    existing directory. A per-document bundle, or any bundle with several
    outputs, always goes into ``destination`` as a directory, one file per
    output, named after the output.

    Returns:
        The paths written, in output order.

    Raises:
        RenderError: If the destination cannot be created or written.
    """
    as_directory = result.layout == "per-document" or len(result.outputs) > 1 or destination.is_dir()
    written: list[Path] = []
    try:
        if as_directory:
            await mkdir_async(destination, parents=True, exist_ok=True)
        elif destination.parent != destination:
            await mkdir_async(destination.parent, parents=True, exist_ok=True)

        for output in result.outputs:
            path = destination / output.name if as_directory else destination
            await write_text_async(path, output.content, encoding=encoding)
            logger.debug("Wrote %s (%d chars)", path, len(output.content))
            written.append(path)
    except OSError as exc:
        raise RenderError(f"Cannot write output to {destination}: {exc}") from exc
    return written


def write_stream(result: BundleResult, stream: TextIO) -> None:
    """Write every rendered output to an open text stream.

    Raises:
        RenderError: If the stream rejects the write.
    """
    try:
        for output in result.outputs:
            stream.write(output.content)
        stream.flush()
    except (OSError, ValueError) as exc:
        raise RenderError(f"Cannot write output to stream: {exc}") from exc
