"""JSON serialization and writing helpers for distribution artifacts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

import orjson

logger = logging.getLogger(__name__)

JSON_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_UTC_Z


def dumps(document: Any) -> bytes:
    """Serialize a document as two-space indented UTF-8 JSON."""

    return orjson.dumps(document, option=JSON_OPTIONS)


def serialized_size(document: Any) -> int:
    """Return the byte length of ``document`` as written by :func:`dumps`."""

    return len(dumps(document))


def chunk_file_name(stem: str, version: int | str, revision: int, chunk_number: int) -> str:
    """Build a chunk file name like ``cedict-v20240101-c001.json``.

    The revision suffix (``r2``) is only added for revisions above 1.

    Args:
        stem: File name prefix.
        version: Source version (``YYYYMMDD``).
        revision: Build revision for the same source version.
        chunk_number: 1-based chunk number, zero-padded to three digits.

    Returns:
        File name without directory.
    """

    label = f"v{version}"
    if revision > 1:
        label += f"r{revision}"
    return f"{stem}-{label}-c{chunk_number:03d}.json"


def write_json(document: Any, output_path: Path) -> bool:
    """Write one document, logging instead of raising on I/O failure.

    Args:
        document: JSON-ready document.
        output_path: Destination path; parent directories are created.

    Returns:
        ``True`` when the file was written.
    """

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(dumps(document))
    except OSError as error:
        logger.error("Cannot write %s: %s", output_path, error)
        return False
    logger.info("Wrote %s", output_path)
    return True


def write_chunks(
    chunks: Sequence[dict[str, Any]],
    output_dir: Path,
    stem: str,
    version: int | str,
    revision: int,
) -> list[Path]:
    """Write every chunk to its own file; a failed write does not stop the rest.

    Args:
        chunks: Chunk documents in chunk order.
        output_dir: Destination directory.
        stem: File name prefix.
        version: Source version used in file names.
        revision: Build revision used in file names.

    Returns:
        Paths of the files that were written successfully.
    """

    written: list[Path] = []
    for number, chunk in enumerate(chunks, start=1):
        path = output_dir / chunk_file_name(stem, version, revision, number)
        if write_json(chunk, path):
            written.append(path)
    return written
