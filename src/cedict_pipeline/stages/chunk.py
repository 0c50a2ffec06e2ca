"""Split the dictionary into size-bounded chunk documents."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Sequence

from cedict_pipeline.io.json_io import dumps, serialized_size
from cedict_pipeline.models import CedictMetadata, DictionaryEntry

logger = logging.getLogger(__name__)

# Entries sit two levels deep in ``"entries": [...]``: every line of an entry
# gains four spaces and entries are joined by ``,\n``.
ENTRY_INDENT = 4
ENTRY_SEPARATOR = 2
# A non-empty list closes with ``\n  ]`` instead of ``[]``, and the last entry has
# no trailing comma.
ENTRIES_CLOSING = 2

FREQUENCY_META: tuple[dict[str, Any], ...] = (
    {"value": 1, "name": "least frequent", "order": 5},
    {"value": 2, "name": "less frequent", "order": 4},
    {"value": 3, "name": "moderately frequent", "order": 3},
    {"value": 4, "name": "more frequent", "order": 2},
    {"value": 5, "name": "most frequent", "order": 1},
)


def chunk_size_limit(target_size: int, adjustment_ratio: float) -> int:
    """Return the effective per-chunk byte limit.

    Entry sizes are exact, so the ratio only sets how far below the nominal
    target the written chunks stay.
    """

    return int(round(target_size / adjustment_ratio))


def partition_by_size(sizes: Sequence[int], limit: int, base_size: int = 0) -> list[range]:
    """Greedily pack consecutive items into groups below ``limit`` bytes.

    The running total of each group starts at ``base_size`` (the shared
    header every chunk repeats). A group is closed before the item that would
    bring the total to ``limit`` or above. An item is never split, so a group
    holding a single oversized item may exceed the limit.

    Args:
        sizes: Byte size of each item, in order.
        limit: Exclusive upper bound for a group's total.
        base_size: Size counted once per group before any item.

    Returns:
        Contiguous index ranges covering ``range(len(sizes))`` in order. There
        is always at least one range; it is empty only for empty input.
    """

    groups: list[range] = []
    start = 0
    total = base_size
    for position, size in enumerate(sizes):
        if total + size >= limit and position > start:
            groups.append(range(start, position))
            start = position
            total = base_size
        total += size
    groups.append(range(start, len(sizes)))
    return groups


def entry_size(item: dict[str, Any]) -> int:
    """Return the bytes one entry adds to a chunk's ``entries`` list, separator included."""

    data = dumps(item)
    return len(data) + ENTRY_INDENT * (data.count(b"\n") + 1) + ENTRY_SEPARATOR


def build_distribution_metadata(cedict_meta: CedictMetadata, revision: int) -> dict[str, Any]:
    """Build the metadata record of the merged distribution.

    The version is the UTC publication date of the source (``YYYYMMDD`` as
    an integer), falling back to the ``#! date=`` header version when the
    source timestamp is missing.
    """

    if cedict_meta.date_time is not None:
        version = int(cedict_meta.date_time.strftime("%Y%m%d"))
    elif cedict_meta.version is not None:
        version = int(cedict_meta.version)
    else:
        logger.error("Cannot determine a source version; using 0")
        version = 0

    return {
        "version": version,
        "revision": revision,
        "frequency": [dict(item) for item in FREQUENCY_META],
    }


def build_split_metadata(cedict_meta: CedictMetadata, revision: int) -> dict[str, Any]:
    """Build the metadata record of a CEDICT-only split: header fields plus revision."""

    metadata = cedict_meta.to_dict()
    metadata["revision"] = revision
    return metadata


def build_chunks(
    header: dict[str, Any],
    entries: Iterable[DictionaryEntry],
    limit: int,
) -> list[dict[str, Any]]:
    """Split entries into chunk documents whose serialized size stays below ``limit``.

    Every chunk repeats a deep copy of ``header`` (``metadata`` first, then any
    other shared records such as ``cedictMeta``) followed by its own
    ``entries`` slice. The ``metadata`` copy of each chunk carries its 1-based
    ``chunkNumber``. A chunk may only exceed ``limit`` when it holds a single
    entry that is larger on its own.

    Args:
        header: Shared records; must contain a ``metadata`` mapping.
        entries: Entries in distribution order.
        limit: Effective byte limit, see :func:`chunk_size_limit`.

    Returns:
        Chunk documents in order; concatenating their ``entries`` gives back
        all input entries.
    """

    entry_dicts = [entry.to_dict() for entry in entries]
    sizes = [entry_size(item) for item in entry_dicts]

    # No chunk number can have more digits than the entry count.
    sizing_header = copy.deepcopy(header)
    sizing_header["metadata"]["chunkNumber"] = max(len(entry_dicts), 1)
    sizing_header["entries"] = []
    base_size = serialized_size(sizing_header) + ENTRIES_CLOSING

    chunks: list[dict[str, Any]] = []
    for number, group in enumerate(partition_by_size(sizes, limit, base_size), start=1):
        chunk = copy.deepcopy(header)
        chunk["metadata"]["chunkNumber"] = number
        chunk["entries"] = entry_dicts[group.start : group.stop]
        chunks.append(chunk)

    logger.info("Split %d entries into %d chunks", len(entry_dicts), len(chunks))
    return chunks


def build_fixture(
    header: dict[str, Any],
    entries: Iterable[DictionaryEntry],
    indexes: Iterable[int],
) -> dict[str, Any]:
    """Build the small test fixture document holding allow-listed entries.

    Args:
        header: Shared records as passed to :func:`build_chunks`.
        entries: Entries in distribution order.
        indexes: Entry indexes to keep.

    Returns:
        Document with a copy of the header and the selected entries.
    """

    wanted = set(indexes)
    fixture = copy.deepcopy(header)
    fixture["entries"] = [entry.to_dict() for entry in entries if entry.index in wanted]
    return fixture
