"""Validation helpers for parsed entries and chunked output."""

from __future__ import annotations

from typing import Any, Sequence

from cedict_pipeline.models import DictionaryEntry


def _raise_errors(stage: str, errors: list[str]) -> None:
    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:25])
        rest = len(errors) - min(25, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise ValueError(f"{stage} validation failed with {len(errors)} errors:\n{preview}{more}")


def validate_entry_indexes(entries: Sequence[DictionaryEntry]) -> None:
    """Check that entry indexes run ``1..N`` in order without gaps or repeats.

    Raises:
        ValueError: If any entry is out of sequence.
    """

    errors: list[str] = []
    for position, entry in enumerate(entries, start=1):
        if entry.index != position:
            errors.append(f"Entry {position}: unexpected index {entry.index}")
    _raise_errors("Entry index", errors)


def validate_chunks(chunks: Sequence[dict[str, Any]], entry_count: int) -> None:
    """Check chunk numbering and that chunks cover all entries exactly once.

    Args:
        chunks: Chunk documents in order.
        entry_count: Number of entries that were chunked.

    Raises:
        ValueError: If numbering or coverage is wrong.
    """

    errors: list[str] = []
    if not chunks:
        errors.append("no chunks produced")

    expected_index = 1
    for number, chunk in enumerate(chunks, start=1):
        chunk_number = chunk.get("metadata", {}).get("chunkNumber")
        if chunk_number != number:
            errors.append(f"Chunk {number}: unexpected chunkNumber {chunk_number}")
        for item in chunk.get("entries", []):
            if item.get("index") != expected_index:
                errors.append(
                    f"Chunk {number}: expected entry {expected_index}, found {item.get('index')}"
                )
            expected_index += 1

    if expected_index - 1 != entry_count:
        errors.append(f"chunks hold {expected_index - 1} entries, expected {entry_count}")
    _raise_errors("Chunk", errors)
