"""Repository for the Unihan property sources merged into dictionary entries."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from cedict_pipeline.unihan.properties import (
    DICTIONARY_LIKE_FIELDS,
    UNIHAN_READING_FIELDS,
    parse_property_lines,
)
from cedict_pipeline.unihan.radicals import parse_radical_lines

logger = logging.getLogger(__name__)

PropertyMap = dict[str, dict[str, Any]]


def _load(path: Path | None, parse: Callable[[Iterable[str]], PropertyMap]) -> PropertyMap:
    """Parse one optional source file, returning an empty map when absent.

    A missing Unihan file degrades the build (no character data is merged
    from it) instead of stopping it.
    """

    if path is None:
        return {}
    if not path.exists():
        logger.error("Unihan source file not found, skipping: %s", path)
        return {}

    with path.open("r", encoding="utf-8") as handle:
        records = parse(handle)

    logger.info("Parsed %d code points from %s", len(records), path)
    return records


@dataclass(frozen=True)
class UnihanRepository:
    """Path-scoped access to the Unihan readings, dictionary-like and IRG data.

    Each source is parsed lazily and cached. Any path may be ``None`` to skip
    that source.
    """

    readings_path: Path | None
    dictionary_like_path: Path | None
    irg_sources_path: Path | None = None

    @cached_property
    def readings(self) -> PropertyMap:
        """Code point -> ``cantonese``/``mandarin``/``tang``/``definition``."""

        return _load(
            self.readings_path,
            lambda lines: parse_property_lines(lines, UNIHAN_READING_FIELDS, "Unihan readings"),
        )

    @cached_property
    def dictionary_like(self) -> PropertyMap:
        """Code point -> ``frequency``/``totalStrokes``."""

        return _load(
            self.dictionary_like_path,
            lambda lines: parse_property_lines(
                lines, DICTIONARY_LIKE_FIELDS, "a dictionary like data"
            ),
        )

    @cached_property
    def radicals(self) -> PropertyMap:
        """Code point -> radical record parsed from ``kRSUnicode``."""

        return _load(self.irg_sources_path, parse_radical_lines)
