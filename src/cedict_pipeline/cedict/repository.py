"""Repository for loading a CC-CEDICT source file."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
import logging
from pathlib import Path

from cedict_pipeline.cedict.parser import parse_cedict_lines
from cedict_pipeline.models import CedictDataset, CedictMetadata, DictionaryEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CedictRepository:
    """Read-only, path-scoped access to a parsed CC-CEDICT source.

    The file is parsed once on first access; header metadata and entries are
    then served from the cached dataset.
    """

    path: Path

    @cached_property
    def dataset(self) -> CedictDataset:
        """Load and cache the parsed dataset.

        Returns:
            Metadata and entries parsed from the source file.

        Raises:
            FileNotFoundError: If the configured CEDICT file path does not exist.
        """

        if not self.path.exists():
            raise FileNotFoundError(f"CC-CEDICT file not found: {self.path}")

        with self.path.open("r", encoding="utf-8") as handle:
            dataset = parse_cedict_lines(handle)

        logger.info("Parsed %d entries from %s", len(dataset.entries), self.path)
        return dataset

    @property
    def metadata(self) -> CedictMetadata:
        return self.dataset.metadata

    @property
    def entries(self) -> tuple[DictionaryEntry, ...]:
        return self.dataset.entries
