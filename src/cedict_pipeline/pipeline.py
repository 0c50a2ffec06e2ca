"""Top-level orchestration for the CEDICT distribution build."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from cedict_pipeline.cedict.repository import CedictRepository
from cedict_pipeline.config import BuildConfig
from cedict_pipeline.stages.chunk import (
    build_chunks,
    build_distribution_metadata,
    build_fixture,
    build_split_metadata,
)
from cedict_pipeline.stages.merge import merge_character_properties
from cedict_pipeline.unihan.repository import UnihanRepository
from cedict_pipeline.validation import validate_chunks, validate_entry_indexes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Result bundle returned by the pipeline entry points.

    Attributes:
        chunks: Chunk documents in order.
        fixture: Test fixture document, or ``None`` when not requested.
        version: Source version used in output file names.
        revision: Build revision used in output file names.
        entry_count: Number of entries across all chunks.
    """

    chunks: tuple[dict[str, Any], ...]
    fixture: dict[str, Any] | None
    version: int | str
    revision: int
    entry_count: int


def run_pipeline(config: BuildConfig) -> PipelineResult:
    """Parse all sources, merge Unihan data and split the result into chunks.

    Every chunk has the layout ``{metadata, cedictMeta, entries}``.

    Args:
        config: Build paths and tuning constants.

    Returns:
        ``PipelineResult`` ready to be written.

    Raises:
        FileNotFoundError: If the CEDICT source is missing.
    """

    cedict_repo = CedictRepository(config.cedict_path)
    validate_entry_indexes(cedict_repo.entries)

    unihan_repo = UnihanRepository(
        readings_path=config.readings_path,
        dictionary_like_path=config.dictionary_like_path,
        irg_sources_path=config.irg_sources_path,
    )
    entries = merge_character_properties(
        cedict_repo.entries,
        readings=unihan_repo.readings,
        dictionary_like=unihan_repo.dictionary_like,
        radicals=unihan_repo.radicals,
    )

    metadata = build_distribution_metadata(cedict_repo.metadata, config.revision)
    header = {"metadata": metadata, "cedictMeta": cedict_repo.metadata.to_dict()}

    fixture = None
    if config.fixture_path is not None:
        fixture = build_fixture(header, entries, config.fixture_indexes)

    chunks = build_chunks(header, entries, config.chunk_size_limit)
    validate_chunks(chunks, len(entries))

    return PipelineResult(
        chunks=tuple(chunks),
        fixture=fixture,
        version=metadata["version"],
        revision=config.revision,
        entry_count=len(entries),
    )


def run_split_pipeline(config: BuildConfig) -> PipelineResult:
    """Split the CEDICT source alone into chunks, without Unihan data.

    Every chunk has the layout ``{metadata, entries}`` where ``metadata`` is
    the CEDICT header record plus ``revision`` and ``chunkNumber``.

    Args:
        config: Build paths and tuning constants; Unihan paths are ignored.

    Returns:
        ``PipelineResult`` without a fixture.

    Raises:
        FileNotFoundError: If the CEDICT source is missing.
    """

    cedict_repo = CedictRepository(config.cedict_path)
    validate_entry_indexes(cedict_repo.entries)

    version = cedict_repo.metadata.version
    if version is None:
        logger.error("Cannot determine a source version; chunk file names carry none")
        version = ""

    metadata = build_split_metadata(cedict_repo.metadata, config.revision)
    chunks = build_chunks({"metadata": metadata}, cedict_repo.entries, config.chunk_size_limit)
    validate_chunks(chunks, len(cedict_repo.entries))

    return PipelineResult(
        chunks=tuple(chunks),
        fixture=None,
        version=version,
        revision=config.revision,
        entry_count=len(cedict_repo.entries),
    )
