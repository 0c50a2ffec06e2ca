"""Build configuration with project-layout defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cedict_pipeline.stages.chunk import chunk_size_limit

# Entries copied into the test fixture document.
DEFAULT_FIXTURE_INDEXES = (2, 35909, 55562, 72267, 73893, 83686, 108832, 108835)


@dataclass(frozen=True)
class BuildConfig:
    """Paths and tuning constants for one build run.

    Attributes:
        cedict_path: CC-CEDICT source file.
        readings_path: Unihan readings file; ``None`` skips it.
        dictionary_like_path: Unihan dictionary-like data file; ``None`` skips it.
        irg_sources_path: Unihan IRG sources file (radicals); ``None`` skips it.
        output_dir: Directory receiving chunk files.
        file_stem: Chunk file name prefix.
        fixture_path: Test fixture output path; ``None`` skips the fixture.
        fixture_indexes: Entry indexes copied into the fixture.
        target_chunk_size: Nominal chunk file size in bytes.
        adjustment_ratio: Divisor applied to ``target_chunk_size``.
        revision: Build revision for the same source version.
    """

    cedict_path: Path = Path("src") / "cedict" / "cedict_ts.u8"
    readings_path: Path | None = Path("src") / "unihan" / "Unihan_Readings.txt"
    dictionary_like_path: Path | None = Path("src") / "unihan" / "Unihan_DictionaryLikeData.txt"
    irg_sources_path: Path | None = Path("src") / "unihan" / "Unihan_IRGSources.txt"
    output_dir: Path = Path("dist")
    file_stem: str = "cedict"
    fixture_path: Path | None = Path("test") / "zho-cedict.json"
    fixture_indexes: tuple[int, ...] = DEFAULT_FIXTURE_INDEXES
    target_chunk_size: int = 10_000_000
    adjustment_ratio: float = 1.21
    revision: int = 1

    @property
    def chunk_size_limit(self) -> int:
        """Effective byte limit used by the chunker."""

        return chunk_size_limit(self.target_chunk_size, self.adjustment_ratio)
