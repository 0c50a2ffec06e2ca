"""CLI entrypoint for building the chunked CEDICT distribution."""

from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path
from typing import Sequence

from cedict_pipeline.config import BuildConfig
from cedict_pipeline.io.json_io import chunk_file_name, write_chunks, write_json
from cedict_pipeline.pipeline import PipelineResult, run_pipeline, run_split_pipeline


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def _optional_path(value: str) -> Path | None:
    """Parse a path argument where an empty string disables the source."""

    return Path(value) if value else None


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser; every option defaults to :class:`BuildConfig`.
    """

    defaults = BuildConfig()
    parser = argparse.ArgumentParser(
        description="Convert CC-CEDICT and Unihan data into chunked JSON files."
    )
    parser.add_argument(
        "--cedict-only",
        action="store_true",
        help="Split the CEDICT source alone, without Unihan data or test fixture.",
    )
    parser.add_argument(
        "--cedict", type=Path, default=defaults.cedict_path, help="CC-CEDICT .u8 file."
    )
    parser.add_argument(
        "--unihan-readings",
        type=_optional_path,
        default=defaults.readings_path,
        help="Unihan_Readings.txt path (empty string to skip).",
    )
    parser.add_argument(
        "--unihan-dictionary-like",
        type=_optional_path,
        default=defaults.dictionary_like_path,
        help="Unihan_DictionaryLikeData.txt path (empty string to skip).",
    )
    parser.add_argument(
        "--unihan-irg",
        type=_optional_path,
        default=defaults.irg_sources_path,
        help="Unihan_IRGSources.txt path for radicals (empty string to skip).",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=defaults.output_dir, help="Chunk output directory."
    )
    parser.add_argument("--file-stem", default=defaults.file_stem, help="Chunk file name prefix.")
    parser.add_argument(
        "--fixture",
        type=_optional_path,
        default=defaults.fixture_path,
        help="Test fixture output path (empty string to skip).",
    )
    parser.add_argument(
        "--target-chunk-size",
        type=int,
        default=defaults.target_chunk_size,
        help="Nominal chunk size in bytes.",
    )
    parser.add_argument(
        "--adjustment-ratio",
        type=float,
        default=defaults.adjustment_ratio,
        help="Divisor applied to the target chunk size.",
    )
    parser.add_argument("--revision", type=int, default=defaults.revision, help="Build revision.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic logging level.",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> BuildConfig:
    """Apply parsed CLI arguments on top of :class:`BuildConfig` defaults."""

    return replace(
        BuildConfig(),
        cedict_path=args.cedict,
        readings_path=args.unihan_readings,
        dictionary_like_path=args.unihan_dictionary_like,
        irg_sources_path=args.unihan_irg,
        output_dir=args.output_dir,
        file_stem=args.file_stem,
        fixture_path=None if args.cedict_only else args.fixture,
        target_chunk_size=args.target_chunk_size,
        adjustment_ratio=args.adjustment_ratio,
        revision=args.revision,
    )


def _print_chunk_summary(
    result: PipelineResult, config: BuildConfig, written: Sequence[Path]
) -> None:
    """Print one table row per chunk: file name, entry range and written byte size."""

    file_sizes = {path.name: path.stat().st_size for path in written}
    rows = []
    for number, chunk in enumerate(result.chunks, start=1):
        entries = chunk["entries"]
        first = str(entries[0]["index"]) if entries else "-"
        last = str(entries[-1]["index"]) if entries else "-"
        name = chunk_file_name(config.file_stem, result.version, result.revision, number)
        rows.append(
            [
                name,
                first,
                last,
                str(len(entries)),
                str(file_sizes[name]) if name in file_sizes else "-",
            ]
        )
    print(_format_table(["file", "first_index", "last_index", "entries", "bytes"], rows))


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through artifact generation.

    Returns:
        Zero exit status when every file was written, one otherwise.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    config = config_from_args(args)
    if not config.cedict_path.exists():
        raise SystemExit(f"CC-CEDICT file not found: {config.cedict_path}")

    result = run_split_pipeline(config) if args.cedict_only else run_pipeline(config)

    failed = 0
    if result.fixture is not None and config.fixture_path is not None:
        if write_json(result.fixture, config.fixture_path):
            print(f"Wrote test fixture to {config.fixture_path}")
        else:
            failed += 1

    written = write_chunks(
        result.chunks,
        output_dir=config.output_dir,
        stem=config.file_stem,
        version=result.version,
        revision=result.revision,
    )
    failed += len(result.chunks) - len(written)

    print(f"Wrote {len(written)} of {len(result.chunks)} chunks to {config.output_dir}")
    _print_chunk_summary(result, config, written)
    if failed:
        print(f"\n{failed} file(s) could not be written; see the log above.")
        return 1
    print("\nCEDICT data files have been generated successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
