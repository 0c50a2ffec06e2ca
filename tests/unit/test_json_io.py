"""Unit tests for JSON serialization and chunk file writing."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from pathlib import Path

import pytest

from cedict_pipeline.io.json_io import (
    chunk_file_name,
    dumps,
    serialized_size,
    write_chunks,
    write_json,
)


def test_dumps_uses_two_space_indent_and_keeps_non_ascii() -> None:
    output = dumps({"headword": "中", "when": datetime(2024, 1, 1, tzinfo=timezone.utc)})

    assert output.decode("utf-8") == '{\n  "headword": "中",\n  "when": "2024-01-01T00:00:00Z"\n}'
    assert serialized_size({"headword": "中"}) == len('{\n  "headword": "中"\n}'.encode("utf-8"))


def test_chunk_file_name_pads_chunk_number_and_omits_first_revision() -> None:
    assert chunk_file_name("cedict", 20240101, 1, 1) == "cedict-v20240101-c001.json"
    assert chunk_file_name("cedict", 20240101, 2, 12) == "cedict-v20240101r2-c012.json"


def test_write_chunks_writes_one_file_per_chunk(tmp_path: Path) -> None:
    chunks = [
        {"metadata": {"chunkNumber": 1}, "entries": [{"index": 1}]},
        {"metadata": {"chunkNumber": 2}, "entries": [{"index": 2}]},
    ]

    written = write_chunks(chunks, tmp_path / "dist", stem="cedict", version=20240101, revision=1)

    assert [path.name for path in written] == [
        "cedict-v20240101-c001.json",
        "cedict-v20240101-c002.json",
    ]
    assert json.loads(written[1].read_text(encoding="utf-8")) == chunks[1]


def test_failed_write_is_logged_and_other_files_are_written(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    output_dir = tmp_path / "dist"
    output_dir.mkdir()
    # A directory in place of the first chunk file makes that write fail.
    (output_dir / "cedict-v1-c001.json").mkdir()
    chunks = [{"metadata": {}, "entries": []}, {"metadata": {}, "entries": []}]

    with caplog.at_level(logging.ERROR):
        written = write_chunks(chunks, output_dir, stem="cedict", version=1, revision=1)

    assert [path.name for path in written] == ["cedict-v1-c002.json"]
    assert "Cannot write" in caplog.text


def test_write_json_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "test" / "zho-cedict.json"

    assert write_json({"entries": []}, target) is True
    assert json.loads(target.read_text(encoding="utf-8")) == {"entries": []}
