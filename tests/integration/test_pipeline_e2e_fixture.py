"""Integration tests running the full build on small fixture sources."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from cedict_pipeline.cli import main
from cedict_pipeline.config import BuildConfig
from cedict_pipeline.io.json_io import serialized_size
from cedict_pipeline.pipeline import run_pipeline, run_split_pipeline

CEDICT_SOURCE = "\n".join(
    [
        "# CC-CEDICT",
        "# Community maintained free Chinese-English dictionary.",
        "# ",
        "# License:",
        "# Creative Commons Attribution-ShareAlike 4.0 International License",
        "#! version=1",
        "#! subversion=0",
        "#! format=ts",
        "#! charset=UTF-8",
        "#! publisher=MDBG",
        "#! license=https://creativecommons.org/licenses/by-sa/4.0/",
        "#! date=2024-01-01T00:00:00Z",
        "#! time=1704067200",
        "中 中 [zhong1] /within/among/",
        "中國 中国 [Zhong1 guo2] /China/",
        "紅 红 [hong2] /red/",
        "老虎 老虎 [lao3 hu3] /tiger/CL:隻|只[zhi1]/",
        "條 条 [tiao2] /strip/CL:張|张[zhang1]/branch/CL:根[gen1]/",
        "約翰·史密斯 约翰·史密斯 [Yue1 han4 · Shi3 mi4 si1] /John Smith/",
    ]
) + "\n"

READINGS_SOURCE = "\n".join(
    [
        "# Unihan_Readings.txt",
        "#",
        "U+4E2D\tkCantonese\tzung1 zung3",
        "U+4E2D\tkDefinition\tcentral; center, middle",
        "U+4E2D\tkMandarin\tzhōng",
        "U+7D05\tkMandarin\thóng",
        "U+7EA2\tkMandarin\thóng",
        "# EOF",
    ]
) + "\n"

DICTIONARY_LIKE_SOURCE = "\n".join(
    [
        "# Unihan_DictionaryLikeData.txt",
        "U+4E2D\tkFrequency\t5",
        "U+4E2D\tkTotalStrokes\t4",
        "U+7EA2\tkTotalStrokes\t6",
    ]
) + "\n"

IRG_SOURCE = "\n".join(
    [
        "U+4E2D\tkRSUnicode\t2.3",
        "U+7D05\tkRSUnicode\t120.3",
        "U+7EA2\tkRSUnicode\t120'.3",
    ]
) + "\n"


def _config(tmp_path: Path, **overrides) -> BuildConfig:
    """Write fixture sources and return a config pointing at them."""

    sources = tmp_path / "src"
    sources.mkdir(exist_ok=True)
    paths = {
        "cedict_ts.u8": CEDICT_SOURCE,
        "Unihan_Readings.txt": READINGS_SOURCE,
        "Unihan_DictionaryLikeData.txt": DICTIONARY_LIKE_SOURCE,
        "Unihan_IRGSources.txt": IRG_SOURCE,
    }
    for name, text in paths.items():
        (sources / name).write_text(text, encoding="utf-8")

    values = dict(
        cedict_path=sources / "cedict_ts.u8",
        readings_path=sources / "Unihan_Readings.txt",
        dictionary_like_path=sources / "Unihan_DictionaryLikeData.txt",
        irg_sources_path=sources / "Unihan_IRGSources.txt",
        output_dir=tmp_path / "dist",
        fixture_path=tmp_path / "test" / "zho-cedict.json",
        fixture_indexes=(2, 4),
    )
    values.update(overrides)
    return BuildConfig(**values)


def test_run_pipeline_merges_and_chunks(tmp_path: Path) -> None:
    result = run_pipeline(_config(tmp_path))

    assert result.entry_count == 7
    assert result.version == 20240101
    assert len(result.chunks) == 1

    chunk = result.chunks[0]
    assert chunk["metadata"]["chunkNumber"] == 1
    assert chunk["cedictMeta"]["name"] == "CC-CEDICT"
    entries = chunk["entries"]
    assert [item["index"] for item in entries] == list(range(1, 8))

    zhong = entries[0]
    assert zhong["traditional"] == {
        "headword": "中",
        "cantonese": "zung1 zung3",
        "mandarin": "zhōng",
        "codePoint": "U+4E2D",
        "radical": {"number": 2, "additionalStrokes": 3},
        "frequency": 5,
        "totalStrokes": 4,
    }
    assert zhong["simplified"]["radical"]["simplified"] is False
    assert zhong["definitions"] == ["within", "among"]

    hong = entries[2]
    assert "simplified" not in hong["traditional"]["radical"]
    assert hong["simplified"]["radical"]["simplified"] is True
    assert hong["simplified"]["totalStrokes"] == 6

    assert entries[1]["traditional"] == {"headword": "中國"}
    assert [item["definitions"] for item in entries[4:6]] == [["strip"], ["branch"]]
    assert entries[6]["type"] == "compound name"
    assert entries[6]["pinyinParts"] == {"firstName": "Yue1 han4", "lastName": "Shi3 mi4 si1"}

    assert [item["index"] for item in result.fixture["entries"]] == [2, 4]
    assert "chunkNumber" not in result.fixture["metadata"]


def test_run_pipeline_splits_into_multiple_chunks_under_small_limit(tmp_path: Path) -> None:
    result = run_pipeline(_config(tmp_path, target_chunk_size=1500, adjustment_ratio=1.0))

    assert len(result.chunks) > 1
    indexes = [item["index"] for chunk in result.chunks for item in chunk["entries"]]
    assert indexes == list(range(1, 8))
    assert [chunk["metadata"]["chunkNumber"] for chunk in result.chunks] == list(
        range(1, len(result.chunks) + 1)
    )
    for chunk in result.chunks:
        assert serialized_size(chunk) < 1500 or len(chunk["entries"]) == 1


def test_missing_unihan_sources_degrade_to_plain_entries(tmp_path: Path) -> None:
    config = _config(
        tmp_path,
        readings_path=tmp_path / "absent.txt",
        dictionary_like_path=None,
        irg_sources_path=None,
    )

    result = run_pipeline(config)

    assert result.chunks[0]["entries"][0]["traditional"] == {"headword": "中"}


def test_run_split_pipeline_uses_cedict_header_as_metadata(tmp_path: Path) -> None:
    result = run_split_pipeline(_config(tmp_path))

    chunk = result.chunks[0]
    assert list(chunk) == ["metadata", "entries"]
    assert chunk["metadata"]["version"] == "20240101"
    assert chunk["metadata"]["revision"] == 1
    assert chunk["metadata"]["chunkNumber"] == 1
    assert chunk["entries"][0]["traditional"] == {"headword": "中"}
    assert result.fixture is None


def test_run_split_pipeline_logs_missing_version(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    config = _config(tmp_path)
    source = config.cedict_path.read_text(encoding="utf-8")
    config.cedict_path.write_text(
        source.replace("#! date=2024-01-01T00:00:00Z\n", ""), encoding="utf-8"
    )

    with caplog.at_level(logging.ERROR):
        result = run_split_pipeline(config)

    assert result.version == ""
    assert "Cannot determine a source version" in caplog.text


def test_cli_writes_chunks_and_fixture(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = _config(tmp_path)

    exit_code = main(
        [
            "--cedict",
            str(config.cedict_path),
            "--unihan-readings",
            str(config.readings_path),
            "--unihan-dictionary-like",
            str(config.dictionary_like_path),
            "--unihan-irg",
            "",
            "--output-dir",
            str(config.output_dir),
            "--fixture",
            str(config.fixture_path),
            "--revision",
            "2",
        ]
    )

    assert exit_code == 0
    chunk_path = config.output_dir / "cedict-v20240101r2-c001.json"
    document = json.loads(chunk_path.read_text(encoding="utf-8"))
    assert document["metadata"]["revision"] == 2
    assert "radical" not in document["entries"][0]["traditional"]
    assert config.fixture_path.exists()
    out = capsys.readouterr().out
    assert "generated successfully" in out
    summary_row = next(line for line in out.splitlines() if line.startswith(chunk_path.name))
    assert summary_row.split(" | ")[-1].strip() == str(chunk_path.stat().st_size)


def test_cli_exits_when_cedict_source_is_missing(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="CC-CEDICT file not found"):
        main(["--cedict", str(tmp_path / "missing.u8"), "--output-dir", str(tmp_path / "dist")])
