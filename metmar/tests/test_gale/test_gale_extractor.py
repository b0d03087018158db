"""Tests for gale warning timeline extraction from snapshot directories."""

from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from metmar.gale.extractor import (
    extract_warning_number,
    extract_warnings,
    fill_gaps,
    parse_snapshot_timestamp,
)
from metmar.models.errors import ExtractionFailure
from metmar.models.gale import GaleWarning

NO_WARNING = "Bulletin côte Iroise\n\n# Aujourd'hui\nOuest 4.\n"


def _bulletin(number: int) -> str:
    return (
        "Bulletin côte Iroise\n"
        f"Bulletin spécial: Avis de Grand frais à Coup de vent numéro {number}\n"
        "\n# Aujourd'hui\nOuest 7 à 8.\n"
    )


def _write(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    _write(tmp_path, "iroise_2016_01_01T06_00_00.txt", NO_WARNING)
    _write(tmp_path, "iroise_2016_01_10T06_00_00.txt", _bulletin(36))
    _write(tmp_path, "iroise_2016_01_15T06_00_00.txt", NO_WARNING)
    return tmp_path


class TestExtractWarningNumber:
    def test_special_bulletin_line(self, tmp_path: Path):
        path = _write(tmp_path, "a.txt", _bulletin(36))
        assert extract_warning_number(path) == 36

    def test_bms_phrasing(self, tmp_path: Path):
        path = _write(tmp_path, "a.txt", "titre\n  BMS côte numéro 112 pour Iroise 7\n")
        assert extract_warning_number(path) == 112

    def test_first_matching_line_wins(self, tmp_path: Path):
        path = _write(tmp_path, "a.txt", _bulletin(12) + _bulletin(13))
        assert extract_warning_number(path) == 12

    def test_no_warning_is_zero(self, tmp_path: Path):
        path = _write(tmp_path, "a.txt", NO_WARNING)
        assert extract_warning_number(path) == 0

    def test_phrase_without_number_is_zero(self, tmp_path: Path):
        path = _write(tmp_path, "a.txt", "Bulletin spécial: aucun avis en cours\n")
        assert extract_warning_number(path) == 0

    def test_out_of_range_number(self, tmp_path: Path):
        path = _write(tmp_path, "a.txt", _bulletin(2**31))
        with pytest.raises(ExtractionFailure, match="out of range"):
            extract_warning_number(path)

    def test_latin1_file_is_zero(self, tmp_path: Path):
        path = tmp_path / "a.txt"
        path.write_bytes(b"Bulletin sp\xe9cial: 3\n")
        assert extract_warning_number(path) == 0

    def test_stray_bytes_around_warning(self, tmp_path: Path):
        path = tmp_path / "a.txt"
        path.write_bytes(b"Pr\xe9visions\n" + _bulletin(36).encode("utf-8"))
        assert extract_warning_number(path) == 36

    def test_fullwidth_digits_ignored(self, tmp_path: Path):
        path = _write(tmp_path, "a.txt", "Bulletin spécial: numéro ３６\n")
        assert extract_warning_number(path) == 0

    def test_unreadable_path(self, tmp_path: Path):
        with pytest.raises(ExtractionFailure, match="could not read"):
            extract_warning_number(tmp_path)


class TestParseSnapshotTimestamp:
    def test_standard_separator(self):
        ts = parse_snapshot_timestamp("data/iroise_2016_01_10T06_30_15.txt")
        assert ts == datetime(2016, 1, 10, 6, 30, 15, tzinfo=UTC)

    def test_historical_separator(self):
        ts = parse_snapshot_timestamp("data/iroise_2016_01_10T_06_30_15.txt")
        assert ts == datetime(2016, 1, 10, 6, 30, 15, tzinfo=UTC)

    def test_not_a_snapshot(self):
        assert parse_snapshot_timestamp("data/README.md") is None
        assert parse_snapshot_timestamp("data/iroise_2016_01_10.txt") is None

    def test_invalid_date(self):
        with pytest.raises(ExtractionFailure, match="invalid snapshot timestamp"):
            parse_snapshot_timestamp("iroise_2016_13_40T06_00_00.txt")


class TestFillGaps:
    def test_seed_then_carry(self):
        ts = datetime(2016, 1, 1, tzinfo=UTC)
        filled = fill_gaps([
            GaleWarning(0, ts), GaleWarning(36, ts), GaleWarning(0, ts),
            GaleWarning(37, ts), GaleWarning(0, ts),
        ])
        assert [w.number for w in filled] == [1, 36, 36, 37, 37]

    def test_empty(self):
        assert fill_gaps([]) == []


class TestExtractWarnings:
    def test_gap_filling(self, snapshot_dir: Path):
        warnings = extract_warnings(snapshot_dir)
        assert [w.number for w in warnings] == [1, 36, 36]
        assert [w.timestamp.day for w in warnings] == [1, 10, 15]

    def test_sorted_regardless_of_walk_order(self, snapshot_dir: Path):
        reversed_walk = sorted(snapshot_dir.iterdir(), reverse=True)
        with patch(
            "metmar.gale.extractor._walk_snapshots", return_value=iter(reversed_walk)
        ):
            warnings = extract_warnings(snapshot_dir)
        timestamps = [w.timestamp for w in warnings]
        assert timestamps == sorted(timestamps)
        assert [w.number for w in warnings] == [1, 36, 36]

    def test_lexical_order_is_not_chronological(self, tmp_path: Path):
        _write(tmp_path, "b_2016_01_01T06_00_00.txt", NO_WARNING)
        _write(tmp_path, "a_2016_01_10T06_00_00.txt", _bulletin(36))
        assert [w.number for w in extract_warnings(tmp_path)] == [1, 36]

    def test_equal_timestamps_keep_walk_order(self, tmp_path: Path):
        _write(tmp_path, "a/iroise_2016_01_10T06_00_00.txt", _bulletin(36))
        _write(tmp_path, "b/iroise_2016_01_10T06_00_00.txt", _bulletin(37))
        assert [w.number for w in extract_warnings(tmp_path)] == [36, 37]

    def test_recurses_and_accepts_both_separators(self, tmp_path: Path):
        _write(tmp_path, "2016/01/iroise_2016_01_20T_06_00_00.txt", _bulletin(40))
        _write(tmp_path, "2016/iroise_2016_01_05T06_00_00.txt", _bulletin(39))
        warnings = extract_warnings(tmp_path)
        assert [w.number for w in warnings] == [39, 40]

    def test_non_matching_names_skipped(self, snapshot_dir: Path):
        _write(snapshot_dir, "notes.txt", _bulletin(99))
        _write(snapshot_dir, "iroise_2016_01_12T06_00_00.txt.bak", _bulletin(98))
        assert [w.number for w in extract_warnings(snapshot_dir)] == [1, 36, 36]

    def test_empty_directory(self, tmp_path: Path):
        assert extract_warnings(tmp_path) == []

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(ExtractionFailure, match="not a directory"):
            extract_warnings(tmp_path / "absent")

    def test_latin1_snapshot_is_gap_filled(self, tmp_path: Path):
        _write(tmp_path, "iroise_2016_01_10T06_00_00.txt", _bulletin(36))
        (tmp_path / "iroise_2016_01_12T06_00_00.txt").write_bytes(
            b"Pr\xe9visions pour la c\xf4te\n"
        )
        assert [w.number for w in extract_warnings(tmp_path)] == [36, 36]

    def test_binary_snapshot_included(self, snapshot_dir: Path):
        (snapshot_dir / "iroise_2016_01_20T06_00_00.txt").write_bytes(b"\xff\xfe\xfa")
        warnings = extract_warnings(snapshot_dir)
        assert [w.number for w in warnings] == [1, 36, 36, 36]
        assert warnings[-1].timestamp.day == 20

    def test_fullwidth_digit_names_skipped(self, snapshot_dir: Path):
        _write(snapshot_dir, "iroise_２０１６_01_20T06_00_00.txt", _bulletin(50))
        assert [w.number for w in extract_warnings(snapshot_dir)] == [1, 36, 36]

    def test_bad_timestamp_aborts(self, snapshot_dir: Path):
        _write(snapshot_dir, "iroise_2016_02_30T06_00_00.txt", NO_WARNING)
        with pytest.raises(ExtractionFailure):
            extract_warnings(snapshot_dir)
