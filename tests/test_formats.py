"""Tests for ingest.formats — ASF/PTS parsers and format detection."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from conftest import write_asf, write_pts

from ingest.errors import ShapeParseError
from ingest.formats import IBUG, IMM, detect_format, parse_asf_file, parse_pts_file, strategy_for
from ingest.types import CoordinateSpace, DatasetFormat


class TestParseAsf:
    """Tests for the IMM .asf parser."""

    def test_points_in_file_order(self, tmp_path: Path) -> None:
        path = write_asf(tmp_path / "a.asf", [(0.1, 0.2), (0.5, 0.5), (0.9, 0.8)])
        shape = parse_asf_file(path)
        assert shape.shape == (2, 3)
        assert shape.dtype == np.float32
        np.testing.assert_allclose(shape, [[0.1, 0.5, 0.9], [0.2, 0.5, 0.8]], atol=1e-6)

    def test_column_count_matches_declared(self, tmp_path: Path) -> None:
        points = [(i / 60.0, 1.0 - i / 60.0) for i in range(58)]
        shape = parse_asf_file(write_asf(tmp_path / "a.asf", points))
        assert shape.shape == (2, 58)
        np.testing.assert_allclose(shape[0], [p[0] for p in points], atol=1e-6)

    def test_fewer_records_than_declared_zero_filled(self, tmp_path: Path) -> None:
        path = tmp_path / "a.asf"
        path.write_text("4\n0 0 0.25 0.75 0 0 1\n")
        shape = parse_asf_file(path)
        assert shape.shape == (2, 4)
        np.testing.assert_allclose(shape[:, 0], [0.25, 0.75])
        np.testing.assert_array_equal(shape[:, 1:], 0.0)

    def test_comments_and_image_reference_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "a.asf"
        path.write_text("# header\n\n1\n# points\n0 0 0.5 0.25 0 0 0\nsome/long/name.jpg\n")
        shape = parse_asf_file(path)
        np.testing.assert_allclose(shape, [[0.5], [0.25]])

    def test_zero_points_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "a.asf"
        path.write_text("0\n")
        with pytest.raises(ShapeParseError, match="no landmarks"):
            parse_asf_file(path)

    def test_no_count_line_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "a.asf"
        path.write_text("# only comments\n")
        with pytest.raises(ShapeParseError):
            parse_asf_file(path)

    def test_record_before_count_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "a.asf"
        path.write_text("0 0 0.5 0.25 0 0 0\n1\n")
        with pytest.raises(ShapeParseError, match="before point count"):
            parse_asf_file(path)

    def test_too_many_records_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "a.asf"
        path.write_text("1\n0 0 0.5 0.25 0 0 0\n0 0 0.6 0.35 0 0 0\n")
        with pytest.raises(ShapeParseError, match="more landmarks"):
            parse_asf_file(path)

    def test_non_numeric_coordinate_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "a.asf"
        path.write_text("1\n0 0 abc 0.25 0 0 0\n")
        with pytest.raises(ShapeParseError):
            parse_asf_file(path)

    def test_missing_file_fails(self, tmp_path: Path) -> None:
        with pytest.raises(ShapeParseError, match="Cannot read"):
            parse_asf_file(tmp_path / "missing.asf")


class TestParsePts:
    """Tests for the iBug .pts parser."""

    def test_one_based_origin_shift(self, tmp_path: Path) -> None:
        shape = parse_pts_file(write_pts(tmp_path / "a.pts", [(1, 1), (2, 2)]))
        np.testing.assert_allclose(shape, [[0.0, 1.0], [0.0, 1.0]])

    def test_fractional_coordinates(self, tmp_path: Path) -> None:
        shape = parse_pts_file(write_pts(tmp_path / "a.pts", [(10.5, 20.25), (3.0, 4.0)]))
        np.testing.assert_allclose(shape, [[9.5, 2.0], [19.25, 3.0]])

    def test_68_points(self, tmp_path: Path) -> None:
        points = [(float(i + 1), float(2 * i + 1)) for i in range(68)]
        shape = parse_pts_file(write_pts(tmp_path / "a.pts", points))
        assert shape.shape == (2, 68)
        np.testing.assert_allclose(shape[0], np.arange(68))
        np.testing.assert_allclose(shape[1], 2 * np.arange(68))

    def test_truncated_points_fail(self, tmp_path: Path) -> None:
        path = tmp_path / "a.pts"
        path.write_text("version: 1\nn_points: 3\n{\n1 1\n2 2\n")
        with pytest.raises(ShapeParseError, match="expected 3, found 2"):
            parse_pts_file(path)

    def test_bad_header_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "a.pts"
        path.write_text("version: 1\nn_points: many\n{\n1 1\n}\n")
        with pytest.raises(ShapeParseError, match="invalid point count"):
            parse_pts_file(path)

    def test_bad_point_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "a.pts"
        path.write_text("version: 1\nn_points: 1\n{\n1\n}\n")
        with pytest.raises(ShapeParseError, match="bad point"):
            parse_pts_file(path)

    def test_zero_points_fails(self, tmp_path: Path) -> None:
        path = write_pts(tmp_path / "a.pts", [])
        with pytest.raises(ShapeParseError, match="no landmarks"):
            parse_pts_file(path)

    def test_empty_file_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "a.pts"
        path.write_text("")
        with pytest.raises(ShapeParseError, match="truncated header"):
            parse_pts_file(path)


class TestDetectFormat:
    """Tests for extension-based format detection."""

    def test_imm(self, tmp_path: Path) -> None:
        write_asf(tmp_path / "a.asf", [(0.5, 0.5)])
        assert detect_format(tmp_path) is DatasetFormat.IMM

    def test_ibug_recursive(self, tmp_path: Path) -> None:
        sub = tmp_path / "helen" / "trainset"
        sub.mkdir(parents=True)
        write_pts(sub / "a.pts", [(1, 1)])
        assert detect_format(tmp_path) is DatasetFormat.IBUG

    def test_imm_has_priority(self, tmp_path: Path) -> None:
        write_asf(tmp_path / "a.asf", [(0.5, 0.5)])
        write_pts(tmp_path / "b.pts", [(1, 1)])
        assert detect_format(tmp_path) is DatasetFormat.IMM

    def test_unknown(self, tmp_path: Path) -> None:
        (tmp_path / "notes.txt").write_text("nothing here")
        assert detect_format(tmp_path) is DatasetFormat.UNKNOWN

    def test_extension_case_sensitive(self, tmp_path: Path) -> None:
        write_pts(tmp_path / "a.PTS", [(1, 1)])
        assert detect_format(tmp_path) is DatasetFormat.UNKNOWN

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert detect_format(tmp_path / "nope") is DatasetFormat.UNKNOWN


class TestStrategies:
    """Tests for per-format strategies."""

    def test_strategy_lookup(self) -> None:
        assert strategy_for(DatasetFormat.IMM) is IMM
        assert strategy_for(DatasetFormat.IBUG) is IBUG

    def test_coordinate_spaces(self) -> None:
        assert IMM.coordinate_space is CoordinateSpace.NORMALIZED
        assert IBUG.coordinate_space is CoordinateSpace.PIXEL

    def test_annotation_path(self) -> None:
        assert IBUG.annotation_path("/data/image_001") == "/data/image_001.pts"

    def test_unknown_has_no_strategy(self) -> None:
        with pytest.raises(ValueError, match="unknown"):
            strategy_for(DatasetFormat.UNKNOWN)
