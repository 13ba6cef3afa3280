"""Shared test fixtures for facedb."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import cv2
import numpy as np
import pytest

from ingest.types import CorpusEntry, create_rectangle


def write_image(path: Path, width: int, height: int) -> Path:
    """Write a (height, width) grayscale JPEG with a horizontal gradient."""
    img = np.tile(np.linspace(0, 255, width, dtype=np.uint8), (height, 1))
    assert cv2.imwrite(str(path), img)
    return path


def write_asf(path: Path, points: list[tuple[float, float]], image_name: str = "face.jpg") -> Path:
    """Write an IMM .asf file laid out like the published database files."""
    lines = [
        "######################################################################",
        "#",
        "#    AAM Shape File  -  written: Monday May 08 - 2000 [15:22]",
        "#",
        "######################################################################",
        "",
        "#",
        "# number of model points",
        "#",
        f"{len(points)}",
        "",
        "#",
        "# model points",
        "#",
        "# format: <path#> <type> <x rel.> <y rel.> <point#> <connects from> <connects to>",
        "#",
    ]
    for i, (x, y) in enumerate(points):
        lines.append(f"0\t0\t{x:.6f}\t{y:.6f}\t{i}\t{max(i - 1, 0)}\t{i + 1}")
    lines += ["", "#", "# host image", "#", image_name]
    path.write_text("\n".join(lines) + "\n")
    return path


def write_pts(path: Path, points: list[tuple[float, float]]) -> Path:
    """Write an iBug .pts file."""
    lines = ["version: 1", f"n_points:  {len(points)}", "{"]
    lines += [f"{x} {y}" for x, y in points]
    lines.append("}")
    path.write_text("\n".join(lines) + "\n")
    return path


ASF_POINTS = [(0.1, 0.2), (0.5, 0.5), (0.9, 0.8)]


@pytest.fixture
def imm_dir(tmp_path: Path) -> Path:
    """One-entry IMM database: 3 normalized points, 100x50 image."""
    root = tmp_path / "imm"
    root.mkdir()
    write_asf(root / "01-1m.asf", ASF_POINTS, image_name="01-1m.jpg")
    write_image(root / "01-1m.jpg", width=100, height=50)
    return root


@pytest.fixture
def make_ibug_dir(tmp_path: Path) -> Callable[..., Path]:
    """Factory for iBug databases with ``n`` entries of 68 random points."""

    def _make(n: int = 3, width: int = 120, height: int = 80, name: str = "ibug") -> Path:
        rng = np.random.default_rng(42)
        root = tmp_path / name
        root.mkdir()
        for i in range(n):
            xs = rng.uniform(1, width, size=68)
            ys = rng.uniform(1, height, size=68)
            write_pts(root / f"image_{i:03d}.pts", list(zip(xs.round(3), ys.round(3))))
            write_image(root / f"image_{i:03d}.jpg", width=width, height=height)
        return root

    return _make


@pytest.fixture
def sample_entry() -> CorpusEntry:
    """A 40x60 entry with three landmarks."""
    rng = np.random.default_rng(42)
    shape = np.array([[10.0, 20.0, 30.0], [5.0, 15.0, 25.0]], dtype=np.float32)
    return CorpusEntry(
        image=rng.integers(0, 256, (40, 60), dtype=np.uint8),
        shape=shape,
        rect=create_rectangle((10.0, 5.0), (30.0, 25.0)),
    )
