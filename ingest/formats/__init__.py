"""Annotation formats — detection and per-format parsing strategies."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from ingest.files import find_files_in_dir
from ingest.formats.asf import parse_asf_file
from ingest.formats.pts import parse_pts_file
from ingest.types import CoordinateSpace, DatasetFormat


@dataclass(frozen=True, slots=True)
class FormatStrategy:
    """Everything format-specific about importing a dataset.

    Attributes:
        format: Dataset family.
        extension: Annotation file extension (no dot).
        parse: Annotation file -> (2, N) shape.
        coordinate_space: Units produced by ``parse``.
    """
    format: DatasetFormat
    extension: str
    parse: Callable[[str | Path], np.ndarray]
    coordinate_space: CoordinateSpace

    def annotation_path(self, base_path: str) -> str:
        return f"{base_path}.{self.extension}"


IMM = FormatStrategy(
    format=DatasetFormat.IMM,
    extension="asf",
    parse=parse_asf_file,
    coordinate_space=CoordinateSpace.NORMALIZED,
)

IBUG = FormatStrategy(
    format=DatasetFormat.IBUG,
    extension="pts",
    parse=parse_pts_file,
    coordinate_space=CoordinateSpace.PIXEL,
)

# Detection priority
STRATEGIES: tuple[FormatStrategy, ...] = (IMM, IBUG)


def detect_format(directory: str | Path) -> DatasetFormat:
    """Sniff the dataset format from the annotation extensions present."""
    for strategy in STRATEGIES:
        if find_files_in_dir(directory, strategy.extension, recursive=True):
            return strategy.format
    return DatasetFormat.UNKNOWN


def strategy_for(dataset_format: DatasetFormat) -> FormatStrategy:
    """Return the strategy for a detected format.

    Raises:
        ValueError: For ``DatasetFormat.UNKNOWN``.
    """
    for strategy in STRATEGIES:
        if strategy.format is dataset_format:
            return strategy
    raise ValueError(f"No import strategy for format {dataset_format.value!r}")


__all__ = [
    "FormatStrategy",
    "IBUG",
    "IMM",
    "STRATEGIES",
    "detect_format",
    "parse_asf_file",
    "parse_pts_file",
    "strategy_for",
]
