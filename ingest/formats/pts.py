"""iBug ``.pts`` annotation parser.

Format:
    version: 1
    n_points: 68
    {
    x y        <- 1-based pixel coordinates, N lines
    ...
    }
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from ingest.errors import ShapeParseError
from ingest.types import empty_shape

_HEADER_LINES = 3


def parse_pts_file(path: str | Path) -> np.ndarray:
    """Parse a PTS file into a (2, N) pixel-space shape.

    Points are shifted by -1 on both axes to a 0-based origin.

    Raises:
        ShapeParseError: If the header is malformed or fewer than N points
            are present.
    """
    try:
        with open(path) as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ShapeParseError(f"Cannot read {path}: {e}") from e

    if len(lines) < _HEADER_LINES:
        raise ShapeParseError(f"{path}: truncated header")

    # lines[0] is the version tag, lines[2] the opening brace
    header = lines[1].split()
    if len(header) < 2:
        raise ShapeParseError(f"{path}:2: expected '<label> <N>', got {lines[1]!r}")
    try:
        num_points = int(header[1])
    except ValueError as e:
        raise ShapeParseError(f"{path}:2: invalid point count {header[1]!r}") from e
    if num_points <= 0:
        raise ShapeParseError(f"{path}:2: no landmarks (point count {num_points})")

    data = lines[_HEADER_LINES:_HEADER_LINES + num_points]
    if len(data) < num_points:
        raise ShapeParseError(
            f"{path}: failed to read points, expected {num_points}, found {len(data)}"
        )

    shape = empty_shape(num_points)
    for i, line in enumerate(data):
        tokens = line.split()
        try:
            x, y = float(tokens[0]), float(tokens[1])
        except (IndexError, ValueError) as e:
            raise ShapeParseError(f"{path}:{_HEADER_LINES + i + 1}: bad point {line!r}") from e
        shape[0, i] = x - 1.0
        shape[1, i] = y - 1.0

    return shape
