"""IMM face database ``.asf`` annotation parser.

Coordinates in ASF files are relative to image width/height; the caller
rescales them to pixels once the image size is known.

Format:
    # comment lines
    58                                  <- point count (short line)
    0 0 0.307 0.574 0 1 2               <- path type x y connectivity...
    ...
    01-1m.jpg                           <- sibling image reference
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from ingest.errors import ShapeParseError
from ingest.types import empty_shape

# Lines shorter than this hold the landmark count.
_COUNT_LINE_MAX_LEN = 10


def parse_asf_file(path: str | Path) -> np.ndarray:
    """Parse an ASF file into a normalized (2, N) shape.

    Args:
        path: Path to the ``.asf`` file.

    Returns:
        float32 shape in file order.

    Raises:
        ShapeParseError: If the file is unreadable or structurally invalid.
    """
    try:
        with open(path) as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ShapeParseError(f"Cannot read {path}: {e}") from e

    shape: np.ndarray | None = None
    landmark_count = 0

    for lineno, line in enumerate(lines, start=1):
        if not line or line.startswith("#"):
            continue

        if ".jpg" in line:
            continue

        if len(line) < _COUNT_LINE_MAX_LEN:
            try:
                num_points = int(line.strip())
            except ValueError as e:
                raise ShapeParseError(f"{path}:{lineno}: invalid point count {line!r}") from e
            if num_points < 0:
                raise ShapeParseError(f"{path}:{lineno}: negative point count {num_points}")
            shape = empty_shape(num_points)
            continue

        tokens = line.split()
        if len(tokens) < 4:
            raise ShapeParseError(f"{path}:{lineno}: expected 'path type x y ...', got {line!r}")
        if shape is None:
            raise ShapeParseError(f"{path}:{lineno}: landmark record before point count")
        if landmark_count >= shape.shape[1]:
            raise ShapeParseError(
                f"{path}:{lineno}: more landmarks than the declared {shape.shape[1]}"
            )
        try:
            shape[0, landmark_count] = float(tokens[2])
            shape[1, landmark_count] = float(tokens[3])
        except ValueError as e:
            raise ShapeParseError(f"{path}:{lineno}: {e}") from e
        landmark_count += 1

    if shape is None or shape.shape[0] == 0 or shape.shape[1] == 0:
        raise ShapeParseError(f"{path}: no landmarks")

    return shape
