"""Rectangle list I/O and per-entry rectangle resolution.

Rectangle files hold one rectangle per line as ``x y width height``
(whitespace and/or comma separated). Blank lines and ``#`` comments are
ignored. Rectangles pair with candidate entries by row order.
"""

from __future__ import annotations

import re
from pathlib import Path

import numpy as np
from loguru import logger

from ingest.errors import RectangleCountMismatchError, RectangleFileError
from ingest.types import create_rectangle

_SEPARATORS = re.compile(r"[,\s]+")


def shape_bounds(shape: np.ndarray) -> np.ndarray:
    """Tight axis-aligned bounding rectangle of a (2, N) shape."""
    if shape.ndim != 2 or shape.shape[1] == 0:
        raise ValueError(f"Cannot compute bounds of shape {shape.shape}")
    mins = shape.min(axis=1)
    maxs = shape.max(axis=1)
    return create_rectangle((mins[0], mins[1]), (maxs[0], maxs[1]))


def import_rectangles(path: str | Path | None) -> list[np.ndarray]:
    """Load rectangles from ``path``.

    A missing path or file yields an empty list, which means
    "no rectangles provided".

    Raises:
        RectangleFileError: If the file cannot be read or a line is not
            four numbers.
    """
    if not path:
        return []
    file_path = Path(path)
    if not file_path.is_file():
        logger.warning(f"Rectangle file not found: {file_path}")
        return []

    try:
        with open(file_path) as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise RectangleFileError(f"Cannot read {file_path}: {e}") from e

    rects: list[np.ndarray] = []
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        tokens = [t for t in _SEPARATORS.split(line) if t]
        if len(tokens) != 4:
            raise RectangleFileError(
                f"{file_path}:{lineno}: expected 'x y width height', got {line!r}"
            )
        try:
            x, y, w, h = (float(t) for t in tokens)
        except ValueError as e:
            raise RectangleFileError(f"{file_path}:{lineno}: {e}") from e
        rects.append(create_rectangle((x, y), (x + w, y + h)))

    return rects


def export_rectangles(path: str | Path, rects: list[np.ndarray]) -> Path:
    """Write ``rects`` in the format read by ``import_rectangles``.

    Each rect is written as its axis-aligned bounds.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w") as f:
        for rect in rects:
            x0, y0 = (float(v) for v in rect.min(axis=1))
            x1, y1 = (float(v) for v in rect.max(axis=1))
            f.write(f"{x0:g} {y0:g} {x1 - x0:g} {y1 - y0:g}\n")
    logger.info(f"Exported {len(rects)} rectangles to {file_path}")
    return file_path


class RectangleStore:
    """Loaded rectangles plus the tight-bounds fallback.

    Usage:
        >>> store = RectangleStore.load("rects.txt")
        >>> store.validate(num_candidates)
        >>> rect = store.resolve(i, shape)
    """

    def __init__(self, rects: list[np.ndarray] | None = None) -> None:
        self._rects = list(rects or [])

    @classmethod
    def load(cls, path: str | Path | None) -> RectangleStore:
        return cls(import_rectangles(path))

    @property
    def uses_fallback(self) -> bool:
        return not self._rects

    def __len__(self) -> int:
        return len(self._rects)

    def validate(self, candidates: int) -> None:
        """Check rectangles pair one-to-one with ``candidates`` entries.

        Raises:
            RectangleCountMismatchError: If rectangles were loaded and the
                counts differ.
        """
        if self._rects and len(self._rects) != candidates:
            raise RectangleCountMismatchError(expected=candidates, found=len(self._rects))

    def resolve(self, index: int, shape: np.ndarray) -> np.ndarray:
        """Rect for candidate ``index``: the loaded one, else the shape's bounds."""
        if self.uses_fallback:
            return shape_bounds(shape)
        return self._rects[index].copy()
