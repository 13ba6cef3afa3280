"""Shared types, protocols, and constants for the dataset importer."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SHAPE_ROWS = 2  # x-row, y-row
RECT_CORNERS = 4  # top-left, top-right, bottom-left, bottom-right
IMAGE_EXTENSION = "jpg"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class DatasetFormat(Enum):
    IMM = "imm"
    IBUG = "ibug"
    UNKNOWN = "unknown"


class CoordinateSpace(Enum):
    """Units of the coordinates a landmark parser produces."""
    NORMALIZED = auto()  # [0, 1] relative to image width/height
    PIXEL = auto()


# ---------------------------------------------------------------------------
# Core Data Structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ImportParameters:
    """Import options.

    Attributes:
        max_image_side_length: Downscale images whose longer side exceeds
            this many pixels (None = unbounded).
        generate_vertically_mirrored: Append a left-right mirrored copy of
            every entry.
    """
    max_image_side_length: int | None = None
    generate_vertically_mirrored: bool = False

    def __post_init__(self) -> None:
        if self.max_image_side_length is not None and self.max_image_side_length <= 0:
            raise ValueError(
                f"max_image_side_length must be positive, got {self.max_image_side_length}"
            )


@dataclass(frozen=True, slots=True)
class CorpusEntry:
    """A single training example.

    Attributes:
        image: (H, W) uint8 grayscale image.
        shape: (2, N) float32 landmarks, row 0 = x, row 1 = y.
        rect: (2, 4) float32 bounding rectangle corners.
    """
    image: NDArray[np.uint8]
    shape: NDArray[np.float32]
    rect: NDArray[np.float32]

    def __post_init__(self) -> None:
        if self.image.ndim != 2:
            raise ValueError(f"Expected (H, W) grayscale image, got shape {self.image.shape}")
        if self.shape.ndim != 2 or self.shape.shape[0] != SHAPE_ROWS:
            raise ValueError(f"Expected (2, N) shape, got {self.shape.shape}")
        if self.rect.shape != (SHAPE_ROWS, RECT_CORNERS):
            raise ValueError(f"Expected (2, 4) rect, got {self.rect.shape}")


@dataclass(frozen=True, slots=True)
class SkippedEntry:
    """A candidate that was dropped because parsing or decoding failed."""
    base_path: str
    reason: str


@dataclass
class Corpus:
    """Parallel, append-only sequences of images, shapes and rects.

    Index ``i`` in each list refers to the same example. Use ``append`` or
    ``extend``; the lists are exposed for read access only.
    """
    images: list[NDArray[np.uint8]] = field(default_factory=list)
    shapes: list[NDArray[np.float32]] = field(default_factory=list)
    rects: list[NDArray[np.float32]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not len(self.images) == len(self.shapes) == len(self.rects):
            raise ValueError(
                f"Corpus sequences differ in length: images={len(self.images)}, "
                f"shapes={len(self.shapes)}, rects={len(self.rects)}"
            )

    def append(self, entry: CorpusEntry) -> None:
        self.images.append(entry.image)
        self.shapes.append(entry.shape)
        self.rects.append(entry.rect)

    def extend(self, entries: list[CorpusEntry]) -> None:
        for entry in entries:
            self.append(entry)

    def __len__(self) -> int:
        return len(self.images)

    def __getitem__(self, idx: int) -> CorpusEntry:
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"Corpus indices must be integers, not {type(idx).__name__}")
        return CorpusEntry(image=self.images[idx], shape=self.shapes[idx], rect=self.rects[idx])

    def __iter__(self) -> Iterator[CorpusEntry]:
        for i in range(len(self)):
            yield self[i]


@dataclass
class ImportResult:
    """Outcome of a single import call.

    Attributes:
        success: True iff at least one new entry was produced.
        message: Human-readable diagnostic.
        format: Detected dataset format.
        candidates: Number of annotation files found.
        entries: New entries, in candidate order (mirrored copy follows its source).
        skipped: Candidates dropped due to parse or decode failures.
        rectangles_loaded: Rectangles read from the rectangle file (0 = fallback).
    """
    success: bool
    message: str
    format: DatasetFormat = DatasetFormat.UNKNOWN
    candidates: int = 0
    entries: list[CorpusEntry] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    rectangles_loaded: int = 0

    @property
    def appended(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return self.success


# ---------------------------------------------------------------------------
# Protocols (Interfaces)
# ---------------------------------------------------------------------------

class ImageCodec(Protocol):
    """Protocol for image decode/resize/flip backends."""

    def decode_grayscale(self, path: str) -> NDArray[np.uint8] | None:
        """Decode an image file as single channel, or None on failure."""
        ...

    def resize(self, image: NDArray[np.uint8], factor: float) -> NDArray[np.uint8]:
        """Resize uniformly by ``factor`` on both axes."""
        ...

    def flip_horizontal(self, image: NDArray[np.uint8]) -> NDArray[np.uint8]:
        """Mirror left-right."""
        ...


# ---------------------------------------------------------------------------
# Shape / Rect helpers
# ---------------------------------------------------------------------------

def empty_shape(num_points: int) -> NDArray[np.float32]:
    """Zero-filled (2, num_points) shape."""
    return np.zeros((SHAPE_ROWS, num_points), dtype=np.float32)


def create_rectangle(
    min_corner: tuple[float, float],
    max_corner: tuple[float, float],
) -> NDArray[np.float32]:
    """Build a (2, 4) rect from its min and max corners.

    Columns are top-left, top-right, bottom-left, bottom-right.
    """
    x0, y0 = min_corner
    x1, y1 = max_corner
    return np.array(
        [
            [x0, x1, x0, x1],
            [y0, y0, y1, y1],
        ],
        dtype=np.float32,
    )
