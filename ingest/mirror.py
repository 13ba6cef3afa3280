"""Left-right mirrored augmentation of training entries.

Landmark columns keep their index: after mirroring, the column that held
the left eye still holds it, now at the right eye's position. Consumers
that need semantic left/right must remap columns themselves.
"""

from __future__ import annotations

import numpy as np

from ingest.codec import OpenCVImageCodec
from ingest.types import CorpusEntry, ImageCodec


def mirror_points(points: np.ndarray, image_width: int) -> np.ndarray:
    """Map every column to x' = (W - 1) - x, y' = y."""
    mirrored = points.astype(np.float32, copy=True)
    mirrored[0, :] = np.float32(image_width - 1) - points[0, :]
    return mirrored


def mirror_image_shape_and_rect(
    image: np.ndarray,
    shape: np.ndarray,
    rect: np.ndarray,
    codec: ImageCodec | None = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Flip an (image, shape, rect) triple horizontally.

    Returns:
        New arrays; the inputs are left untouched.
    """
    codec = codec or OpenCVImageCodec()
    width = image.shape[1]
    return (
        codec.flip_horizontal(image),
        mirror_points(shape, width),
        mirror_points(rect, width),
    )


class MirrorAugmenter:
    """Derive mirrored copies of corpus entries.

    Usage:
        >>> augmenter = MirrorAugmenter()
        >>> flipped = augmenter.augment(entry)
    """

    def __init__(self, codec: ImageCodec | None = None) -> None:
        self._codec = codec or OpenCVImageCodec()

    def augment(self, entry: CorpusEntry) -> CorpusEntry:
        image, shape, rect = mirror_image_shape_and_rect(
            entry.image, entry.shape, entry.rect, codec=self._codec
        )
        return CorpusEntry(image=image, shape=shape, rect=rect)

    def augment_batch(self, entries: list[CorpusEntry]) -> list[CorpusEntry]:
        """Mirror a batch of entries."""
        return [self.augment(e) for e in entries]
