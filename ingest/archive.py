"""Corpus persistence as a compressed ``.npz`` archive."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from loguru import logger

from ingest.types import Corpus


def _pack(arrays: list[np.ndarray]) -> np.ndarray:
    """Stack equally sized arrays; fall back to an object array otherwise."""
    if arrays and all(a.shape == arrays[0].shape for a in arrays):
        return np.stack(arrays)
    packed = np.empty(len(arrays), dtype=object)
    for i, a in enumerate(arrays):
        packed[i] = a
    return packed


def save_corpus(path: str | Path, corpus: Corpus) -> Path:
    """Write ``corpus`` to ``path``.

    Images vary in size and are always stored as an object array. Shapes and
    rects are stacked when every entry has the same point count.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    images = np.empty(len(corpus), dtype=object)
    for i, img in enumerate(corpus.images):
        images[i] = img

    np.savez_compressed(
        str(path),
        images=images,
        shapes=_pack(corpus.shapes),
        rects=_pack(corpus.rects),
    )
    logger.info(f"Saved corpus with {len(corpus)} entries to {path}")
    return path


def load_corpus(path: str | Path) -> Corpus:
    """Read a corpus written by ``save_corpus``."""
    with np.load(str(path), allow_pickle=True) as data:
        images = [np.asarray(img, dtype=np.uint8) for img in data["images"]]
        shapes = [np.asarray(s, dtype=np.float32) for s in data["shapes"]]
        rects = [np.asarray(r, dtype=np.float32) for r in data["rects"]]
    return Corpus(images=images, shapes=shapes, rects=rects)
