"""Downscaling policy for oversized images.

Image, shape and rect are always scaled together by one factor, so the
landmarks stay registered with the pixels.
"""

from __future__ import annotations

import numpy as np

from ingest.codec import OpenCVImageCodec
from ingest.types import ImageCodec, ImportParameters


def needs_scaling(image_size: tuple[int, int], params: ImportParameters) -> tuple[bool, float]:
    """Decide whether an image exceeds the maximum side length.

    Args:
        image_size: (width, height) in pixels.
        params: Import options.

    Returns:
        (True, factor) with factor < 1 if the longer side is larger than
        ``params.max_image_side_length``, else (False, 1.0).
    """
    if params.max_image_side_length is None:
        return False, 1.0

    max_len = max(image_size)
    if max_len > params.max_image_side_length:
        return True, params.max_image_side_length / max_len
    return False, 1.0


def scale_image_shape_and_rect(
    image: np.ndarray,
    shape: np.ndarray,
    rect: np.ndarray,
    factor: float,
    codec: ImageCodec | None = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Scale an (image, shape, rect) triple uniformly by ``factor``."""
    codec = codec or OpenCVImageCodec()
    scaled_image = codec.resize(image, factor)
    scaled_shape = (shape * np.float32(factor)).astype(np.float32)
    scaled_rect = (rect * np.float32(factor)).astype(np.float32)
    return scaled_image, scaled_shape, scaled_rect
