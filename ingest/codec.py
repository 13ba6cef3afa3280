"""OpenCV-backed image codec.

Decodes, resizes and mirrors single channel images. Stateless.
"""

from __future__ import annotations

import cv2
import numpy as np


class OpenCVImageCodec:
    """Image codec built on ``cv2``.

    Usage:
        >>> codec = OpenCVImageCodec()
        >>> img = codec.decode_grayscale("data/imm/01-1m.jpg")
    """

    def decode_grayscale(self, path: str) -> np.ndarray | None:
        """Read ``path`` as a (H, W) uint8 image.

        Returns:
            The image, or None if the file is missing or not decodable.
        """
        image = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
        if image is None or image.size == 0:
            return None
        return image

    def resize(self, image: np.ndarray, factor: float) -> np.ndarray:
        """Scale both axes by ``factor`` using bicubic interpolation.

        Each side keeps at least one pixel.
        """
        h, w = image.shape[:2]
        new_w = max(1, int(round(w * factor)))
        new_h = max(1, int(round(h * factor)))
        return cv2.resize(image, (new_w, new_h), interpolation=cv2.INTER_CUBIC)

    def flip_horizontal(self, image: np.ndarray) -> np.ndarray:
        return cv2.flip(image, 1)
