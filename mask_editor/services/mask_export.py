"""
Mask export helpers.

Converts the persistent mask surface into numpy arrays for hosts that feed
the mask into image pipelines, and answers simple questions about it.
"""

from typing import Optional, Tuple

import cv2
import numpy as np
from PyQt6.QtGui import QImage


def _logical_size(image: QImage) -> Tuple[int, int]:
    dpr = image.devicePixelRatio() or 1.0
    return (
        max(1, int(round(image.width() / dpr))),
        max(1, int(round(image.height() / dpr))),
    )


def mask_to_array(image: QImage, logical: bool = False) -> np.ndarray:
    """
    Extract the mask alpha channel.

    Args:
        image: Mask surface image
        logical: Resample to the logical size (device scale removed)

    Returns:
        uint8 array of shape (height, width); empty for a null image
    """
    if image is None or image.isNull():
        return np.zeros((0, 0), dtype=np.uint8)

    width = image.width()
    height = image.height()
    logical_width, logical_height = _logical_size(image)

    # Convert to straight RGBA so the alpha byte has a fixed position
    if image.format() != QImage.Format.Format_RGBA8888:
        image = image.convertToFormat(QImage.Format.Format_RGBA8888)

    stride = image.bytesPerLine()
    ptr = image.constBits()
    ptr.setsize(stride * height)
    rows = np.array(ptr, dtype=np.uint8).reshape((height, stride))
    alpha = rows[:, :width * 4].reshape((height, width, 4))[:, :, 3].copy()

    if logical and (logical_width, logical_height) != (width, height):
        alpha = cv2.resize(alpha, (logical_width, logical_height), interpolation=cv2.INTER_AREA)

    return alpha


def is_mask_empty(image: QImage) -> bool:
    """True when no pixel of the mask has any coverage."""
    return not np.any(mask_to_array(image))


def mask_coverage(image: QImage, logical: bool = False) -> float:
    """Fraction of pixels with non-zero alpha (0.0 - 1.0)."""
    alpha = mask_to_array(image, logical=logical)
    if alpha.size == 0:
        return 0.0
    return float(np.count_nonzero(alpha)) / alpha.size


def mask_bounding_box(image: QImage, logical: bool = False) -> Optional[Tuple[int, int, int, int]]:
    """
    Bounding box of the painted area.

    Args:
        image: Mask surface image
        logical: Report in logical rather than physical pixels

    Returns:
        (x, y, width, height), or None for an empty mask
    """
    alpha = mask_to_array(image, logical=logical)
    if alpha.size == 0 or not np.any(alpha):
        return None
    x, y, width, height = cv2.boundingRect(cv2.findNonZero(alpha))
    return int(x), int(y), int(width), int(height)


__all__ = ['mask_to_array', 'mask_coverage', 'mask_bounding_box', 'is_mask_empty']
