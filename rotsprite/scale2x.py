# rotsprite/scale2x.py
"""
Scale2x edge-preserving 2x upscaler.

Each source pixel becomes a 2x2 block. A sub-pixel copies a neighbour
only when the neighbour pattern says an edge runs diagonally through
that corner; otherwise it keeps the centre value. This keeps pixel-art
diagonals sharp where nearest-neighbour scaling would turn them into
staircases.
"""

from __future__ import annotations
from typing import Tuple
import logging

import numpy as np

from .errors import SizeMismatchError
from .rotated_image import PixelBuffer, RotatedImage, as_pixel_array, validate_dimensions

logger = logging.getLogger(__name__)

SCALE_FACTOR = 2


# NEIGHBOUR PLANES


def _neighbour_planes(
    center: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Build the up/left/down/right neighbour value of every pixel.

    Missing neighbours take the value of the pixel itself, not of the
    nearest in-range pixel:
      - top row:      up    = center
      - bottom row:   down  = center
      - left column:  left  = center
      - right column: right = center
    Corners get both of their clamps. Single-row and single-column
    images clamp both opposite sides.

    Args:
        center: (height, width) pixel array

    Returns:
        Tuple (up, left, down, right), each shaped like center
    """
    up = np.empty_like(center)
    up[1:, :] = center[:-1, :]
    up[0, :] = center[0, :]

    down = np.empty_like(center)
    down[:-1, :] = center[1:, :]
    down[-1, :] = center[-1, :]

    left = np.empty_like(center)
    left[:, 1:] = center[:, :-1]
    left[:, 0] = center[:, 0]

    right = np.empty_like(center)
    right[:, :-1] = center[:, 1:]
    right[:, -1] = center[:, -1]

    return up, left, down, right


# SCALE2X


def _equal(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Elementwise == as a bool array, also for object pixels."""
    return np.asarray(a == b, dtype=bool)


def scale2x_blocks(
    center: np.ndarray,
    up: np.ndarray,
    left: np.ndarray,
    down: np.ndarray,
    right: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Apply the Scale2x rule elementwise.

    Works on scalars wrapped in arrays as well as whole planes; only
    equality is ever evaluated on the pixel values.

    Returns:
        Tuple (top_left, top_right, bottom_left, bottom_right)
    """
    left_up = _equal(left, up)
    up_right = _equal(up, right)
    down_left = _equal(down, left)
    right_down = _equal(right, down)

    top_left = np.where(left_up & ~_equal(left, down) & ~up_right, up, center)
    top_right = np.where(up_right & ~left_up & ~right_down, right, center)
    bottom_left = np.where(down_left & ~right_down & ~left_up, left, center)
    bottom_right = np.where(right_down & ~up_right & ~down_left, down, center)

    return top_left, top_right, bottom_left, bottom_right


def scale2x(buffer: PixelBuffer, width: int, height: int) -> RotatedImage:
    """
    Upscale a pixel buffer 2x with the Scale2x algorithm.

    Args:
        buffer: Flat row-major pixels, len == width * height
        width: Source width, > 0
        height: Source height, > 0

    Returns:
        RotatedImage of size (2 * width) x (2 * height)

    Raises:
        InvalidDimensionError: If width or height is not positive
        SizeMismatchError: If len(buffer) != width * height
    """
    validate_dimensions(width, height)

    pixels = as_pixel_array(buffer)
    if pixels.size != width * height:
        raise SizeMismatchError(
            f"Buffer length {pixels.size} does not match "
            f"width * height ({width} x {height})"
        )

    center = pixels.reshape(height, width)
    up, left, down, right = _neighbour_planes(center)
    top_left, top_right, bottom_left, bottom_right = scale2x_blocks(
        center, up, left, down, right
    )

    scaled_width = width * SCALE_FACTOR
    scaled_height = height * SCALE_FACTOR
    scaled = np.empty((scaled_height, scaled_width), dtype=center.dtype)
    scaled[0::2, 0::2] = top_left
    scaled[0::2, 1::2] = top_right
    scaled[1::2, 0::2] = bottom_left
    scaled[1::2, 1::2] = bottom_right

    logger.debug(f"Scale2x: {width}x{height} -> {scaled_width}x{scaled_height}")
    return RotatedImage(scaled_width, scaled_height, scaled.reshape(-1))
