# rotsprite/adapters.py
"""
OpenCV / numpy adapter for the rotation engine.

Converts (H, W[, C]) uint8 images into the engine's flat uint32 buffer and
back. Packing is fixed:
    alpha -> bits 24-31, red -> 16-23, green -> 8-15, blue -> 0-7
Channel order of the array (OpenCV's BGRA or Pillow's RGBA) only matters
here; the engine never looks inside a pixel.
"""

from __future__ import annotations
from typing import Optional
import logging

import cv2
import numpy as np

from .rotation import rotate

logger = logging.getLogger(__name__)

# CONFIGURATION


DEFAULT_EMPTY_COLOR = 0  # fully transparent black

# byte position of each channel inside the packed ARGB word
_ARGB_SHIFTS = {"A": 24, "R": 16, "G": 8, "B": 0}
_CHANNEL_ORDERS = ("BGRA", "RGBA")


def _check_order(channel_order: str) -> str:
    order = channel_order.upper()
    if order not in _CHANNEL_ORDERS:
        raise ValueError(f"Unsupported channel order: {channel_order}")
    return order


# CHANNEL NORMALIZATION


def to_bgra(image: np.ndarray) -> np.ndarray:
    """
    Convert an OpenCV image to 8-bit BGRA.

    Handles grayscale (H, W) / (H, W, 1), BGR, BGRA and 16-bit inputs.

    Args:
        image: OpenCV image array

    Returns:
        (H, W, 4) uint8 BGRA copy

    Raises:
        ValueError: If image is None, empty or has an unsupported shape
    """
    if image is None or not isinstance(image, np.ndarray) or image.size == 0:
        raise ValueError("to_bgra: input image is None or empty")

    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        raise ValueError(f"to_bgra: unsupported dtype {image.dtype}")

    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGRA)

    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2BGRA)

    if image.ndim == 3 and image.shape[2] == 4:
        return image.copy()

    raise ValueError(f"to_bgra: invalid image shape {image.shape}")


# PACKING


def pack_argb(image: np.ndarray, channel_order: str = "BGRA") -> np.ndarray:
    """
    Pack a (H, W, 4) uint8 image into flat ARGB uint32 pixels.

    Args:
        image: Four-channel image
        channel_order: "BGRA" (OpenCV) or "RGBA" (Pillow)

    Returns:
        1-D uint32 array of length H * W, row-major
    """
    order = _check_order(channel_order)
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"pack_argb: expected (H, W, 4) image, got {image.shape}")

    channels = image.astype(np.uint32)
    packed = np.zeros(image.shape[:2], dtype=np.uint32)
    for index, name in enumerate(order):
        packed |= channels[:, :, index] << np.uint32(_ARGB_SHIFTS[name])

    return packed.reshape(-1)


def unpack_argb(
    pixels: np.ndarray,
    width: int,
    height: int,
    channel_order: str = "BGRA",
) -> np.ndarray:
    """
    Unpack flat ARGB uint32 pixels into a (height, width, 4) uint8 image.

    Args:
        pixels: Flat packed pixels, len == width * height
        width: Image width
        height: Image height
        channel_order: "BGRA" (OpenCV) or "RGBA" (Pillow)

    Returns:
        (height, width, 4) uint8 image
    """
    order = _check_order(channel_order)
    packed = np.asarray(pixels, dtype=np.uint32)
    if packed.size != width * height:
        raise ValueError(
            f"unpack_argb: {packed.size} pixels do not fill {width}x{height}"
        )
    packed = packed.reshape(height, width)

    out = np.empty((height, width, 4), dtype=np.uint8)
    for index, name in enumerate(order):
        out[:, :, index] = (packed >> np.uint32(_ARGB_SHIFTS[name])) & 0xFF

    return out


# ROTATION


def rotate_image(
    image: np.ndarray,
    angle: float,
    empty_color: int = DEFAULT_EMPTY_COLOR,
    max_workers: Optional[int] = None,
) -> np.ndarray:
    """
    Rotate an OpenCV image with RotSprite.

    Args:
        image: Grayscale, BGR or BGRA image (8 or 16 bit)
        angle: Clockwise rotation in degrees
        empty_color: Packed ARGB value for uncovered pixels
        max_workers: Thread pool size for the oversampled pass

    Returns:
        Rotated (H', W', 4) uint8 BGRA image
    """
    bgra = to_bgra(image)
    height, width = bgra.shape[:2]

    rotated = rotate(
        pack_argb(bgra),
        np.uint32(empty_color),
        width,
        angle,
        max_workers=max_workers,
    )

    logger.info(
        f"Rotated {width}x{height} image by {angle}° -> {rotated.width}x{rotated.height}"
    )
    return unpack_argb(rotated.pixels, rotated.width, rotated.height)
