# rotsprite/rotated_image.py
"""
Immutable pixel buffer with validated dimensions.

RotatedImage is both the input and output currency of the engine:
  - Scale2x returns one
  - every rotation path returns one
  - adapters unpack one back into their native image type

Pixels are stored as a flat, row-major numpy array. Numeric pixels keep
their native dtype; anything else is stored in an object array and only
ever compared with == / != or copied.
"""

from __future__ import annotations
from dataclasses import dataclass
from numbers import Integral
from typing import Any, List, Sequence, Union
import logging

import numpy as np

from .errors import InvalidDimensionError, SizeMismatchError

logger = logging.getLogger(__name__)

PixelBuffer = Union[Sequence[Any], np.ndarray]

# dtype kinds kept as-is; everything else becomes an object array
_NATIVE_KINDS = "biuf"


# BUFFER HELPERS


def as_pixel_array(buffer: PixelBuffer) -> np.ndarray:
    """
    Convert a caller buffer into a fresh flat numpy array.

    The caller's buffer is never aliased: the result is always a copy.

    Args:
        buffer: Flat sequence of pixels or a 1-D numpy array

    Returns:
        1-D numpy array holding a copy of the pixels

    Raises:
        SizeMismatchError: If a numpy array with more than one dimension is given
    """
    if isinstance(buffer, np.ndarray):
        if buffer.ndim != 1:
            raise SizeMismatchError(
                f"Pixel buffer must be flat, got array of shape {buffer.shape}"
            )
        if buffer.dtype.kind in _NATIVE_KINDS or buffer.dtype == object:
            return buffer.copy()
        return np.fromiter(buffer, dtype=object, count=buffer.size)

    items = list(buffer)
    try:
        arr = np.asarray(items)
    except ValueError:
        # ragged values, e.g. tuples of different lengths
        arr = None

    if arr is None or arr.ndim != 1 or arr.dtype.kind not in _NATIVE_KINDS:
        arr = np.fromiter(items, dtype=object, count=len(items))

    return arr


def validate_dimensions(width: Any, height: Any) -> None:
    """
    Check that width and height are positive integers.

    Raises:
        InvalidDimensionError: If either value is not a positive integer
    """
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidDimensionError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidDimensionError(f"{name} must be positive, got {value}")


# DATA CLASSES


@dataclass(frozen=True, eq=False)
class RotatedImage:
    """
    Pixel buffer together with its dimensions.

    Attributes:
        width (int): Image width in pixels, > 0
        height (int): Image height in pixels, > 0
        pixels (np.ndarray): Flat row-major pixels, len == width * height

    The pixel array is made read-only on construction, so the triple
    cannot change for the lifetime of the value.
    """
    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        """Validate dimensions and freeze the pixel buffer."""
        validate_dimensions(self.width, self.height)

        # always a private copy, so later writes to the caller's buffer
        # cannot reach this value
        pixels = as_pixel_array(self.pixels)

        expected = self.width * self.height
        if pixels.size != expected:
            raise SizeMismatchError(
                f"Pixels length must equal width * height "
                f"({self.width} x {self.height} = {expected}), got {pixels.size}"
            )

        pixels.flags.writeable = False
        object.__setattr__(self, "pixels", pixels)

    def as_2d(self) -> np.ndarray:
        """Read-only (height, width) view of the pixels."""
        return self.pixels.reshape(self.height, self.width)

    def to_list(self) -> List[Any]:
        """Pixels as plain Python values."""
        return self.pixels.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RotatedImage):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"RotatedImage("
            f"width={self.width}, "
            f"height={self.height}, "
            f"dtype={self.pixels.dtype}"
            f")"
        )
