# rotsprite/rotation.py
"""
RotSprite rotation engine.

Pipeline:
  - 0°                 -> copy of the input
  - 90° / 180° / 270°  -> exact pixel permutation, no resampling
  - any other angle    -> Scale2x three times (8x), rotate the 8x buffer
                          with nearest-neighbour sampling, and collapse
                          every 8x8 group of samples into one output pixel

Oversampling first means many source samples fall into each output
pixel, and Scale2x has already propagated the art's diagonals into the
oversampled buffer, so the result stays crisp.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
import logging
from numbers import Integral
from typing import Any, Optional

import numpy as np

from .errors import (
    EmptyBufferError,
    InvalidDimensionError,
    SizeMismatchError,
)
from .geometry import (
    angle_terms,
    calculate_rotated_dimensions,
    downsampled_size,
    normalize_angle,
    rotation_center,
)
from .rotated_image import PixelBuffer, RotatedImage, as_pixel_array, validate_dimensions
from .scale2x import scale2x

logger = logging.getLogger(__name__)

# CONFIGURATION


UPSCALE_FACTOR = 8
SCALE_STEPS = 3  # 2x, 4x, 8x

# Below this many oversampled samples the thread pool costs more than it saves
PARALLEL_MIN_SAMPLES = 65_536


# FAST PATHS


def rotate90(pixels: np.ndarray, width: int, height: int) -> RotatedImage:
    """Clockwise quarter turn: dest[x * height + (height - 1 - y)] = src[y * width + x]."""
    rotated = np.rot90(pixels.reshape(height, width), k=-1)
    return RotatedImage(height, width, np.ascontiguousarray(rotated).reshape(-1))


def rotate180(pixels: np.ndarray, width: int, height: int) -> RotatedImage:
    """Half turn: the flat buffer reversed."""
    return RotatedImage(width, height, pixels[::-1].copy())


def rotate270(pixels: np.ndarray, width: int, height: int) -> RotatedImage:
    """Three quarter turns, a quarter turn followed by a half turn."""
    quarter = rotate90(pixels, width, height)
    return rotate180(quarter.pixels, quarter.width, quarter.height)


_QUADRANT_ROTATIONS = {
    90.0: rotate90,
    180.0: rotate180,
    270.0: rotate270,
}


# OVERSAMPLED PASS


def _canvas_dtype(pixels: np.ndarray, empty_color: Any) -> Any:
    """dtype able to hold both the source pixels and the empty colour."""
    if pixels.dtype == object or not isinstance(empty_color, (int, float, np.number, np.bool_)):
        return object
    if isinstance(empty_color, (np.number, np.bool_)):
        return np.result_type(pixels.dtype, empty_color.dtype)
    # Python scalars are sized by value, so e.g. 256 or -1 widen a uint8 canvas
    return np.result_type(pixels.dtype, np.min_scalar_type(empty_color))


def rotate_oversampled(
    pixels: PixelBuffer,
    empty_color: Any,
    width: int,
    height: int,
    angle: float,
    downscale_factor: int,
    max_workers: Optional[int] = None,
) -> RotatedImage:
    """
    Rotate an oversampled buffer and downsample it in the same pass.

    Every sample of the rotated oversampled box is mapped back into the
    source with the inverse rotation and written, nearest-neighbour, to
    output cell (x // downscale_factor, y // downscale_factor). Cells no
    in-bounds sample reaches keep empty_color.

    Work is split per output row: one task owns the downscale_factor
    oversampled rows feeding that row, so tasks never write the same
    cell. Within a task rows run top to bottom and, per row, the
    rightmost in-bounds sample of each cell wins, which is exactly what a
    sequential scan produces. The result does not depend on max_workers.

    Args:
        pixels: Flat oversampled buffer, len == width * height
        empty_color: Value for cells with no source pixel
        width: Oversampled width
        height: Oversampled height
        angle: Normalized angle in degrees
        downscale_factor: Oversampling factor to remove
        max_workers: Thread pool size (None = executor default, 1 = inline)

    Returns:
        RotatedImage of size ceil(box_width / f) x ceil(box_height / f)
    """
    validate_dimensions(width, height)
    if isinstance(downscale_factor, bool) or not isinstance(downscale_factor, Integral) \
            or downscale_factor <= 0:
        raise InvalidDimensionError(
            f"downscale_factor must be a positive integer, got {downscale_factor!r}"
        )

    src = pixels if isinstance(pixels, np.ndarray) and pixels.ndim == 1 else as_pixel_array(pixels)
    if src.size != width * height:
        raise SizeMismatchError(
            f"Buffer length {src.size} does not match width * height ({width} x {height})"
        )
    src = src.reshape(height, width)

    sin, cos = angle_terms(angle)
    center_x, center_y = rotation_center(width, height)
    geometry = calculate_rotated_dimensions(width, height, center_x, center_y, sin, cos)
    out_width, out_height = downsampled_size(geometry, downscale_factor)

    canvas = np.empty(out_width * out_height, dtype=_canvas_dtype(src, empty_color))
    canvas.fill(empty_color)
    rows = canvas.reshape(out_height, out_width)

    delta_x = np.arange(geometry.width, dtype=np.float64) - geometry.center_x
    dest_columns = np.arange(geometry.width) // downscale_factor
    x_cos = delta_x * cos
    x_sin = -delta_x * sin

    def _render_row(dest_y: int) -> None:
        row = rows[dest_y]
        first = dest_y * downscale_factor
        last = min(first + downscale_factor, geometry.height)

        for y in range(first, last):
            delta_y = y - geometry.center_y
            source_x = x_cos + delta_y * sin + center_x
            source_y = x_sin + delta_y * cos + center_y

            inside = (
                (source_x >= 0.0) & (source_x < width)
                & (source_y >= 0.0) & (source_y < height)
            )
            if not inside.any():
                continue

            columns = dest_columns[inside]
            samples = src[
                source_y[inside].astype(np.intp),
                source_x[inside].astype(np.intp),
            ]

            # columns ascend, so the last entry of each run is the final write
            keep = np.ones(columns.size, dtype=bool)
            keep[:-1] = columns[1:] != columns[:-1]
            row[columns[keep]] = samples[keep]

    sample_count = geometry.width * geometry.height
    if max_workers == 1 or out_height == 1 or sample_count < PARALLEL_MIN_SAMPLES:
        for dest_y in range(out_height):
            _render_row(dest_y)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            # list() surfaces worker exceptions
            list(pool.map(_render_row, range(out_height)))

    logger.debug(
        f"Oversampled pass: {width}x{height} @ {angle:.4f}° -> "
        f"box {geometry.width}x{geometry.height} -> {out_width}x{out_height}"
    )
    return RotatedImage(out_width, out_height, canvas)


# PUBLIC API


def rotate(
    buffer: Optional[PixelBuffer],
    empty_color: Any,
    width: int,
    angle: float,
    max_workers: Optional[int] = None,
) -> RotatedImage:
    """
    Rotate a pixel buffer clockwise by angle degrees using RotSprite.

    Args:
        buffer: Flat row-major pixels; the height is len(buffer) // width
        empty_color: Value for output cells outside the rotated source
        width: Source width, > 0
        angle: Rotation angle in degrees, any finite real value
        max_workers: Thread pool size for the oversampled pass

    Returns:
        New RotatedImage; the input buffer is never modified or aliased

    Raises:
        EmptyBufferError: If buffer is None or has no pixels
        InvalidDimensionError: If width is not a positive integer
        SizeMismatchError: If len(buffer) is not a multiple of width
        InvalidAngleError: If angle is NaN or infinite
    """
    if buffer is None:
        raise EmptyBufferError("Buffer cannot be empty")

    pixels = as_pixel_array(buffer)
    if pixels.size == 0:
        raise EmptyBufferError("Buffer cannot be empty")

    if isinstance(width, bool) or not isinstance(width, Integral) or width <= 0:
        raise InvalidDimensionError(f"Width must be a positive integer, got {width!r}")

    if pixels.size % width != 0:
        raise SizeMismatchError(
            f"Image size {pixels.size} doesn't match with supplied width {width}"
        )

    height = pixels.size // width
    angle = normalize_angle(angle)

    if angle == 0.0:
        logger.debug(f"Rotation 0°: returning copy of {width}x{height}")
        return RotatedImage(width, height, pixels)

    quadrant = _QUADRANT_ROTATIONS.get(angle)
    if quadrant is not None:
        logger.debug(f"Rotation {angle:.0f}°: exact permutation of {width}x{height}")
        return quadrant(pixels, width, height)

    scaled = RotatedImage(width, height, pixels)
    for _ in range(SCALE_STEPS):
        scaled = scale2x(scaled.pixels, scaled.width, scaled.height)

    return rotate_oversampled(
        scaled.pixels,
        empty_color,
        scaled.width,
        scaled.height,
        angle,
        UPSCALE_FACTOR,
        max_workers=max_workers,
    )
