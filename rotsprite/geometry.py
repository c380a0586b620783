# rotsprite/geometry.py
"""
Canvas geometry for arbitrary-angle rotation.

The rotated canvas is the bounding box of the four source corners after
rotation about the image centre. Sizes are ceiled on each axis, and the
downsampled canvas is ceiled again after dividing by the oversampling
factor. This can differ by one pixel from other RotSprite
implementations at some fractional angles; callers rely on the exact
sizes, so the formula is kept as is.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Tuple

from .errors import InvalidAngleError
from .rotated_image import validate_dimensions


@dataclass(frozen=True)
class RotatedGeometry:
    """
    Bounding box of a rotated rectangle.

    Attributes:
        width (int): Box width in source pixel units
        height (int): Box height in source pixel units
        center_x (float): Rotation centre inside the box, x
        center_y (float): Rotation centre inside the box, y
    """
    width: int
    height: int
    center_x: float
    center_y: float


def normalize_angle(angle: float) -> float:
    """
    Map any real angle in degrees into [0, 360).

    Raises:
        InvalidAngleError: If angle is NaN or infinite
    """
    angle = float(angle)
    if not math.isfinite(angle):
        raise InvalidAngleError(f"Rotation angle must be finite, got {angle}")
    return ((angle % 360.0) + 360.0) % 360.0


def rotation_center(width: int, height: int) -> Tuple[float, float]:
    """Real-valued centre of a width x height pixel grid."""
    return (width - 1) / 2.0, (height - 1) / 2.0


def angle_terms(angle: float) -> Tuple[float, float]:
    """Return (sin, cos) of an angle given in degrees."""
    radians = angle * math.pi / 180.0
    return math.sin(radians), math.cos(radians)


def calculate_rotated_dimensions(
    width: int,
    height: int,
    center_x: float,
    center_y: float,
    sin: float,
    cos: float,
) -> RotatedGeometry:
    """
    Rotate the four corners of a width x height rectangle and box them.

    Corners are taken relative to (center_x, center_y) and rotated by
    [[cos, -sin], [sin, cos]].

    Returns:
        RotatedGeometry with ceil(max - min + 1) per axis and the centre
        of the resulting box
    """
    corners = (
        (-center_x, -center_y),
        (width - 1 - center_x, -center_y),
        (width - 1 - center_x, height - 1 - center_y),
        (-center_x, height - 1 - center_y),
    )

    rotated_x = [x * cos - y * sin for x, y in corners]
    rotated_y = [x * sin + y * cos for x, y in corners]

    result_width = math.ceil(max(rotated_x) - min(rotated_x) + 1)
    result_height = math.ceil(max(rotated_y) - min(rotated_y) + 1)

    return RotatedGeometry(
        width=result_width,
        height=result_height,
        center_x=(result_width - 1) / 2.0,
        center_y=(result_height - 1) / 2.0,
    )


def downsampled_size(geometry: RotatedGeometry, factor: int) -> Tuple[int, int]:
    """Canvas size after dividing an oversampled box by factor (ceiled)."""
    return (
        math.ceil(geometry.width / factor),
        math.ceil(geometry.height / factor),
    )


def predict_output_size(
    width: int,
    height: int,
    angle: float,
    upscale_factor: int = 8,
) -> Tuple[int, int]:
    """
    Size of the image rotate() would return, without rotating anything.

    Args:
        width: Source width, > 0
        height: Source height, > 0
        angle: Rotation angle in degrees (any real value)
        upscale_factor: Oversampling factor of the general path

    Returns:
        (width, height) of the rotated image

    Raises:
        InvalidDimensionError: If width or height is not positive
        InvalidAngleError: If angle is NaN or infinite
    """
    validate_dimensions(width, height)

    angle = normalize_angle(angle)
    if angle % 180.0 == 0.0:
        return width, height
    if angle % 90.0 == 0.0:
        return height, width

    scaled_width = width * upscale_factor
    scaled_height = height * upscale_factor
    center_x, center_y = rotation_center(scaled_width, scaled_height)
    sin, cos = angle_terms(angle)
    geometry = calculate_rotated_dimensions(
        scaled_width, scaled_height, center_x, center_y, sin, cos
    )
    return downsampled_size(geometry, upscale_factor)
