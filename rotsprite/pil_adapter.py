# rotsprite/pil_adapter.py
"""Pillow adapter: rotate PIL images and plain RGBA colour lists."""

from __future__ import annotations
from typing import List, Sequence, Tuple

import numpy as np
from PIL import Image

from .adapters import DEFAULT_EMPTY_COLOR, pack_argb, unpack_argb
from .rotation import rotate

Color = Tuple[int, int, int, int]


def rotate_pil_image(
    image: Image.Image,
    angle: float,
    empty_color: int = DEFAULT_EMPTY_COLOR,
) -> Image.Image:
    """
    Rotate a PIL image clockwise with RotSprite.

    Any mode is accepted; the result is always RGBA.
    """
    rgba = np.asarray(image.convert("RGBA"))
    height, width = rgba.shape[:2]

    rotated = rotate(pack_argb(rgba, "RGBA"), np.uint32(empty_color), width, angle)
    out = unpack_argb(rotated.pixels, rotated.width, rotated.height, "RGBA")
    return Image.fromarray(out)


def rotate_rgba_colors(
    colors: Sequence[Color],
    width: int,
    angle: float,
) -> Tuple[List[Color], int, int]:
    """
    Rotate a flat list of (r, g, b, a) colours.

    Returns:
        (colors, width, height) of the rotated image
    """
    rgba = np.asarray(colors, dtype=np.uint8).reshape(1, -1, 4)
    rotated = rotate(pack_argb(rgba, "RGBA"), np.uint32(DEFAULT_EMPTY_COLOR), width, angle)

    out = unpack_argb(rotated.pixels, rotated.width, rotated.height, "RGBA")
    return [tuple(c) for c in out.reshape(-1, 4).tolist()], rotated.width, rotated.height
