# rotsprite/utils.py
"""
Image file helpers around OpenCV.
Provides loading, encoding, saving and simple statistics for the images
fed to and produced by the rotation adapters.
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional, Union
import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)

# Formats that cannot store an alpha channel
_NO_ALPHA_EXTENSIONS = {".jpg", ".jpeg", ".bmp"}


# IMAGE LOADING


def load_image(path: Union[str, Path]) -> np.ndarray:
    """
    Load an image from disk, keeping alpha and bit depth.

    Args:
        path: Image file path

    Returns:
        Image array as read by cv2.IMREAD_UNCHANGED

    Raises:
        FileNotFoundError: If the path is not a file
        ValueError: If OpenCV cannot decode the file
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    # imdecode instead of imread so non-ASCII paths work on every platform
    return load_image_from_bytes(path.read_bytes())


def load_image_from_bytes(image_bytes: bytes) -> np.ndarray:
    """
    Decode an image from raw bytes (PNG, JPEG, ...).

    Args:
        image_bytes: Encoded image bytes

    Returns:
        Image array as decoded by cv2.IMREAD_UNCHANGED

    Raises:
        ValueError: If input is empty or cannot be decoded
    """
    if image_bytes is None:
        raise ValueError("No image bytes provided")

    if not isinstance(image_bytes, bytes):
        raise ValueError(f"Expected bytes, got {type(image_bytes)}")

    try:
        arr = np.frombuffer(image_bytes, np.uint8)

        if arr.size == 0:
            raise ValueError("Empty image buffer")

        img = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED)

        if img is None or img.size == 0:
            raise ValueError("Invalid image data: could not be decoded by OpenCV")

        logger.debug(f"Loaded image: shape={img.shape}, dtype={img.dtype}")
        return img

    except ValueError:
        raise
    except Exception as e:
        logger.error(f"Error loading image from bytes: {e}", exc_info=True)
        raise ValueError(f"Failed to load image: {str(e)}")


# IMAGE SAVING


def encode_image(img: np.ndarray, ext: str = ".png") -> bytes:
    """
    Encode an image into file bytes.

    Alpha is dropped for formats that cannot hold it.

    Args:
        img: Image array (gray, BGR or BGRA)
        ext: Target extension including the dot

    Returns:
        Encoded bytes

    Raises:
        ValueError: If image is empty or OpenCV refuses to encode it
    """
    if img is None or img.size == 0:
        raise ValueError("encode_image: input image is None or empty")

    ext = ext.lower()
    if ext in _NO_ALPHA_EXTENSIONS and img.ndim == 3 and img.shape[2] == 4:
        logger.debug(f"Dropping alpha channel for {ext} output")
        img = cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)

    ok, buf = cv2.imencode(ext, img)
    if not ok:
        raise ValueError(f"Failed to encode image as {ext}")

    return buf.tobytes()


def save_image(path: Union[str, Path], img: np.ndarray) -> Path:
    """
    Encode an image by its file extension and write it.

    Returns:
        Path that was written
    """
    path = Path(path)
    data = encode_image(img, path.suffix or ".png")
    path.write_bytes(data)
    logger.debug(f"Wrote {len(data)} bytes to {path}")
    return path


# IMAGE STATS & COMPARISON


def get_image_stats(img: np.ndarray) -> dict:
    """
    Get shape and value statistics of an image.

    Args:
        img: Image to analyze

    Returns:
        Dictionary with image statistics
    """
    if img is None or img.size == 0:
        return {
            "width": None,
            "height": None,
            "channels": None,
            "dtype": None,
            "opaque_ratio": None,
        }

    channels = img.shape[2] if img.ndim == 3 else 1
    if channels == 4:
        opaque_ratio = float(np.count_nonzero(img[:, :, 3])) / (img.shape[0] * img.shape[1])
    else:
        opaque_ratio = 1.0

    return {
        "width": int(img.shape[1]),
        "height": int(img.shape[0]),
        "channels": channels,
        "dtype": str(img.dtype),
        "opaque_ratio": opaque_ratio,
    }


def images_are_equal(img1: Optional[np.ndarray], img2: Optional[np.ndarray]) -> bool:
    """
    Check if two images are pixel-identical.

    Args:
        img1, img2: Images to compare

    Returns:
        True if images are identical, False otherwise
    """
    if img1 is None or img2 is None:
        return img1 is img2

    if img1.shape != img2.shape or img1.dtype != img2.dtype:
        return False

    return bool(np.array_equal(img1, img2))
