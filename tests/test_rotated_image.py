import numpy as np
import pytest

from rotsprite.errors import InvalidDimensionError, SizeMismatchError
from rotsprite.rotated_image import RotatedImage, as_pixel_array


def test_valid_image_keeps_dimensions():
    img = RotatedImage(3, 2, [1, 2, 3, 4, 5, 6])
    assert img.width == 3 and img.height == 2
    assert img.to_list() == [1, 2, 3, 4, 5, 6]
    assert img.as_2d().shape == (2, 3)


@pytest.mark.parametrize("width, height", [(0, 2), (2, 0), (-1, 3), (3, -2)])
def test_non_positive_dimensions_rejected(width, height):
    with pytest.raises(InvalidDimensionError):
        RotatedImage(width, height, [1, 2, 3])


def test_pixel_count_must_match():
    with pytest.raises(SizeMismatchError):
        RotatedImage(2, 2, [1, 2, 3])


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        RotatedImage(2, 2, [1, 2, 3])


def test_image_is_read_only():
    img = RotatedImage(2, 1, np.array([1, 2]))
    with pytest.raises(ValueError):
        img.pixels[0] = 9
    with pytest.raises(AttributeError):
        img.width = 5


def test_caller_array_stays_writable():
    source = np.array([1, 2, 3, 4])
    RotatedImage(2, 2, source)
    source[0] = 7
    assert source[0] == 7


def test_later_writes_to_source_do_not_leak_in():
    source = np.array([1, 2, 3, 4])
    img = RotatedImage(2, 2, source)
    source[0] = 99
    assert img.to_list() == [1, 2, 3, 4]
    assert not np.shares_memory(img.pixels, source)


def test_equality_compares_dims_and_pixels():
    assert RotatedImage(2, 1, [1, 2]) == RotatedImage(2, 1, [1, 2])
    assert RotatedImage(2, 1, [1, 2]) != RotatedImage(1, 2, [1, 2])
    assert RotatedImage(2, 1, [1, 2]) != RotatedImage(2, 1, [2, 1])


def test_as_pixel_array_keeps_numeric_dtype():
    arr = as_pixel_array(np.array([1, 2, 3], dtype=np.uint32))
    assert arr.dtype == np.uint32


def test_as_pixel_array_wraps_tuples_in_object_array():
    arr = as_pixel_array([(1, 2, 3, 4), (5, 6, 7, 8)])
    assert arr.dtype == object
    assert arr.shape == (2,)
    assert arr[1] == (5, 6, 7, 8)


def test_as_pixel_array_copies_input():
    source = np.array([1, 2, 3])
    arr = as_pixel_array(source)
    arr[0] = 42
    assert source[0] == 1


def test_as_pixel_array_rejects_2d_arrays():
    with pytest.raises(SizeMismatchError):
        as_pixel_array(np.zeros((2, 2)))
