import numpy as np
import pytest

from rotsprite.errors import InvalidDimensionError, SizeMismatchError
from rotsprite.scale2x import scale2x


@pytest.mark.parametrize("width, height", [(1, 1), (1, 4), (4, 1), (2, 2), (3, 5), (7, 3)])
def test_output_is_twice_the_size(width, height):
    buf = list(range(width * height))
    res = scale2x(buf, width, height)
    assert res.width == 2 * width
    assert res.height == 2 * height
    assert res.pixels.size == res.width * res.height


def test_single_pixel_becomes_block():
    res = scale2x([7], 1, 1)
    assert res.to_list() == [7, 7, 7, 7]


def test_uniform_buffer_stays_uniform():
    res = scale2x([5] * 12, 4, 3)
    assert set(res.to_list()) == {5}


def test_distinct_pixels_scale_like_nearest_neighbour():
    res = scale2x([1, 2, 3, 4], 2, 2)
    assert res.to_list() == [
        1, 1, 2, 2,
        1, 1, 2, 2,
        3, 3, 4, 4,
        3, 3, 4, 4,
    ]


def test_checkerboard_diagonals_are_filled():
    res = scale2x([0, 1, 1, 0], 2, 2)
    assert res.to_list() == [
        0, 0, 1, 1,
        0, 1, 0, 1,
        1, 0, 1, 0,
        1, 1, 0, 0,
    ]


def test_interior_diagonal_edge():
    # 0 0 0
    # 0 1 1
    # 0 1 1
    buf = [0, 0, 0,
           0, 1, 1,
           0, 1, 1]
    res = scale2x(buf, 3, 3).as_2d()
    # centre pixel: up=0, left=0, down=1, right=1 -> top-left corner cut
    assert res[2:4, 2:4].tolist() == [[0, 1], [1, 1]]


def test_works_on_generic_values():
    res = scale2x(["a", "b", "b", "a"], 2, 2)
    assert res.pixels.dtype == object
    assert res.as_2d()[1, 1] == "b"
    assert res.as_2d()[0, 0] == "a"


def test_input_is_not_modified():
    buf = np.array([0, 1, 1, 0])
    scale2x(buf, 2, 2)
    assert buf.tolist() == [0, 1, 1, 0]


def test_size_mismatch():
    with pytest.raises(SizeMismatchError):
        scale2x([1, 2, 3], 2, 2)


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-2, 2)])
def test_invalid_dimensions(width, height):
    with pytest.raises(InvalidDimensionError):
        scale2x([1, 2], width, height)


def test_edge_pixels_clamp_to_their_own_value():
    # 1 0 2
    # 3 1 4
    # 5 6 7
    buf = [1, 0, 2,
           3, 1, 4,
           5, 6, 7]
    res = scale2x(buf, 3, 3).as_2d()
    # top edge (0, 1): up = 0 (itself), left = down = 1 -> bottom-left copies left
    assert res[0:2, 2:4].tolist() == [[0, 0], [1, 0]]
    # left edge (1, 0): left = 3 (itself), up = right = 1 -> top-right copies right
    assert res[2:4, 0:2].tolist() == [[3, 1], [3, 3]]
