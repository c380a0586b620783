import numpy as np
import pytest

from rotsprite.utils import (
    encode_image,
    get_image_stats,
    images_are_equal,
    load_image,
    load_image_from_bytes,
    save_image,
)


def _bgra():
    img = np.zeros((3, 4, 4), dtype=np.uint8)
    img[1, 2] = (10, 20, 30, 255)
    return img


def test_png_round_trip_keeps_alpha(tmp_path):
    img = _bgra()
    path = save_image(tmp_path / "sprite.png", img)
    assert images_are_equal(load_image(path), img)


def test_jpeg_drops_alpha():
    data = encode_image(_bgra(), ".jpg")
    assert load_image_from_bytes(data).shape == (3, 4, 3)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "nope.png")


@pytest.mark.parametrize("data", [None, b"", b"not an image", "text"])
def test_load_bad_bytes(data):
    with pytest.raises(ValueError):
        load_image_from_bytes(data)


def test_image_stats():
    stats = get_image_stats(_bgra())
    assert stats["width"] == 4 and stats["height"] == 3
    assert stats["channels"] == 4
    assert stats["opaque_ratio"] == pytest.approx(1 / 12)


def test_images_are_equal():
    assert images_are_equal(None, None)
    assert not images_are_equal(_bgra(), None)
    assert not images_are_equal(_bgra(), _bgra()[:, :, :3])
