from pathlib import Path

import numpy as np
import pytest

from rotsprite.cli import main, output_path_for, parse_angles
from rotsprite.utils import load_image, save_image


@pytest.fixture
def sprite_path(tmp_path):
    img = np.zeros((4, 4, 4), dtype=np.uint8)
    img[1:3, 1:3] = (0, 0, 255, 255)
    return save_image(tmp_path / "sprite.png", img)


def test_parse_angles_skips_invalid():
    assert parse_angles("0, 45,abc,,-90") == [0, 45, -90]
    assert parse_angles("") == []
    assert parse_angles(None) == []


@pytest.mark.parametrize("text", ["1_0", "4.5", "0x10", " 1e2"])
def test_parse_angles_accepts_plain_integers_only(text):
    assert parse_angles(text) == []


def test_parse_angles_keeps_signs():
    assert parse_angles("+45,-0,007") == [45, 0, 7]


def test_output_path_is_always_png(tmp_path):
    path = output_path_for(tmp_path / "hero.bmp", str(tmp_path / "out"), 45)
    assert path == tmp_path / "out" / "hero_rot45.png"
    assert output_path_for(Path("hero"), "", -90) == Path("hero_rot-90.png")


def test_writes_one_file_per_angle(sprite_path, tmp_path, capsys):
    out_dir = tmp_path / "out"
    code = main(["--input", str(sprite_path), "--output", str(out_dir), "--angles", "0,45,x,90"])

    assert code == 0
    for angle in (0, 45, 90):
        assert (out_dir / f"sprite_rot{angle}.png").is_file()
    assert load_image(out_dir / "sprite_rot45.png").shape == (6, 6, 4)
    assert capsys.readouterr().out.count("Saved:") == 3


def test_missing_input(tmp_path, capsys):
    code = main(["--input", str(tmp_path / "missing.png"), "--angles", "45"])
    assert code == 1
    assert "File not found" in capsys.readouterr().out


def test_no_valid_angles(sprite_path, capsys):
    code = main(["--input", str(sprite_path), "--angles", "a,b"])
    assert code == 1
    assert "No valid angles" in capsys.readouterr().out


def test_undecodable_input(tmp_path, capsys):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"garbage")
    code = main(["--input", str(bad), "--angles", "45"])
    assert code == 1
    assert "Could not read image" in capsys.readouterr().out


def test_jpeg_input_is_written_as_png(tmp_path, capsys):
    img = np.full((4, 4, 3), 200, dtype=np.uint8)
    jpg = save_image(tmp_path / "sprite.jpg", img)
    out_dir = tmp_path / "out"

    code = main(["--input", str(jpg), "--output", str(out_dir), "--angles", "45"])

    assert code == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["sprite_rot45.png"]
    assert load_image(out_dir / "sprite_rot45.png").shape[2] == 4
