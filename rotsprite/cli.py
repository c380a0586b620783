# rotsprite/cli.py
"""
rotcon: rotate one image by a list of angles and write one file per angle.

Usage:
    rotcon --input sprite.png --output out/ --angles 0,45,90

Writes <basename>_rot<angle>.png for every valid angle.
Exit code is 0 when every angle was written, 1 otherwise.
"""

from __future__ import annotations
import argparse
import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence

from .adapters import rotate_image
from .errors import RotSpriteError
from .utils import load_image, save_image

logger = logging.getLogger(__name__)

# CONFIGURATION


DEFAULT_INPUT = "threeforms.png"
DEFAULT_ANGLES = "0,45,90,135,180,225,270,315"

# Rotated images always carry alpha, so they are written as PNG
OUTPUT_EXTENSION = ".png"

# Plain decimal integers only; int() alone would also take "1_0"
_ANGLE_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_angles(text: Optional[str]) -> List[int]:
    """
    Parse a comma-separated list of integer angles.

    Items that are not integers are skipped with a warning.
    """
    angles: List[int] = []
    for item in (text or "").split(","):
        item = item.strip()
        if not item:
            continue
        if not _ANGLE_PATTERN.fullmatch(item):
            logger.warning(f"Skipping invalid angle: {item!r}")
            continue
        angles.append(int(item))
    return angles


def output_path_for(input_path: Path, output_dir: Optional[str], angle: int) -> Path:
    """<output_dir>/<basename>_rot<angle>.png, whatever the input format"""
    name = f"{input_path.stem}_rot{angle}{OUTPUT_EXTENSION}"
    if output_dir and output_dir.strip():
        return Path(output_dir) / name
    return Path(name)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rotcon",
        description="Rotate pixel art with the RotSprite algorithm",
    )
    parser.add_argument("--input", default=DEFAULT_INPUT, help="Input image path")
    parser.add_argument("--output", default="", help="Output directory")
    parser.add_argument(
        "--angles",
        default=DEFAULT_ANGLES,
        help="Comma-separated angles in degrees, e.g. 0,45,90",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"File not found: {input_path}")
        return 1

    angles = parse_angles(args.angles)
    if not angles:
        print("No valid angles specified. Example: 0,45,90")
        return 1

    try:
        image = load_image(input_path)
    except (OSError, ValueError) as e:
        print(f"Could not read image {input_path}: {e}")
        return 1

    if args.output and args.output.strip():
        try:
            Path(args.output).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            print(f"Could not create output directory {args.output}: {e}")
            return 1

    failures = 0
    for angle in angles:
        out_file = output_path_for(input_path, args.output, angle)
        try:
            rotated = rotate_image(image, angle)
            save_image(out_file, rotated)
        except (RotSpriteError, ValueError, OSError) as e:
            failures += 1
            logger.debug(f"Rotation by {angle}° failed", exc_info=True)
            print(f"Failed: {out_file} ({type(e).__name__}: {e})")
            continue

        print(f"Saved: {out_file}")

    return 0 if failures == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
