#!/usr/bin/env python3
"""Generate a synthetic character folder for trying out modelsheet.

Creates examples/demo-renders/robo/ with five views. Each view is a
flat-colored figure on a transparent background with its view name
written across it, so misplaced slots are obvious in the output.

Usage:
    python examples/generate_demo_renders.py
    # Then build:
    modelsheet build examples/demo-renders/robo \
        --config examples/demo-settings.yaml
"""

from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

OUTPUT_DIR = Path(__file__).resolve().parent / "demo-renders" / "robo"
SIZE = (600, 1200)

# View name, body color. The hero is wider to exercise fit-by-width.
VIEWS = [
    ("robo_front", (180, 60, 60), SIZE),
    ("robo_back", (60, 60, 180), SIZE),
    ("robo_left", (60, 160, 60), SIZE),
    ("robo_right", (200, 130, 40), SIZE),
    ("robo_hero", (130, 60, 180), (1400, 1600)),
]


def _make_view(label: str, color: tuple[int, int, int], size) -> Image.Image:
    """A rounded 'figure' silhouette with the label drawn on it."""
    w, h = size
    rgba = np.zeros((h, w, 4), dtype=np.uint8)
    # Body: central column with a 10% transparent margin all round.
    mx, my = w // 10, h // 10
    rgba[my:h - my, mx:w - mx] = (*color, 255)
    img = Image.fromarray(rgba)

    draw = ImageDraw.Draw(img)
    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", w // 8
        )
    except OSError:
        font = ImageFont.load_default()
    text = label.split("_")[-1].upper()
    bbox = draw.textbbox((0, 0), text, font=font)
    tw, th = bbox[2] - bbox[0], bbox[3] - bbox[1]
    draw.text(((w - tw) / 2, (h - th) / 2), text, fill=(255, 255, 255, 255), font=font)
    return img


def main():
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    for name, color, size in VIEWS:
        out = OUTPUT_DIR / f"{name}.png"
        if out.exists():
            print(f"  skip {name} (exists)")
            continue
        _make_view(name, color, size).save(out)
        print(f"  wrote {name} {size[0]}x{size[1]}")

    print(f"\nDone. {len(VIEWS)} views in {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
