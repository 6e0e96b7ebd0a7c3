#!/usr/bin/env python3
"""Generate synthetic photos and a logo for the framecompose demo manifest.

Creates a few gradient "photos" plus a small logo in examples/demo-photos/.
Gradients make it easy to see that the photo itself is untouched while the
blurred backdrop shows through the rounded corners.

Usage:
    python examples/generate_demo_photos.py
    # Then frame them:
    framecompose frame --manifest examples/demo-frame.yaml \
        --output-dir examples/demo-framed/ examples/demo-photos/*.png
"""

from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw

OUTPUT_DIR = Path(__file__).resolve().parent / "demo-photos"

# (name, size, top-left color, bottom-right color)
PHOTOS = [
    ("landscape", (640, 427), (30, 80, 160), (240, 190, 90)),
    ("portrait",  (400, 600), (20, 110, 70), (230, 230, 200)),
    ("square",    (500, 500), (150, 40, 60), (250, 170, 120)),
]


def _gradient(size: tuple[int, int], start, end) -> Image.Image:
    """Diagonal two-color gradient."""
    w, h = size
    t = (np.arange(w)[np.newaxis, :] / w + np.arange(h)[:, np.newaxis] / h) / 2
    start = np.array(start, dtype=np.float64)
    end = np.array(end, dtype=np.float64)
    arr = start + (end - start) * t[:, :, np.newaxis]
    return Image.fromarray(arr.astype(np.uint8))


def _make_logo() -> Image.Image:
    """A simple wordmark-style logo on a transparent background."""
    img = Image.new("RGBA", (200, 80), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rounded_rectangle([(0, 0), (199, 79)], radius=16, fill=(20, 20, 20, 255))
    draw.ellipse([(20, 20), (60, 60)], fill=(220, 40, 40, 255))
    draw.rectangle([(80, 30), (180, 50)], fill=(240, 240, 240, 255))
    return img


def main():
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    for name, size, start, end in PHOTOS:
        out = OUTPUT_DIR / f"{name}.png"
        if out.exists():
            print(f"  skip {name} (exists)")
            continue
        _gradient(size, start, end).save(out)
        print(f"  wrote {name} {size[0]}x{size[1]}")

    logo = OUTPUT_DIR / "logo.png"
    if not logo.exists():
        _make_logo().save(logo)
        print("  wrote logo")

    print(f"\nDone. {len(PHOTOS)} photos in {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
