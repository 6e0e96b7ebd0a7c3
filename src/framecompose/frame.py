"""Frame fill, rounded-corner mask, and photo placement.

Corner rounding is a binary inside/outside test, no anti-aliasing. For
the radius x radius box at each corner, every pixel is measured against
the center of the rounding circle (radius pixels in from both edges);
pixels farther than radius from that center fall in the cutout.

  corner box (radius = 4), x = cutout:
    x x x x
    x x . .
    x . . .
    x . . .
"""

import numpy as np
from PIL import Image


def clamp_radius(radius: int, size: tuple[int, int]) -> int:
    """Clamp a corner radius to half the smaller canvas side."""
    w, h = size
    return max(0, min(radius, min(w, h) // 2))


def corner_cutout(radius: int) -> np.ndarray:
    """Boolean cutout for the top-left corner box, shape (radius, radius).

    True marks a pixel outside the rounding circle.
    """
    offsets = radius - np.arange(radius, dtype=np.float64)
    dx = offsets[np.newaxis, :]
    dy = offsets[:, np.newaxis]
    return np.sqrt(dx * dx + dy * dy) > radius


def corner_mask(size: tuple[int, int], radius: int) -> Image.Image:
    """Build an "L" mask for a canvas: 255 inside the frame, 0 in the cutouts.

    The cutout is computed once for the top-left corner and mirrored to
    the other three. Radius is clamped with clamp_radius; zero yields a
    mask with no cutouts.
    """
    w, h = size
    mask = np.full((h, w), 255, dtype=np.uint8)
    r = clamp_radius(radius, size)
    if r == 0:
        return Image.fromarray(mask)

    cut = corner_cutout(r)
    mask[:r, :r][cut] = 0                      # top-left
    mask[:r, w - r:][cut[:, ::-1]] = 0         # top-right
    mask[h - r:, :r][cut[::-1, :]] = 0         # bottom-left
    mask[h - r:, w - r:][cut[::-1, ::-1]] = 0  # bottom-right
    return Image.fromarray(mask)


def draw_frame(
    canvas: Image.Image,
    color: tuple[int, int, int, int],
    radius: int,
) -> None:
    """Fill *canvas* with the frame color, leaving the corner cutouts alone.

    Inside the mask the frame color replaces whatever is below it (the
    backdrop included), no blending. Cutout pixels keep their current
    value: backdrop where one was composited, transparent otherwise.
    """
    fill = Image.new("RGBA", canvas.size, color)
    canvas.paste(fill, (0, 0), corner_mask(canvas.size, radius))


def place_source(canvas: Image.Image, source: Image.Image, padding: int) -> None:
    """Paste the unblurred photo at (padding, padding), replacing all pixels below."""
    canvas.paste(source.convert("RGBA"), (padding, padding))
