"""Canvas allocation — the blank RGBA buffer every later stage draws on."""

from PIL import Image

from .config import FrameConfig
from .errors import InvalidDimensions


# Largest side JPEG can store; PNG and WebP outputs stay within it too.
MAX_CANVAS_SIDE = 65535


def canvas_size(width: int, height: int, frame: FrameConfig) -> tuple[int, int]:
    """Compute the framed canvas size for a width x height source.

    Returns:
        (width + 2*padding, height + 2*padding + bottom_height)

    Raises:
        InvalidDimensions: The source has a zero side, or the canvas would
            exceed MAX_CANVAS_SIDE.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensions(width, height, f"Source image has zero size: {width}x{height}")

    new_w = width + 2 * frame.padding
    new_h = height + 2 * frame.padding + frame.bottom_height
    if new_w > MAX_CANVAS_SIDE or new_h > MAX_CANVAS_SIDE:
        raise InvalidDimensions(
            new_w, new_h,
            f"Canvas {new_w}x{new_h} exceeds the {MAX_CANVAS_SIDE}px limit",
        )
    return new_w, new_h


def allocate_canvas(width: int, height: int, frame: FrameConfig) -> Image.Image:
    """Allocate a fully transparent RGBA canvas for a width x height source."""
    return Image.new("RGBA", canvas_size(width, height, frame), (0, 0, 0, 0))
