"""Blurred backdrop — an enlarged, softened copy of the photo behind the frame.

The backdrop is larger than the photo by blur.padding on every side and is
positioned so that it is centered on the photo. When blur.padding is larger
than the frame padding the offset goes negative and the canvas simply crops
the overhang.
"""

from PIL import Image, ImageFilter

from .config import BlurSpec


def render_backdrop(source: Image.Image, blur: BlurSpec) -> Image.Image:
    """Enlarge *source* by blur.padding per side (Lanczos) and Gaussian-blur it.

    Pillow's GaussianBlur radius is the standard deviation, so sigma maps
    onto it directly.

    Returns:
        RGBA image of size (w + 2*blur.padding, h + 2*blur.padding).
    """
    w, h = source.size
    enlarged = source.convert("RGBA").resize(
        (w + 2 * blur.padding, h + 2 * blur.padding), Image.LANCZOS,
    )
    return enlarged.filter(ImageFilter.GaussianBlur(radius=blur.sigma))


def backdrop_offset(padding: int, blur: BlurSpec) -> tuple[int, int]:
    """Top-left canvas position of the backdrop (may be negative)."""
    offset = padding - blur.padding
    return offset, offset


def apply_backdrop(
    canvas: Image.Image,
    source: Image.Image,
    blur: BlurSpec,
    padding: int,
) -> None:
    """Alpha-composite the blurred backdrop onto *canvas* in place."""
    backdrop = render_backdrop(source, blur)

    # paste() clips negative offsets, alpha_composite() does not, so stage
    # the backdrop on a canvas-sized layer first.
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    layer.paste(backdrop, backdrop_offset(padding, blur))
    canvas.alpha_composite(layer)
