"""Caption strip composition: left text, right-aligned text, logo, watermark.

All elements are positioned relative to bottom_y, the top edge of the
caption strip (canvas height - bottom_height). Text is anchored at its
left/ascender point, so y is the top of the line box.
"""

from PIL import Image, ImageDraw, ImageFont

from .common import measure_advance
from .config import CaptionSpec, LogoSpec, WatermarkSpec


def strip_top(canvas_h: int, bottom_height: int) -> int:
    """y coordinate of the caption strip's top edge."""
    return canvas_h - bottom_height


# ── Position computation ─────────────────────────────────────────


def left_caption_position(
    caption: CaptionSpec,
    padding: int,
    bottom_y: int,
) -> tuple[int, int]:
    """Left caption anchor: left edge fixed at the frame padding."""
    return padding + caption.x_offset, bottom_y + caption.y_offset


def right_caption_position(
    caption: CaptionSpec,
    text_width: float,
    canvas_w: int,
    padding: int,
    bottom_y: int,
) -> tuple[int, int]:
    """Right caption anchor: left edge placed so the text ends at the padding line.

    text_width is the measured advance of the caption at its own size
    (see common.measure_advance); it is truncated to whole pixels.
    """
    x = canvas_w - int(text_width) - padding + caption.x_offset
    return x, bottom_y + caption.y_offset


def logo_position(
    logo: LogoSpec,
    canvas_w: int,
    bottom_y: int,
) -> tuple[int, int]:
    """Logo top-left: horizontally centered in the strip, then offset."""
    return (canvas_w - logo.width) // 2 + logo.x_offset, bottom_y + logo.y_offset


# ── Drawing ──────────────────────────────────────────────────────


def draw_caption(
    canvas: Image.Image,
    caption: CaptionSpec,
    font: ImageFont.FreeTypeFont,
    position: tuple[int, int],
) -> None:
    """Draw one caption line onto *canvas* at *position*."""
    draw = ImageDraw.Draw(canvas)
    draw.text(position, caption.text, fill=caption.color, font=font, anchor="la")


def place_logo(
    canvas: Image.Image,
    logo_img: Image.Image,
    logo: LogoSpec,
    position: tuple[int, int],
) -> None:
    """Resize the logo (Lanczos) and alpha-composite it at *position*.

    Parts of the logo that fall outside the canvas are cropped.
    """
    resized = logo_img.convert("RGBA").resize((logo.width, logo.height), Image.LANCZOS)
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    layer.paste(resized, position)
    canvas.alpha_composite(layer)


def compose_captions(
    canvas: Image.Image,
    padding: int,
    bottom_height: int,
    left: tuple[CaptionSpec, ImageFont.FreeTypeFont] | None = None,
    right: tuple[CaptionSpec, ImageFont.FreeTypeFont] | None = None,
    logo: tuple[LogoSpec, Image.Image] | None = None,
) -> None:
    """Lay out every configured caption-strip element on *canvas*.

    Each element is a (spec, resource) pair or None; None skips it.

    Args:
        canvas: Framed RGBA canvas, modified in place.
        padding: Frame padding in pixels.
        bottom_height: Height of the caption strip.
        left: Left caption and the font sized for it.
        right: Right caption and the font sized for it.
        logo: Logo placement and the loaded logo image.
    """
    canvas_w, canvas_h = canvas.size
    bottom_y = strip_top(canvas_h, bottom_height)

    if left is not None:
        caption, font = left
        draw_caption(canvas, caption, font, left_caption_position(caption, padding, bottom_y))

    if right is not None:
        caption, font = right
        # Measure with the exact font used to draw, or the right edge drifts.
        width = measure_advance(font, caption.text)
        position = right_caption_position(caption, width, canvas_w, padding, bottom_y)
        draw_caption(canvas, caption, font, position)

    if logo is not None:
        spec, logo_img = logo
        place_logo(canvas, logo_img, spec, logo_position(spec, canvas_w, bottom_y))


def stamp_watermark(
    canvas: Image.Image,
    watermark: WatermarkSpec,
    font: ImageFont.FreeTypeFont,
) -> None:
    """Blend watermark text over the finished canvas.

    The text is drawn on its own transparent layer and alpha-composited,
    so a translucent color lets the photo show through.
    """
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    draw.text(watermark.position, watermark.text, fill=watermark.color, font=font, anchor="la")
    canvas.alpha_composite(layer)
