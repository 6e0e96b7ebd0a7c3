"""Serialize a framed canvas: JPEG below quality 100, PNG at 100.

JPEG has no alpha channel, so RGBA canvases are flattened onto an opaque
matte before encoding. Output is always produced fully in memory before
anything touches the filesystem.
"""

import io
import logging
from pathlib import Path

from PIL import Image

from .errors import EncodeError, FrameIOError


logger = logging.getLogger(__name__)

LOSSLESS_QUALITY = 100

JPEG_EXTENSIONS = {".jpg", ".jpeg"}

# Formats that cannot store alpha and need a matte.
_OPAQUE_FORMATS = {"JPEG", "BMP", "PPM"}


def choose_format(quality: int) -> str:
    """Lossy JPEG below LOSSLESS_QUALITY, lossless PNG at it."""
    return "JPEG" if quality < LOSSLESS_QUALITY else "PNG"


def format_for_path(path: str | Path, quality: int) -> str:
    """Pick the output format for a destination path.

    .jpg/.jpeg always mean JPEG. Other extensions Pillow recognizes select
    their own format; anything else falls back to choose_format(quality).
    """
    ext = Path(path).suffix.lower()
    if ext in JPEG_EXTENSIONS:
        return "JPEG"
    registered = Image.registered_extensions()
    if ext in registered and registered[ext] in Image.SAVE:
        return registered[ext]
    return choose_format(quality)


def flatten(image: Image.Image, matte: tuple[int, ...] = (255, 255, 255)) -> Image.Image:
    """Composite an RGBA image onto an opaque RGB matte."""
    background = Image.new("RGBA", image.size, (*matte[:3], 255))
    background.alpha_composite(image.convert("RGBA"))
    return background.convert("RGB")


def encode(
    image: Image.Image,
    quality: int,
    fmt: str | None = None,
    matte: tuple[int, ...] = (255, 255, 255),
) -> bytes:
    """Encode *image* to bytes.

    Args:
        image: Final RGBA canvas.
        quality: 1..100. JPEG and WebP take it as their quality setting;
            WebP switches to lossless mode at LOSSLESS_QUALITY.
        fmt: Pillow format name; None applies choose_format(quality).
        matte: RGB color behind transparent pixels for alpha-less formats.

    Raises:
        EncodeError: Pillow could not serialize the image.
    """
    fmt = (fmt or choose_format(quality)).upper()
    params = {}
    if fmt in _OPAQUE_FORMATS:
        image = flatten(image, matte)
    if fmt == "JPEG":
        params["quality"] = quality
    elif fmt == "WEBP":
        if quality >= LOSSLESS_QUALITY:
            params["lossless"] = True
        else:
            params["quality"] = quality

    buf = io.BytesIO()
    try:
        image.save(buf, format=fmt, **params)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode {image.size[0]}x{image.size[1]} image as {fmt}: {e}") from e
    return buf.getvalue()


def write_image(
    image: Image.Image,
    path: str | Path,
    quality: int,
    matte: tuple[int, ...] = (255, 255, 255),
) -> Path:
    """Encode *image* for *path* and write it, creating parent directories.

    Raises:
        EncodeError: Serialization failed (nothing is written).
        FrameIOError: The file could not be written.
    """
    path = Path(path)
    fmt = format_for_path(path, quality)
    data = encode(image, quality, fmt=fmt, matte=matte)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise FrameIOError(f"Cannot write {path}: {e}") from e
    logger.info("wrote %s (%s, %d bytes)", path, fmt, len(data))
    return path
