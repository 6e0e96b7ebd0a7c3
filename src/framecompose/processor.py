"""Processor — runs the framing pipeline for one configuration.

Pipeline order (each stage mutates the same per-call RGBA canvas):
  1. allocate canvas        (canvas.allocate_canvas)
  2. blurred backdrop       (backdrop.apply_backdrop, only with blur)
  3. frame fill + corners   (frame.draw_frame)
     photo placement        (frame.place_source)
  4. caption strip          (captions.compose_captions)
     watermark              (captions.stamp_watermark, only with watermark)
  5. encode                 (encoder.encode / encoder.write_image)

The font and the optional logo are loaded once in __init__ and only read
afterwards, so one Processor can serve concurrent calls from several
threads. Each call owns its canvas and drops it on return.
"""

import io
import logging
import time
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .backdrop import apply_backdrop
from .canvas import allocate_canvas
from .captions import compose_captions, stamp_watermark
from .common import resolve_font
from .config import ProcessorConfig
from .encoder import encode, write_image
from .errors import ConstructionError, DecodeError, FrameIOError
from .frame import draw_frame, place_source
from .manifest import load_manifest


logger = logging.getLogger(__name__)

ImageSource = str | Path | bytes | bytearray


# ── Image loading ─────────────────────────────────────────────────


def _open_image(source: ImageSource) -> Image.Image:
    """Open and fully decode an image from a path or raw bytes.

    Raises:
        FrameIOError: The path cannot be read.
        DecodeError: The data is not a recognized raster image.
    """
    if isinstance(source, (bytes, bytearray)):
        label = f"<{len(source)} bytes>"
        fp = io.BytesIO(bytes(source))
    else:
        label = str(source)
        try:
            fp = io.BytesIO(Path(source).read_bytes())
        except OSError as e:
            raise FrameIOError(f"Cannot read {label}: {e}") from e

    try:
        img = Image.open(fp)
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Not a decodable image: {label}") from e
    except (OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Corrupt image {label}: {e}") from e
    return img


def load_source(source: ImageSource | Image.Image) -> Image.Image:
    """Decode a source photo into RGBA. PIL images are converted as-is."""
    if isinstance(source, Image.Image):
        return source.convert("RGBA")
    return _open_image(source).convert("RGBA")


def _load_logo(logo: ImageSource | Image.Image) -> Image.Image:
    if isinstance(logo, Image.Image):
        return logo.convert("RGBA")
    try:
        return _open_image(logo).convert("RGBA")
    except (FrameIOError, DecodeError) as e:
        raise ConstructionError(f"Cannot load logo: {e}") from e


# ── Processor ─────────────────────────────────────────────────────


class Processor:
    """Frames source photos according to one ProcessorConfig.

    Args:
        config: Frame geometry plus optional caption/logo/blur/watermark
            sections.
        logo: Logo image as a path, raw bytes or PIL image. When omitted,
            config.logo.path (if set) is loaded instead.

    Raises:
        ConstructionError: The font cannot be loaded, or a logo was given
            but is unreadable or undecodable.
    """

    def __init__(
        self,
        config: ProcessorConfig,
        logo: ImageSource | Image.Image | None = None,
    ):
        self.config = config
        self.font_source = resolve_font(config.font)

        # Sized fonts are built here so render() never touches the font
        # resource itself.
        self._left = self._caption_pair(config.left_text)
        self._right = self._caption_pair(config.right_text)
        self._watermark_font = (
            self._sized_font(config.watermark.size) if config.watermark else None
        )

        if logo is None and config.logo is not None and config.logo.path:
            logo = config.logo.path
        self.logo = _load_logo(logo) if logo is not None else None

        logger.debug(
            "processor ready: font=%s logo=%s blur=%s",
            "default" if self.font_source.is_default else "custom",
            "yes" if self.logo is not None else "no",
            "yes" if config.blur else "no",
        )

    @classmethod
    def from_manifest(cls, manifest_path: str | Path, logo=None) -> "Processor":
        """Build a Processor from a YAML frame manifest."""
        return cls(load_manifest(manifest_path), logo=logo)

    def _sized_font(self, size: float):
        try:
            return self.font_source.at_size(size)
        except (OSError, ValueError) as e:
            raise ConstructionError(f"Cannot size font to {size}px: {e}") from e

    def _caption_pair(self, caption):
        if caption is None:
            return None
        return caption, self._sized_font(caption.size)

    # ── Pipeline ──────────────────────────────────────────────────

    def render(self, source: ImageSource | Image.Image) -> Image.Image:
        """Run stages 1-4 and return the framed RGBA canvas."""
        t0 = time.perf_counter()
        img = load_source(source)
        frame = self.config.frame

        canvas = allocate_canvas(img.width, img.height, frame)

        if self.config.blur is not None:
            apply_backdrop(canvas, img, self.config.blur, frame.padding)

        draw_frame(canvas, frame.color, frame.corner_radius)
        place_source(canvas, img, frame.padding)

        logo = None
        if self.config.logo is not None and self.logo is not None:
            logo = (self.config.logo, self.logo)
        compose_captions(
            canvas, frame.padding, frame.bottom_height,
            left=self._left, right=self._right, logo=logo,
        )

        if self.config.watermark is not None:
            stamp_watermark(canvas, self.config.watermark, self._watermark_font)

        logger.debug(
            "framed %dx%d -> %dx%d in %.3fs",
            img.width, img.height, canvas.width, canvas.height,
            time.perf_counter() - t0,
        )
        return canvas

    def process(self, source: ImageSource) -> bytes:
        """Frame *source* (path or bytes) and return the encoded output.

        Format follows the quality rule: JPEG below 100, PNG at 100.
        """
        canvas = self.render(source)
        return encode(canvas, self.config.frame.quality, matte=self._matte())

    def process_to_file(self, source: ImageSource, dest: str | Path) -> Path:
        """Frame *source* and write it to *dest*.

        A .jpg/.jpeg destination forces JPEG; other known extensions pick
        their own format. The file is written only after encoding succeeds.
        """
        canvas = self.render(source)
        return write_image(canvas, dest, self.config.frame.quality, matte=self._matte())

    def _matte(self) -> tuple[int, int, int]:
        return self.config.frame.matte
