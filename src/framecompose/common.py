"""framecompose.common — shared utilities for photo framing.

Contains: color parsing, path variable resolution, font resolution and
text measurement.
"""

import io
import re
from pathlib import Path

from PIL import ImageFont

from .errors import ConstructionError


# ── Font paths ─────────────────────────────────────────────────────
# Tried in order when the manifest does not name a font. Inter first for
# clean captions, DejaVu Sans as the common Linux fallback.

FONT_PATHS = [
    Path.home() / ".local/share/fonts/Inter.ttc",
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
    Path("/usr/share/fonts/dejavu/DejaVuSans.ttf"),
    Path("/Library/Fonts/Arial.ttf"),
    Path("C:/Windows/Fonts/arial.ttf"),
]

# Size used to check a font resource actually loads.
_PROBE_SIZE = 12


# ── Color utilities ────────────────────────────────────────────────

RGBA = tuple[int, int, int, int]


def parse_hex_color(hex_str: str) -> RGBA:
    """Convert '#RRGGBB' / '#RRGGBBAA' (hash optional) to an (R, G, B, A) tuple.

    Six-digit colors are fully opaque.
    """
    digits = hex_str.lstrip("#")
    if len(digits) not in (6, 8) or not all(
        c in "0123456789abcdefABCDEF" for c in digits
    ):
        raise ValueError(f"Invalid hex color: '{hex_str}'")
    channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    if len(channels) == 3:
        channels.append(255)
    return tuple(channels)


def parse_color(value) -> RGBA:
    """Normalize a color given as a hex string or a 3/4-item sequence."""
    if isinstance(value, str):
        return parse_hex_color(value)
    if isinstance(value, (list, tuple)) and len(value) in (3, 4):
        channels = list(value)
        if not all(isinstance(c, int) and 0 <= c <= 255 for c in channels):
            raise ValueError(f"Color channels must be ints in 0..255, got {value!r}")
        if len(channels) == 3:
            channels.append(255)
        return tuple(channels)
    raise ValueError(f"Unsupported color value: {value!r}")


# ── Path utilities ─────────────────────────────────────────────────

def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ValueError(f"Unknown path variable: ${{{key}}}")
        return str(paths[key])
    return re.sub(r"\$\{(\w+)\}", _replace, text)


# ── Font loading ───────────────────────────────────────────────────

class FontSource:
    """A loaded font resource that hands out sized fonts.

    Holds either raw font bytes, a file path / system font name that
    FreeType can open, or nothing (Pillow's bundled default font). The
    resource is never modified after construction, so one FontSource can
    be shared between threads.
    """

    def __init__(self, resource: bytes | str | None = None, index: int = 0):
        self._resource = resource
        self.index = index

    @property
    def is_default(self) -> bool:
        return self._resource is None

    def at_size(self, size: float) -> ImageFont.FreeTypeFont:
        """Return a FreeType font for this resource at *size* pixels."""
        if self._resource is None:
            return ImageFont.load_default(size=size)
        if isinstance(self._resource, bytes):
            return ImageFont.truetype(
                io.BytesIO(self._resource), size=size, index=self.index,
            )
        return ImageFont.truetype(self._resource, size=size, index=self.index)


def resolve_font(font: bytes | str | Path | None = None) -> FontSource:
    """Resolve a configured font into a FontSource.

    Args:
        font: Raw font bytes, a font file path, a system font name that
            FreeType can find (e.g. "DejaVuSans.ttf"), or None to walk
            FONT_PATHS and fall back to Pillow's bundled font.

    Raises:
        ConstructionError: The configured font cannot be read or parsed.
    """
    if font is None:
        for font_path in FONT_PATHS:
            if font_path.exists():
                source = FontSource(str(font_path))
                try:
                    source.at_size(_PROBE_SIZE)
                except (OSError, IndexError):
                    continue
                return source
        # Last resort: Pillow's bundled font (scalable since Pillow 10.1).
        return FontSource(None)

    if isinstance(font, Path):
        font = str(font)
    source = FontSource(font)
    try:
        source.at_size(_PROBE_SIZE)
    except (OSError, IndexError, ValueError) as e:
        label = "font bytes" if isinstance(font, bytes) else f"font '{font}'"
        raise ConstructionError(f"Cannot load {label}: {e}") from e
    return source


# ── Text measurement ───────────────────────────────────────────────

def measure_advance(font: ImageFont.FreeTypeFont, text: str) -> float:
    """Total horizontal advance of *text* laid out on one line.

    This is the sum of per-glyph advances (kerning included), i.e. where
    the pen ends up after the last glyph, not the ink bounding box.
    """
    return font.getlength(text)
