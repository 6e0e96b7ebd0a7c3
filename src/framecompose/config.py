"""Immutable configuration values for the framing pipeline.

ProcessorConfig is a flat record of optional sections: every stage checks
whether its section is present and skips itself when it is not.

Layout of a framed image:
  ┌─────────────────────────────┐
  │          padding            │
  │   ┌─────────────────────┐   │
  │   │                     │   │
  │   │    source photo     │   │
  │   │                     │   │
  │   └─────────────────────┘   │
  │          padding            │
  ├─────────────────────────────┤  ← bottom_y
  │ left text     logo   right  │  ← caption strip (bottom_height)
  └─────────────────────────────┘
"""

from dataclasses import dataclass, field
from pathlib import Path

from .common import RGBA
from .errors import InvalidConfig


WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)

# Shown in the corner cutouts of formats without alpha.
DEFAULT_MATTE = (0, 0, 0)


def _check_color(name: str, color) -> None:
    if (
        not isinstance(color, tuple)
        or len(color) != 4
        or not all(isinstance(c, int) and 0 <= c <= 255 for c in color)
    ):
        raise InvalidConfig(f"{name} must be an (R, G, B, A) tuple of 0..255 ints, got {color!r}")


def _check_matte(matte) -> None:
    if (
        not isinstance(matte, tuple)
        or len(matte) != 3
        or not all(isinstance(c, int) and 0 <= c <= 255 for c in matte)
    ):
        raise InvalidConfig(f"frame.matte must be an (R, G, B) tuple of 0..255 ints, got {matte!r}")


def _check_non_negative(name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise InvalidConfig(f"{name} must be an int >= 0, got {value!r}")


def _check_positive(name: str, value) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
        raise InvalidConfig(f"{name} must be > 0, got {value!r}")


def _check_offset(name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidConfig(f"{name} must be an int, got {value!r}")


@dataclass(frozen=True)
class FrameConfig:
    """Frame geometry, color and output quality.

    matte is the RGB shown behind transparent pixels (the rounded corner
    cutouts) when the output format has no alpha channel, e.g. JPEG.
    """

    color: RGBA = WHITE
    padding: int = 40
    bottom_height: int = 80
    corner_radius: int = 0
    quality: int = 100
    matte: tuple[int, int, int] = DEFAULT_MATTE

    def __post_init__(self):
        _check_color("frame.color", self.color)
        _check_matte(self.matte)
        _check_non_negative("frame.padding", self.padding)
        _check_non_negative("frame.bottom_height", self.bottom_height)
        _check_non_negative("frame.corner_radius", self.corner_radius)
        if (
            not isinstance(self.quality, int)
            or isinstance(self.quality, bool)
            or not 1 <= self.quality <= 100
        ):
            raise InvalidConfig(f"frame.quality must be an int in 1..100, got {self.quality!r}")


@dataclass(frozen=True)
class CaptionSpec:
    """One caption line; offsets are relative to its anchor point."""

    text: str
    size: float = 20.0
    color: RGBA = BLACK
    x_offset: int = 0
    y_offset: int = 0

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise InvalidConfig(f"caption text must be a string, got {self.text!r}")
        _check_positive("caption size", self.size)
        _check_color("caption color", self.color)
        _check_offset("caption x_offset", self.x_offset)
        _check_offset("caption y_offset", self.y_offset)


@dataclass(frozen=True)
class LogoSpec:
    """Logo placement, centered horizontally in the caption strip by default."""

    width: int
    height: int
    x_offset: int = 0
    y_offset: int = 0
    path: str | None = None

    def __post_init__(self):
        _check_positive("logo width", self.width)
        _check_positive("logo height", self.height)
        if not isinstance(self.width, int) or not isinstance(self.height, int):
            raise InvalidConfig("logo width and height must be ints")
        _check_offset("logo x_offset", self.x_offset)
        _check_offset("logo y_offset", self.y_offset)


@dataclass(frozen=True)
class BlurSpec:
    """Blurred backdrop: Gaussian sigma and how far it extends past the photo."""

    sigma: float = 8.0
    padding: int = 0

    def __post_init__(self):
        _check_positive("blur sigma", self.sigma)
        _check_non_negative("blur padding", self.padding)


@dataclass(frozen=True)
class WatermarkSpec:
    """Free-positioned text stamped over the finished image."""

    text: str
    size: float = 24.0
    color: RGBA = (255, 255, 255, 128)
    position: tuple[int, int] = (0, 0)

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise InvalidConfig(f"watermark text must be a string, got {self.text!r}")
        _check_positive("watermark size", self.size)
        _check_color("watermark color", self.color)
        if (
            not isinstance(self.position, tuple)
            or len(self.position) != 2
            or not all(isinstance(v, int) for v in self.position)
        ):
            raise InvalidConfig(f"watermark position must be an (x, y) int tuple, got {self.position!r}")


@dataclass(frozen=True)
class ProcessorConfig:
    """Everything a Processor needs besides the logo image itself.

    font may be a file path, a system font name, raw font bytes, or None
    for the built-in fallback chain (see common.resolve_font).
    """

    frame: FrameConfig = field(default_factory=FrameConfig)
    left_text: CaptionSpec | None = None
    right_text: CaptionSpec | None = None
    logo: LogoSpec | None = None
    blur: BlurSpec | None = None
    watermark: WatermarkSpec | None = None
    font: str | Path | bytes | None = None
