"""Exception types raised by the framing pipeline.

Construction problems (font, logo) are reported once when a Processor is
built. Everything that can go wrong while framing a single image derives
from ProcessingError so callers can catch one type per call.
"""


class FrameComposeError(Exception):
    """Base class for all framecompose errors."""


class InvalidConfig(FrameComposeError, ValueError):
    """A configuration value is missing, malformed, or out of range."""


class ConstructionError(FrameComposeError):
    """The font or logo resource could not be loaded."""


class ProcessingError(FrameComposeError):
    """Framing a single source image failed."""


class DecodeError(ProcessingError):
    """Source bytes are not a recognized or valid raster image."""


class InvalidDimensions(ProcessingError, ValueError):
    """Computed canvas size is zero or larger than any output format allows."""

    def __init__(self, width: int, height: int, message: str | None = None):
        self.width = width
        self.height = height
        self.message = message or f"Invalid canvas size {width}x{height}"
        super().__init__(self.message)


class EncodeError(ProcessingError):
    """The final image could not be serialized."""


class FrameIOError(ProcessingError, OSError):
    """Reading a source or writing an output file failed."""
