"""Frame manifest loader.

Parses a YAML manifest, resolves ${path} variables, converts colors to
RGBA tuples, validates every section, and returns a ProcessorConfig.

Manifest schema:
  paths:
    assets: "/path/to/assets"
  font: "${assets}/Inter.ttc"        # optional, path or system font name
  frame:                               # required
    color: "#FFFFFF"                   # "#RRGGBB", "#RRGGBBAA" or [r, g, b(, a)]
    padding: 40
    bottom_height: 80
    corner_radius: 20
    quality: 95
  left_text:  {text: "AF 56/1.7 XF", size: 20, color: "#000000", y_offset: 20}
  right_text: {text: "56mm f/2.8 1/50s ISO4000", size: 16, y_offset: 20}
  logo:       {path: "${assets}/logo.png", width: 100, height: 40, y_offset: 20}
  blur:       {sigma: 8.0, padding: 200}
  watermark:  {text: "(c) me", size: 24, color: "#FFFFFF80", position: [50, 50]}
"""

from pathlib import Path

import yaml

from .common import parse_color, resolve_path_vars
from .config import (
    BlurSpec,
    CaptionSpec,
    FrameConfig,
    LogoSpec,
    ProcessorConfig,
    WatermarkSpec,
)
from .errors import InvalidConfig


VALID_SECTIONS = {
    "paths", "font", "frame", "left_text", "right_text", "logo", "blur", "watermark",
}

FRAME_FIELDS = {"color", "padding", "bottom_height", "corner_radius", "quality", "matte"}
TEXT_FIELDS = {"text", "size", "color", "x_offset", "y_offset"}
LOGO_FIELDS = {"path", "width", "height", "x_offset", "y_offset"}
BLUR_FIELDS = {"sigma", "padding"}
WATERMARK_FIELDS = {"text", "size", "color", "position"}


# ── Manifest loading ──────────────────────────────────────────────


def load_manifest(manifest_path: str | Path) -> ProcessorConfig:
    """Load, validate, and normalize a frame manifest.

    Processing pipeline:
      1. Parse YAML.
      2. Resolve ${path} variables in every string value.
      3. Parse colors to RGBA tuples.
      4. Build and validate each section's config object.

    Args:
        manifest_path: Path to the YAML manifest file.

    Returns:
        ProcessorConfig ready to hand to Processor.

    Raises:
        ValueError: Unknown section, missing field, bad color or value.
        FileNotFoundError: Missing manifest file.
    """
    with open(manifest_path) as f:
        raw = yaml.safe_load(f)
    return parse_manifest(raw)


def parse_manifest(raw: dict) -> ProcessorConfig:
    """Validate an already-parsed manifest dict. See load_manifest."""
    if not isinstance(raw, dict):
        raise InvalidConfig("Manifest: top level must be a mapping")

    unknown = set(raw) - VALID_SECTIONS
    if unknown:
        raise InvalidConfig(
            f"Manifest: unknown section(s) {sorted(unknown)}. "
            f"Valid: {sorted(VALID_SECTIONS)}"
        )
    if "frame" not in raw:
        raise InvalidConfig("Manifest: missing required 'frame' section")

    # Path variables for ${name} substitution.
    paths = raw.get("paths") or {}
    resolved = _resolve_paths({k: v for k, v in raw.items() if k != "paths"}, paths)

    font = resolved.get("font")
    if font is not None and not isinstance(font, str):
        raise InvalidConfig(f"Manifest: 'font' must be a path or font name, got {font!r}")

    return ProcessorConfig(
        frame=_parse_frame(resolved["frame"]),
        left_text=_parse_text(resolved.get("left_text"), "left_text"),
        right_text=_parse_text(resolved.get("right_text"), "right_text"),
        logo=_parse_logo(resolved.get("logo")),
        blur=_parse_blur(resolved.get("blur")),
        watermark=_parse_watermark(resolved.get("watermark")),
        font=font,
    )


def _resolve_paths(obj, paths: dict):
    """Recursively resolve ${var} in all string values."""
    if isinstance(obj, str):
        return resolve_path_vars(obj, paths)
    elif isinstance(obj, dict):
        return {k: _resolve_paths(v, paths) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_resolve_paths(item, paths) for item in obj]
    return obj


def _check_section(section, name: str, allowed: set, required: set = frozenset()) -> None:
    """Validate that a section is a mapping with known keys and its required keys."""
    if not isinstance(section, dict):
        raise InvalidConfig(f"Manifest: '{name}' must be a mapping, got {section!r}")
    unknown = set(section) - allowed
    if unknown:
        raise InvalidConfig(
            f"Manifest: '{name}' has unknown field(s) {sorted(unknown)}. "
            f"Valid: {sorted(allowed)}"
        )
    for field in sorted(required):
        if field not in section:
            raise InvalidConfig(f"Manifest: '{name}' missing required field '{field}'")


def _color(section: dict, name: str, default, key: str = "color"):
    if key not in section:
        return default
    try:
        return parse_color(section[key])
    except ValueError as e:
        raise InvalidConfig(f"Manifest: {name}.{key}: {e}") from e


def _parse_frame(section) -> FrameConfig:
    _check_section(section, "frame", FRAME_FIELDS, {"padding", "bottom_height", "quality"})
    defaults = FrameConfig()
    return FrameConfig(
        color=_color(section, "frame", defaults.color),
        padding=section["padding"],
        bottom_height=section["bottom_height"],
        corner_radius=section.get("corner_radius", defaults.corner_radius),
        quality=section["quality"],
        matte=_color(section, "frame", defaults.matte, key="matte")[:3],
    )


def _parse_text(section, name: str) -> CaptionSpec | None:
    if section is None:
        return None
    _check_section(section, name, TEXT_FIELDS, {"text"})
    fields = {k: v for k, v in section.items() if k != "color"}
    if "color" in section:
        fields["color"] = _color(section, name, None)
    return CaptionSpec(**fields)


def _parse_logo(section) -> LogoSpec | None:
    if section is None:
        return None
    _check_section(section, "logo", LOGO_FIELDS, {"width", "height"})
    return LogoSpec(**section)


def _parse_blur(section) -> BlurSpec | None:
    if section is None:
        return None
    _check_section(section, "blur", BLUR_FIELDS, {"sigma"})
    return BlurSpec(**section)


def _parse_watermark(section) -> WatermarkSpec | None:
    if section is None:
        return None
    _check_section(section, "watermark", WATERMARK_FIELDS, {"text"})
    fields = {k: v for k, v in section.items() if k not in ("color", "position")}
    if "color" in section:
        fields["color"] = _color(section, "watermark", None)
    if "position" in section:
        position = section["position"]
        if not isinstance(position, (list, tuple)) or len(position) != 2:
            raise InvalidConfig(f"Manifest: watermark.position must be [x, y], got {position!r}")
        fields["position"] = tuple(position)
    return WatermarkSpec(**fields)


# ── Path validation ───────────────────────────────────────────────


def validate_paths(config: ProcessorConfig) -> None:
    """Check that the font and logo files named in the manifest exist.

    A font value without a path separator is treated as a system font
    name and is left for FreeType to resolve.

    Raises:
        FileNotFoundError: Lists all missing files.
    """
    missing = []
    font = config.font
    if isinstance(font, (str, Path)) and _looks_like_path(str(font)):
        if not Path(font).exists():
            missing.append(str(font))
    if config.logo is not None and config.logo.path:
        if not Path(config.logo.path).exists():
            missing.append(config.logo.path)

    if missing:
        msg = f"Missing {len(missing)} file(s):\n"
        for p in missing:
            msg += f"  - {p}\n"
        raise FileNotFoundError(msg)


def _looks_like_path(value: str) -> bool:
    return "/" in value or "\\" in value
