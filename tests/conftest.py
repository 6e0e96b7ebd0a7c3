"""Shared test fixtures for framecompose tests."""

import io

import numpy as np
import pytest
import yaml
from PIL import Image


RED = (255, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def png_bytes(img: Image.Image) -> bytes:
    """Serialize a PIL image to PNG bytes."""
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def ink_columns(img: Image.Image) -> np.ndarray:
    """Indices of columns containing any non-transparent pixel."""
    alpha = np.array(img.convert("RGBA"))[:, :, 3]
    return np.nonzero(alpha.max(axis=0))[0]


@pytest.fixture
def red_source():
    """100x100 opaque red photo."""
    return Image.new("RGBA", (100, 100), RED)


@pytest.fixture
def gradient_source():
    """80x60 opaque photo with a horizontal/vertical gradient, no two rows alike."""
    xs = np.linspace(0, 255, 80, dtype=np.uint8)
    ys = np.linspace(0, 255, 60, dtype=np.uint8)
    arr = np.zeros((60, 80, 4), dtype=np.uint8)
    arr[:, :, 0] = xs[np.newaxis, :]
    arr[:, :, 1] = ys[:, np.newaxis]
    arr[:, :, 2] = 128
    arr[:, :, 3] = 255
    return Image.fromarray(arr)


@pytest.fixture
def red_source_path(tmp_path, red_source):
    path = tmp_path / "red.png"
    red_source.save(path)
    return path


@pytest.fixture
def logo_path(tmp_path):
    """40x20 opaque blue logo on disk."""
    path = tmp_path / "logo.png"
    Image.new("RGBA", (40, 20), (0, 0, 255, 255)).save(path)
    return path


@pytest.fixture
def write_manifest(tmp_path):
    """Return a helper that writes a manifest dict to YAML and returns its path."""
    def _write(content: dict, name: str = "frame.yaml"):
        path = tmp_path / name
        with open(path, "w") as f:
            yaml.dump(content, f)
        return path
    return _write
