import numpy as np
import pytest

from ascii_art.config import Config
from ascii_art.image import Image


class FakeRasterizer:
    """Bitmap with a fixed number of ink cells per character; counts calls."""

    def __init__(self, ink=None):
        self.ink = dict(ink or {})
        self.calls = []

    def __call__(self, char, size, font_name):
        self.calls.append((char, size, font_name))
        n = self.ink.get(char, ord(char) % 17)
        flat = np.zeros(size * size, dtype=bool)
        flat[:min(n, size * size)] = True
        return flat.reshape(size, size)


@pytest.fixture
def rasterizer():
    return FakeRasterizer({".": 0, "@": 256})


@pytest.fixture
def make_rasterizer():
    return FakeRasterizer


@pytest.fixture
def grey_image():
    return Image.solid(8, 8, (128, 128, 128))


@pytest.fixture
def split_image():
    """8x8: left half black, right half white."""
    arr = np.zeros((8, 8, 3), dtype=np.uint8)
    arr[:, 4:] = 255
    return Image.from_array(arr)


@pytest.fixture
def cfg(tmp_path):
    c = Config(path=str(tmp_path / "cfg.json"))
    c.update({"output": {"html_file": str(tmp_path / "out.html")}})
    return c
