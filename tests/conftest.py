import base64
import io

import pytest
from PIL import Image

TINY_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


FILL_COLORS = {
    "RGB": (200, 30, 30),
    "RGBA": (200, 30, 30, 128),
    "CMYK": (0, 200, 200, 20),
    "P": 1,
}


def make_data_url(fmt: str = "PNG", mode: str = "RGB", size=(4, 3), subtype: str | None = None) -> str:
    image = Image.new(mode, size, FILL_COLORS[mode])
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/{subtype or fmt.lower()};base64,{encoded}"


@pytest.fixture
def tiny_png_src() -> str:
    return f"data:image/png;base64,{TINY_PNG_BASE64}"


@pytest.fixture
def png_src() -> str:
    return make_data_url("PNG")


@pytest.fixture
def rgba_png_src() -> str:
    return make_data_url("PNG", mode="RGBA")


@pytest.fixture
def gif_src() -> str:
    return make_data_url("GIF", mode="P")


@pytest.fixture
def data_url():
    return make_data_url


@pytest.fixture
def cmyk_jpeg_src() -> str:
    return make_data_url("JPEG", mode="CMYK")
