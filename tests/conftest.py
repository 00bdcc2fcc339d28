from io import BytesIO

import pytest
from PIL import Image


def _encode(width, height, fmt, color=(0, 0, 0)):
    buf = BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def make_png():
    def factory(width=300, height=400, color=(0, 0, 0)):
        return _encode(width, height, "PNG", color)
    return factory


@pytest.fixture
def make_jpeg():
    def factory(width=300, height=400, color=(0, 0, 0)):
        return _encode(width, height, "JPEG", color)
    return factory


@pytest.fixture
def corrupt_png():
    return b"\x89PNG\r\n\x1a\n" + b"not really a png" * 4
