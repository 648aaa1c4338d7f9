from __future__ import annotations

import io
import logging

import pytest
import qrcode
from PIL import Image

from qr_wifi.errors import NoCodeFound


def qr_png(text: str) -> bytes:
    image = qrcode.make(text, box_size=10, border=4)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def blank_png(size: int = 200) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (size, size), (255, 255, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeRecognizer:
    """Returns a canned payload, or reports no code when given ``None``."""

    def __init__(self, text: str | None) -> None:
        self.text = text
        self.calls: list[bytes] = []

    def recognize(self, image_bytes: bytes, multi_scan: bool = True) -> str:
        self.calls.append(image_bytes)
        if self.text is None:
            raise NoCodeFound()
        return self.text


@pytest.fixture
def wifi_png() -> bytes:
    return qr_png("WIFI:T:WPA;S:HomeNet;P:hunter22;;")


@pytest.fixture
def url_png() -> bytes:
    return qr_png("https://example.com")


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("qr_wifi")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
