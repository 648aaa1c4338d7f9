"""Decode pipeline: image to Wi-Fi credential."""

from __future__ import annotations

import contextlib
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Iterator, Optional, Protocol, Union

import cv2
import numpy as np

from .errors import NoCodeFound, NoFile, NotWifiPayload
from .payload import NotAWifiPayload, WifiCredential, parse

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, str, "os.PathLike[str]", BinaryIO]


class Recognizer(Protocol):
    def recognize(self, image_bytes: bytes, multi_scan: bool = True) -> str:
        ...


class OpenCVRecognizer:
    """Find and read a QR code with OpenCV's ``QRCodeDetector``.

    With ``multi_scan`` the detector gets a second and third pass (the
    multi-code detector, then an Otsu-binarized grayscale copy) before giving
    up. Only the first decoded payload is returned.
    """

    def __init__(self) -> None:
        self._detector = cv2.QRCodeDetector()

    def recognize(self, image_bytes: bytes, multi_scan: bool = True) -> str:
        image = self._load(image_bytes)

        text = self._detect(image)
        if text is None and multi_scan:
            text = self._detect_multi(image)
            if text is None:
                text = self._detect(self._binarize(image))
        if text is None:
            raise NoCodeFound()
        return text

    @staticmethod
    def _load(image_bytes: bytes) -> np.ndarray:
        buffer = np.frombuffer(image_bytes, dtype=np.uint8)
        if buffer.size == 0:
            raise NoCodeFound()
        image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
        if image is None:
            raise NoCodeFound()
        return image

    def _detect(self, image: np.ndarray) -> Optional[str]:
        data, points, _ = self._detector.detectAndDecode(image)
        if points is None or not data:
            return None
        return data

    def _detect_multi(self, image: np.ndarray) -> Optional[str]:
        ok, decoded, points, _ = self._detector.detectAndDecodeMulti(image)
        if not ok or points is None:
            return None
        for data in decoded:
            if data:
                return data
        return None

    @staticmethod
    def _binarize(image: np.ndarray) -> np.ndarray:
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        return cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)[1]


class FailureReason(str, Enum):
    NO_CODE_FOUND = "no_code_found"
    NOT_WIFI_PAYLOAD = "not_wifi_payload"

    @property
    def message(self) -> str:
        return {
            FailureReason.NO_CODE_FOUND: NoCodeFound.message,
            FailureReason.NOT_WIFI_PAYLOAD: NotWifiPayload.message,
        }[self]


@dataclass(frozen=True)
class DecodeAttempt:
    source: Optional[str] = None
    raw_text: Optional[str] = None
    result: Optional[WifiCredential] = None
    failure: Optional[FailureReason] = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None


@contextlib.contextmanager
def open_image(image: ImageSource) -> Iterator[bytes]:
    """Yield the raw bytes of ``image``.

    Files opened here are closed when the block exits, whatever the outcome.
    Caller-owned file objects are read but left open.
    """
    if isinstance(image, (bytes, bytearray)):
        yield bytes(image)
        return
    if isinstance(image, (str, os.PathLike)):
        with open(image, "rb") as handle:
            yield handle.read()
        return
    data = image.read()
    if isinstance(data, str):
        raise ValueError("image stream must be opened in binary mode")
    yield data


def describe_source(image: ImageSource) -> str:
    if isinstance(image, (bytes, bytearray)):
        return f"<{len(image)} bytes>"
    if isinstance(image, (str, os.PathLike)):
        return os.fspath(image)
    return str(getattr(image, "filename", None) or getattr(image, "name", None) or "<stream>")


class DecodePipeline:
    def __init__(self, recognizer: Optional[Recognizer] = None, multi_scan: bool = True) -> None:
        self.recognizer = recognizer if recognizer is not None else OpenCVRecognizer()
        self.multi_scan = multi_scan

    def read_text(self, image: Optional[ImageSource]) -> str:
        """Return the raw payload of the code in ``image``.

        Read and decode errors count as "no code found": the recognizer is
        the only judge of whether an image is usable.
        """
        if image is None:
            raise NoFile()
        try:
            with open_image(image) as image_bytes:
                return self.recognizer.recognize(image_bytes, multi_scan=self.multi_scan)
        except NoCodeFound:
            logger.warning("No QR code found in %s", describe_source(image))
            raise
        except (OSError, ValueError, cv2.error) as exc:
            logger.warning("Could not read %s: %s", describe_source(image), exc)
            raise NoCodeFound() from exc

    def interpret(self, raw_text: str) -> WifiCredential:
        """Run ``raw_text`` through the Wi-Fi grammar."""
        try:
            credential = parse(raw_text)
        except NotAWifiPayload as exc:
            logger.info("QR code found but it is not a Wi-Fi payload: %s", exc)
            raise NotWifiPayload() from exc
        logger.info("Decoded Wi-Fi credential for network %r", credential.ssid)
        return credential

    def decode(self, image: Optional[ImageSource]) -> WifiCredential:
        return self.interpret(self.read_text(image))

    def attempt(self, image: Optional[ImageSource]) -> DecodeAttempt:
        """Like :meth:`decode` but resolve the user-facing failures into a record."""
        if image is None:
            raise NoFile()
        source = describe_source(image)
        try:
            raw_text = self.read_text(image)
        except NoCodeFound:
            return DecodeAttempt(source=source, failure=FailureReason.NO_CODE_FOUND)
        try:
            credential = self.interpret(raw_text)
        except NotWifiPayload:
            return DecodeAttempt(source=source, raw_text=raw_text, failure=FailureReason.NOT_WIFI_PAYLOAD)
        return DecodeAttempt(source=source, raw_text=raw_text, result=credential)
