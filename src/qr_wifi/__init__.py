"""Encode text as QR images and read Wi-Fi credentials back out of them."""

from .decode import DecodeAttempt, DecodePipeline, FailureReason, OpenCVRecognizer
from .encode import Artifact, EncodePipeline, EncodeRequest, ExportFormat, ExportResult, Representation, validate
from .payload import NotAWifiPayload, WifiCredential, parse, serialize
from .session import Mode, Session

__all__ = [
    "Artifact",
    "DecodeAttempt",
    "DecodePipeline",
    "EncodePipeline",
    "EncodeRequest",
    "ExportFormat",
    "ExportResult",
    "FailureReason",
    "Mode",
    "NotAWifiPayload",
    "OpenCVRecognizer",
    "Representation",
    "Session",
    "WifiCredential",
    "parse",
    "serialize",
    "validate",
]
