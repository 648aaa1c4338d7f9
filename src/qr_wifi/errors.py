"""Error taxonomy for the encode and decode pipelines."""

from __future__ import annotations


class QRCodecError(ValueError):
    """Base class for failures raised at a user action boundary."""

    message = "QR code operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class EmptyText(QRCodecError):
    message = "Enter some text to encode"


class NoArtifact(QRCodecError):
    message = "Generate a QR code before downloading it"


class RepresentationMismatch(NoArtifact):
    message = "The rendered QR code does not match the requested export format"


class NoFile(QRCodecError):
    message = "Choose a QR image to decode"


class NoCodeFound(QRCodecError):
    message = "Could not detect QR code in the image"


class NotWifiPayload(QRCodecError):
    message = "Not a valid Wi-Fi QR code"


class WrongMode(QRCodecError):
    message = "This action is not available in the current mode"
