"""Encode pipeline: text to a rendered, exportable QR artifact."""

from __future__ import annotations

import io
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Union

from PIL import Image

from . import render
from .config import DEFAULT_VISUAL, VisualConfig
from .errors import EmptyText, NoArtifact, RepresentationMismatch

logger = logging.getLogger(__name__)

EXPORT_BASENAME = "qrcode"


class Representation(str, Enum):
    RASTER = "raster"
    VECTOR = "vector"


class ExportFormat(str, Enum):
    PNG = "png"
    JPEG = "jpg"
    SVG = "svg"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def mime_type(self) -> str:
        return {
            ExportFormat.PNG: "image/png",
            ExportFormat.JPEG: "image/jpeg",
            ExportFormat.SVG: "image/svg+xml",
        }[self]

    @property
    def representation(self) -> Representation:
        return Representation.VECTOR if self is ExportFormat.SVG else Representation.RASTER

    @property
    def filename(self) -> str:
        return f"{EXPORT_BASENAME}.{self.extension}"

    @classmethod
    def parse(cls, value: Union[str, "ExportFormat"]) -> "ExportFormat":
        if isinstance(value, ExportFormat):
            return value
        normalized = str(value).strip().lower()
        if normalized == "jpeg":
            normalized = "jpg"
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"unknown export format: {value!r} (expected png, jpg or svg)") from exc


def validate(text: Optional[str]) -> str:
    """Return ``text`` trimmed, or raise :class:`EmptyText` when it is blank."""
    trimmed = (text or "").strip()
    if not trimmed:
        raise EmptyText()
    return trimmed


@dataclass(frozen=True)
class EncodeRequest:
    text: str
    export_format: ExportFormat = ExportFormat.PNG
    visual: VisualConfig = DEFAULT_VISUAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", validate(self.text))
        object.__setattr__(self, "export_format", ExportFormat.parse(self.export_format))


@dataclass(frozen=True)
class Artifact:
    """A rendered code. ``surface`` is a Pillow image or SVG markup."""

    text: str
    representation: Representation
    surface: Union[Image.Image, str] = field(repr=False, compare=False)


@dataclass(frozen=True)
class ExportResult:
    data: bytes = field(repr=False)
    filename: str
    mime_type: str


class EncodePipeline:
    """Drive the renderers and serialize their surfaces.

    ``min_latency`` is a floor on how long :meth:`render` takes, so callers
    always get a visible "generating" state. Zero renders immediately.
    """

    def __init__(
        self,
        min_latency: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if min_latency < 0:
            raise ValueError("min_latency must not be negative")
        self.min_latency = min_latency
        self._sleep = sleep
        self._clock = clock

    def render(self, request: EncodeRequest) -> Artifact:
        started = self._clock()
        representation = request.export_format.representation
        if representation is Representation.VECTOR:
            surface: Union[Image.Image, str] = render.render_vector(request.text, request.visual)
        else:
            surface = render.render_raster(request.text, request.visual)

        remaining = self.min_latency - (self._clock() - started)
        if remaining > 0:
            self._sleep(remaining)
        logger.info("Rendered %s QR code for %d characters", representation.value, len(request.text))
        return Artifact(text=request.text, representation=representation, surface=surface)

    def export(self, artifact: Optional[Artifact], export_format: Union[str, ExportFormat]) -> ExportResult:
        if artifact is None:
            raise NoArtifact()
        export_format = ExportFormat.parse(export_format)
        if artifact.representation is not export_format.representation:
            raise RepresentationMismatch()

        if export_format is ExportFormat.SVG:
            data = str(artifact.surface).encode("utf-8")
        else:
            data = _encode_raster(artifact.surface, export_format)
        logger.info("Exported %s (%d bytes)", export_format.filename, len(data))
        return ExportResult(data=data, filename=export_format.filename, mime_type=export_format.mime_type)

    def encode(self, text: str, export_format: Union[str, ExportFormat] = ExportFormat.PNG,
               visual: VisualConfig = DEFAULT_VISUAL) -> ExportResult:
        """Validate, render and export in one call."""
        request = EncodeRequest(text=text, export_format=ExportFormat.parse(export_format), visual=visual)
        return self.export(self.render(request), request.export_format)


def _encode_raster(surface: Union[Image.Image, str], export_format: ExportFormat) -> bytes:
    if not isinstance(surface, Image.Image):
        raise RepresentationMismatch()
    image = surface
    if export_format is ExportFormat.JPEG and image.mode != "RGB":
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG" if export_format is ExportFormat.JPEG else "PNG")
    return buffer.getvalue()
