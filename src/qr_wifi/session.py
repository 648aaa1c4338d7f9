"""Mode-scoped session state for the encode and decode pipelines."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Union

from .config import DEFAULT_VISUAL, VisualConfig
from .decode import DecodeAttempt, DecodePipeline, FailureReason, ImageSource
from .encode import Artifact, EncodePipeline, EncodeRequest, ExportFormat, ExportResult
from .errors import EmptyText, NoArtifact, NoFile, WrongMode
from .payload import WifiCredential

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    URL = "url"
    WIFI = "wifi"


class Session:
    """Holds the active mode and the transient state that belongs to it.

    Switching mode wipes the pending text, artifact, file, credential and
    failure. The chosen export format is a preference and survives.
    """

    def __init__(
        self,
        encoder: Optional[EncodePipeline] = None,
        decoder: Optional[DecodePipeline] = None,
        visual: VisualConfig = DEFAULT_VISUAL,
    ) -> None:
        self.encoder = encoder if encoder is not None else EncodePipeline()
        self.decoder = decoder if decoder is not None else DecodePipeline()
        self.visual = visual
        self.mode = Mode.URL
        self.export_format = ExportFormat.PNG
        self._clear()

    def _clear(self) -> None:
        self.text = ""
        self.artifact: Optional[Artifact] = None
        self.pending_file: Optional[ImageSource] = None
        self.credential: Optional[WifiCredential] = None
        self.failure: Optional[FailureReason] = None

    def switch_mode(self, mode: Union[str, Mode]) -> None:
        self.mode = Mode(mode)
        self._clear()
        logger.debug("Switched to %s mode", self.mode.value)

    def _require(self, mode: Mode) -> None:
        if self.mode is not mode:
            raise WrongMode()

    # Encode side

    def set_text(self, text: str) -> None:
        self.text = text

    @property
    def can_generate(self) -> bool:
        return self.mode is Mode.URL and bool(self.text.strip())

    def generate(self) -> Artifact:
        self._require(Mode.URL)
        if not self.text.strip():
            raise EmptyText()
        request = EncodeRequest(text=self.text, export_format=self.export_format, visual=self.visual)
        self.artifact = self.encoder.render(request)
        return self.artifact

    def set_export_format(self, export_format: Union[str, ExportFormat]) -> None:
        """Change the export format, re-rendering when the representation flips."""
        new_format = ExportFormat.parse(export_format)
        previous = self.export_format
        self.export_format = new_format
        if self.artifact is None or new_format.representation is previous.representation:
            return
        self.artifact = None
        if self.can_generate:
            logger.debug("Re-rendering for %s export", new_format.value)
            self.generate()

    def download(self) -> ExportResult:
        self._require(Mode.URL)
        if self.artifact is None:
            raise NoArtifact()
        return self.encoder.export(self.artifact, self.export_format)

    # Decode side

    def choose_file(self, image: Optional[ImageSource]) -> None:
        self.pending_file = image

    @property
    def can_decode(self) -> bool:
        return self.mode is Mode.WIFI and self.pending_file is not None

    def decode(self) -> DecodeAttempt:
        self._require(Mode.WIFI)
        if self.pending_file is None:
            raise NoFile()
        self.credential = None
        self.failure = None
        attempt = self.decoder.attempt(self.pending_file)
        self.credential = attempt.result
        self.failure = attempt.failure
        return attempt
