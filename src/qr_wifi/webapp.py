"""Flask front end for the QR codec."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from flask import Flask, current_app, jsonify, request, send_file

from .config import DEFAULT_VISUAL, Settings, VisualConfig, parse_bool
from .decode import DecodePipeline, Recognizer
from .encode import EncodePipeline, ExportFormat
from .errors import QRCodecError
from .session import Mode, Session

logger = logging.getLogger(__name__)

SETTINGS_KEY = "QR_WIFI_SETTINGS"
RECOGNIZER_KEY = "QR_WIFI_RECOGNIZER"


@dataclass
class EncodeForm:
    text: str
    export_format: ExportFormat

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "EncodeForm":
        text = str(payload.get("text") or "").strip()
        if not text:
            raise ValueError("Enter a URL or some text to encode.")
        export_format = ExportFormat.parse(str(payload.get("format") or "png"))
        return cls(text=text, export_format=export_format)

    @classmethod
    def from_request(cls) -> "EncodeForm":
        payload: Dict[str, object] = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            payload = {}
        if not payload:
            payload = {key: value for key, value in request.values.items()}
        return cls.from_payload(payload)


def _new_session() -> Session:
    settings: Settings = current_app.config[SETTINGS_KEY]
    visual: VisualConfig = current_app.config.get("VISUAL", DEFAULT_VISUAL)
    recognizer: Optional[Recognizer] = current_app.config.get(RECOGNIZER_KEY)
    return Session(
        encoder=EncodePipeline(min_latency=settings.min_latency),
        decoder=DecodePipeline(recognizer=recognizer, multi_scan=settings.multi_scan),
        visual=visual,
    )


def _settings_from_config(config: Mapping[str, object]) -> Settings:
    defaults = Settings()
    try:
        min_latency = float(config.get("MIN_LATENCY", defaults.min_latency))
    except (TypeError, ValueError) as exc:
        raise ValueError("MIN_LATENCY must be a number of seconds") from exc
    # from_prefixed_env leaves values it cannot JSON-decode ("off", "no") as strings.
    multi_scan = config.get("MULTI_SCAN", defaults.multi_scan)
    if not isinstance(multi_scan, bool):
        multi_scan = parse_bool(str(multi_scan), defaults.multi_scan)
    return Settings(
        min_latency=min_latency,
        multi_scan=multi_scan,
        log_level=str(config.get("LOG_LEVEL", defaults.log_level)).upper(),
    )


def create_app(settings: Optional[Settings] = None, **config: object) -> Flask:
    """Build the app.

    ``QR_WIFI_*`` environment variables land in ``app.config`` without the
    prefix (``QR_WIFI_MIN_LATENCY`` becomes ``MIN_LATENCY``); keyword
    arguments take precedence over them, and an explicit ``settings`` over
    both.
    """
    app = Flask(__name__)
    app.config.from_prefixed_env("QR_WIFI")
    app.config.update(config)
    app.config[SETTINGS_KEY] = settings if settings is not None else _settings_from_config(app.config)
    logger.debug("Created app with %s", app.config[SETTINGS_KEY])

    @app.post("/api/encode")
    def encode():
        try:
            form = EncodeForm.from_request()
        except ValueError as exc:
            return jsonify({"message": str(exc)}), 400

        session = _new_session()
        session.set_text(form.text)
        session.set_export_format(form.export_format)
        try:
            session.generate()
            result = session.download()
        except QRCodecError as exc:
            return jsonify({"message": str(exc)}), 400

        return send_file(
            io.BytesIO(result.data),
            as_attachment=True,
            download_name=result.filename,
            mimetype=result.mime_type,
        )

    @app.post("/api/decode")
    def decode():
        upload = request.files.get("image")
        if upload is None or not upload.filename:
            return jsonify({"message": "Choose a QR image to decode."}), 400

        session = _new_session()
        session.switch_mode(Mode.WIFI)
        session.choose_file(upload)
        attempt = session.decode()
        if attempt.failure is not None:
            return jsonify({"reason": attempt.failure.value, "message": attempt.failure.message}), 422

        credential = attempt.result
        return jsonify({"ssid": credential.ssid, "password": credential.password})

    return app
