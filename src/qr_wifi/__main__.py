"""Command line interface for encoding text and decoding Wi-Fi QR images."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config import Settings
from .decode import DecodePipeline
from .encode import EncodePipeline, ExportFormat
from .errors import QRCodecError
from .logging_config import setup_logging
from .session import Mode, Session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qr_wifi", description="Encode text as a QR code or read Wi-Fi QR codes")
    parser.add_argument("--log-level", default=None, help="Logging level (default: QR_WIFI_LOG_LEVEL or INFO)")
    commands = parser.add_subparsers(dest="command", required=True)

    encode = commands.add_parser("encode", help="Render text or a URL as a QR image")
    encode.add_argument("text", help="Literal text/URL to encode")
    encode.add_argument(
        "-f", "--format", dest="export_format", choices=["png", "jpg", "jpeg", "svg"], default="png",
        help="Export format",
    )
    encode.add_argument("-o", "--output", type=Path, default=None, help="Output path (default: qrcode.<ext>)")

    decode = commands.add_parser("decode", help="Read Wi-Fi credentials from a QR image")
    decode.add_argument("image", type=Path, help="Image file containing a Wi-Fi QR code")
    return parser


def run_encode(session: Session, args: argparse.Namespace) -> int:
    session.set_text(args.text)
    session.set_export_format(args.export_format)
    session.generate()
    result = session.download()
    output: Path = args.output if args.output is not None else Path(result.filename)
    output.write_bytes(result.data)
    print(f"Saved {result.mime_type} to {output}")
    return 0


def run_decode(session: Session, args: argparse.Namespace) -> int:
    session.switch_mode(Mode.WIFI)
    session.choose_file(args.image)
    attempt = session.decode()
    if attempt.failure is not None:
        print(attempt.failure.message, file=sys.stderr)
        return 1
    print(f"SSID: {attempt.result.ssid}")
    print(f"Password: {attempt.result.password or '-'}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = Settings.from_env()
        setup_logging(args.log_level or settings.log_level)
    except ValueError as exc:
        parser.exit(2, f"error: {exc}\n")

    session = Session(
        encoder=EncodePipeline(min_latency=0.0),
        decoder=DecodePipeline(multi_scan=settings.multi_scan),
    )
    try:
        if args.command == "encode":
            return run_encode(session, args)
        return run_decode(session, args)
    except QRCodecError as exc:
        parser.exit(2, f"error: {exc}\n")


if __name__ == "__main__":
    sys.exit(main())
