from __future__ import annotations

import pytest

from conftest import blank_png, qr_png
from qr_wifi.__main__ import main


def test_encode_writes_default_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["encode", "https://example.com"]) == 0
    assert (tmp_path / "qrcode.png").read_bytes().startswith(b"\x89PNG")


def test_encode_svg_to_output(tmp_path):
    output = tmp_path / "code.svg"
    assert main(["encode", "https://example.com", "-f", "svg", "-o", str(output)]) == 0
    assert b"<svg" in output.read_bytes()


def test_encode_blank_text_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["encode", "   ", "-o", str(tmp_path / "x.png")])
    assert excinfo.value.code == 2


def test_decode_prints_credentials(tmp_path, capsys):
    image = tmp_path / "wifi.png"
    image.write_bytes(qr_png("WIFI:T:WPA;S:Attic;P:s3cret;;"))
    assert main(["--log-level", "WARNING", "decode", str(image)]) == 0
    out = capsys.readouterr().out
    assert "SSID: Attic" in out
    assert "Password: s3cret" in out


def test_decode_failure_exit_code(tmp_path, capsys):
    image = tmp_path / "blank.png"
    image.write_bytes(blank_png())
    assert main(["--log-level", "ERROR", "decode", str(image)]) == 1
    assert "Could not detect QR code in the image" in capsys.readouterr().err


@pytest.mark.parametrize(
    "name, value", [("QR_WIFI_MIN_LATENCY", "soon"), ("QR_WIFI_MULTI_SCAN", "maybe"), ("QR_WIFI_LOG_LEVEL", "LOUD")]
)
def test_bad_environment_exits_cleanly(tmp_path, monkeypatch, capsys, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(SystemExit) as excinfo:
        main(["encode", "hello", "-o", str(tmp_path / "x.png")])
    assert excinfo.value.code == 2
    assert capsys.readouterr().err.startswith("error:")
    assert not (tmp_path / "x.png").exists()
