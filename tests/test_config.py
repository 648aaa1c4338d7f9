from __future__ import annotations

import logging

import pytest

from qr_wifi.config import Settings
from qr_wifi.logging_config import setup_logging


def test_settings_defaults():
    assert Settings.from_env({}) == Settings(min_latency=0.3, multi_scan=True, log_level="INFO")


def test_settings_from_env():
    env = {"QR_WIFI_MIN_LATENCY": "0", "QR_WIFI_MULTI_SCAN": "off", "QR_WIFI_LOG_LEVEL": "debug"}
    assert Settings.from_env(env) == Settings(min_latency=0.0, multi_scan=False, log_level="DEBUG")


@pytest.mark.parametrize("env", [{"QR_WIFI_MIN_LATENCY": "soon"}, {"QR_WIFI_MULTI_SCAN": "maybe"}])
def test_settings_reject_bad_values(env):
    with pytest.raises(ValueError):
        Settings.from_env(env)


def test_settings_reject_negative_latency():
    with pytest.raises(ValueError):
        Settings(min_latency=-0.1)


def test_setup_logging_does_not_stack_handlers():
    setup_logging("DEBUG")
    logger = setup_logging(logging.INFO)
    assert logger.name == "qr_wifi"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("LOUD")


def test_setup_logging_reports_level(caplog):
    caplog.set_level(logging.DEBUG, logger="qr_wifi")
    setup_logging("DEBUG")
    assert "qr_wifi logging at DEBUG" in caplog.text
