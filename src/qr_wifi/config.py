"""Visual and runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_ECC_CHOICES = {"L", "M", "Q", "H"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class VisualConfig:
    """Fixed look of every rendered code. Sizes are in pixels."""

    size: int = 260
    foreground: str = "#89986D"
    background: str = "#F6F0D7"
    dots: bool = True
    eye_radius: int = 8
    quiet_zone: int = 10
    ecc: str = "M"

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("size must be positive")
        if self.eye_radius < 0:
            raise ValueError("eye_radius must not be negative")
        if self.quiet_zone < 0:
            raise ValueError("quiet_zone must not be negative")
        if self.ecc.upper() not in _ECC_CHOICES:
            raise ValueError(f"unknown ECC level: {self.ecc}")

    @property
    def canvas_size(self) -> int:
        return self.size + 2 * self.quiet_zone


DEFAULT_VISUAL = VisualConfig()


@dataclass(frozen=True)
class Settings:
    min_latency: float = 0.3
    multi_scan: bool = True
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.min_latency < 0:
            raise ValueError("min_latency must not be negative")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        raw_latency = env.get("QR_WIFI_MIN_LATENCY")
        try:
            min_latency = defaults.min_latency if raw_latency in (None, "") else float(raw_latency)
        except ValueError as exc:
            raise ValueError("QR_WIFI_MIN_LATENCY must be a number of seconds") from exc
        return cls(
            min_latency=min_latency,
            multi_scan=parse_bool(env.get("QR_WIFI_MULTI_SCAN"), defaults.multi_scan),
            log_level=(env.get("QR_WIFI_LOG_LEVEL") or defaults.log_level).upper(),
        )


def parse_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None or raw == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean flag: {raw!r}")
