"""Wi-Fi provisioning payload grammar.

A payload looks like ``WIFI:T:WPA;S:<ssid>;P:<password>;;``. Fields are
separated by ``;`` and each field is a ``key:value`` pair split on its first
``:``. Only ``S`` (network name) and ``P`` (password) are interpreted; every
other key is accepted and dropped so newer fields never break parsing.

A backslash escapes the next character, so ``\\;``, ``\\:``, ``\\,`` and
``\\\\`` stand for the literal characters inside a value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

PREFIX = "WIFI:"

_ESCAPE = "\\"
_FIELD_SEPARATOR = ";"
_KEY_SEPARATOR = ":"
_SPECIAL_CHARS = ("\\", ";", ",", ":")
_VALID_AUTH = {"WEP", "WPA", "WPA2", "WPA/WPA2", "NOPASS"}


class NotAWifiPayload(ValueError):
    """Raised when text does not follow the Wi-Fi payload grammar."""


@dataclass(frozen=True)
class WifiCredential:
    ssid: str
    password: str = ""

    def __post_init__(self) -> None:
        if not self.ssid:
            raise ValueError("ssid must not be empty")


def tokenize(body: str) -> List[Tuple[str, str]]:
    """Split a payload body (prefix removed) into ``(key, value)`` pairs.

    Keys are lower-cased and both sides are trimmed. Fields without a ``:`` or
    with an empty key are skipped, which also covers the empty field left by
    the trailing ``;;`` terminator.
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in _split_fields(body):
        if value is None:
            continue
        key = key.strip().lower()
        if not key:
            continue
        pairs.append((key, value.strip()))
    return pairs


def parse(text: str) -> WifiCredential:
    """Return the credential carried by ``text``.

    Raises :class:`NotAWifiPayload` when the prefix is missing or no network
    name is present. Field order is free and the last occurrence of a key wins.
    """
    if not text.startswith(PREFIX):
        raise NotAWifiPayload("payload does not start with WIFI:")

    fields: Dict[str, str] = {}
    for key, value in tokenize(text[len(PREFIX):]):
        fields[key] = value

    ssid = fields.get("s", "")
    if not ssid:
        raise NotAWifiPayload("payload has no network name (S field)")
    return WifiCredential(ssid=ssid, password=fields.get("p", ""))


def serialize(credential: WifiCredential, auth: Optional[str] = None, hidden: bool = False) -> str:
    """Return the Wi-Fi payload string for ``credential``.

    Without ``auth`` and ``hidden`` the result is ``WIFI:S:<ssid>;P:<password>;``.
    """
    fields: List[str] = []
    if auth is not None:
        auth_normalized = auth.upper()
        if auth_normalized not in _VALID_AUTH:
            raise ValueError("auth must be WEP, WPA, WPA2, WPA/WPA2, or nopass")
        fields.append(f"T:{'nopass' if auth_normalized == 'NOPASS' else auth_normalized}")
    fields.append(f"S:{escape(credential.ssid)}")
    fields.append(f"P:{escape(credential.password)}")
    if hidden:
        fields.append("H:true")
    return PREFIX + "".join(f"{field};" for field in fields)


def escape(value: str) -> str:
    for char in _SPECIAL_CHARS:
        value = value.replace(char, _ESCAPE + char)
    return value


def _split_fields(body: str) -> List[Tuple[str, Optional[str]]]:
    """Walk ``body`` once, honouring escapes, and cut it into raw fields.

    The value is ``None`` for a field that has no unescaped ``:``.
    """
    fields: List[Tuple[str, Optional[str]]] = []
    key: List[str] = []
    value: Optional[List[str]] = None
    index = 0
    length = len(body)
    while index < length:
        char = body[index]
        if char == _ESCAPE and index + 1 < length:
            (key if value is None else value).append(body[index + 1])
            index += 2
            continue
        if char == _FIELD_SEPARATOR:
            fields.append(("".join(key), None if value is None else "".join(value)))
            key, value = [], None
        elif char == _KEY_SEPARATOR and value is None:
            value = []
        else:
            (key if value is None else value).append(char)
        index += 1
    if key or value is not None:
        fields.append(("".join(key), None if value is None else "".join(value)))
    return fields
