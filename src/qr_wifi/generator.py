"""QR matrix helpers backed by the ``qrcode`` library."""

from __future__ import annotations

from typing import List

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

_ECC_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


def create_qr_code(text: str, ecc: str = "M", border: int = 0) -> qrcode.QRCode:
    try:
        ecl = _ECC_LEVELS[ecc.upper()]
    except KeyError as exc:
        raise ValueError(f"unknown ECC level: {ecc}") from exc
    qr = qrcode.QRCode(
        version=None,
        error_correction=ecl,
        box_size=10,
        border=border,
    )
    qr.add_data(text)
    qr.make(fit=True)
    return qr


def matrix_from_text(text: str, ecc: str = "M", border: int = 0) -> List[List[bool]]:
    """Encode ``text`` into a matrix of booleans, ``True`` for dark modules.

    The quiet zone is left to the renderers, which size it in pixels, so the
    default border is zero modules.
    """
    qr = create_qr_code(text, ecc=ecc, border=border)
    return [list(row) for row in qr.get_matrix()]
