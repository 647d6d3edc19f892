from __future__ import annotations

import base64
import binascii
import string
from typing import Optional

from .errors import UnknownCipherError

BASE64 = "1"
ROT13 = "2"
SUPPORTED_CIPHERS = frozenset({BASE64, ROT13})

_ROT13_TABLE = str.maketrans(
    string.ascii_lowercase + string.ascii_uppercase,
    string.ascii_lowercase[13:] + string.ascii_lowercase[:13]
    + string.ascii_uppercase[13:] + string.ascii_uppercase[:13],
)


def is_supported(cipher_kind: Optional[str]) -> bool:
    return cipher_kind in SUPPORTED_CIPHERS


def base64_decode_text(text: Optional[str]) -> Optional[str]:
    """Decode Base64 into UTF-8 text; malformed input comes back unchanged."""
    if text is None:
        return None
    try:
        raw = base64.b64decode(text, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError):
        return text


def rot13(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return text.translate(_ROT13_TABLE)


def decode(cipher_kind: str, text: Optional[str]) -> Optional[str]:
    if cipher_kind == BASE64:
        return base64_decode_text(text)
    if cipher_kind == ROT13:
        return rot13(text)
    raise UnknownCipherError(f"unsupported cipher: {cipher_kind!r}")
