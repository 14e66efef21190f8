"""Signed-string wire format.

``SignedString = HEX(HMAC-SHA256(value, secret)) || "-" || BASE64(value)``

Hex is lowercase, base64 uses the standard alphabet with padding.  The
standard alphabet never yields ``-``, so the first separator is always
the split point.
"""

from __future__ import annotations

import base64
import binascii

SEPARATOR = "-"


def encode_payload(value: bytes) -> str:
    """Standard base64 with padding, as ASCII text."""
    return base64.b64encode(value).decode("ascii")


def decode_payload(payload: str) -> bytes | None:
    """Strictly decode a base64 payload, returning None when it is not valid.

    Rejects characters outside the standard alphabet, bad padding, and
    non-canonical encodings (nonzero trailing bits), so each payload
    string maps to exactly one byte string.
    """
    try:
        value = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None
    if encode_payload(value) != payload:
        return None
    return value


def pack(signature: str, value: bytes) -> str:
    """Join a hex signature and a raw value into a signed string."""
    return f"{signature}{SEPARATOR}{encode_payload(value)}"


def split_signed_string(signed: str) -> tuple[str, str] | None:
    """Split on the first separator into ``(signature, payload)``.

    Examples:
        >>> split_signed_string("abc-aGk=")
        ('abc', 'aGk=')
        >>> split_signed_string("no separator") is None
        True
    """
    parts = signed.split(SEPARATOR, 1)
    if len(parts) != 2:
        return None
    return parts[0], parts[1]
