"""Keyed signatures and self-contained signed strings.

Signatures are HMAC-SHA256 digests rendered as 64 lowercase hex
characters.  A signed string couples the signature to its base64 payload
(see :mod:`signctl.domain.wire`) so it can be handed to untrusted parties
and verified on return.

INVARIANT: The secret is at least ``MIN_SECRET_LENGTH`` bytes.  Checked on
every signing call, before any cryptographic work.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

from signctl.domain.errors import ConfigurationError
from signctl.domain.wire import decode_payload, pack, split_signed_string

logger = logging.getLogger(__name__)

MIN_SECRET_LENGTH = 15

BytesLike = bytes | bytearray | memoryview


def _as_bytes(value: str | BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def secure_compare(a: str | BytesLike, b: str | BytesLike) -> bool:
    """Compare two values in constant time.

    Text is compared on its UTF-8 encoding, so ``str`` and ``bytes``
    arguments may be mixed.
    """
    return hmac.compare_digest(_as_bytes(a), _as_bytes(b))


class SignatureService:
    """Sign values and encode/decode signed strings with an injected secret.

    Stateless apart from the secret, so one instance can be shared freely
    between threads.

    Usage::

        signer = SignatureService(settings.signature.secret_bytes())
        token = signer.create_signed_string(b"user:42")
        signer.get_value_from_signed_string(token)  # b"user:42"
    """

    __slots__ = ("_secret",)

    def __init__(self, secret: str | BytesLike | None) -> None:
        self._secret = b"" if secret is None else _as_bytes(secret)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(secret=<{len(self._secret)} bytes>)"

    @property
    def secret_length(self) -> int:
        """Byte length of the configured secret."""
        return len(self._secret)

    def check(self) -> None:
        """Raise :class:`ConfigurationError` unless the secret is usable."""
        if not self._secret:
            raise ConfigurationError("Signature secret is not configured, aborting.")
        if len(self._secret) < MIN_SECRET_LENGTH:
            raise ConfigurationError(
                f"Signature secret is too short ({len(self._secret)} bytes, "
                f"minimum {MIN_SECRET_LENGTH}), aborting."
            )

    def get_signature(self, value: str | BytesLike) -> str:
        """Return the lowercase hex HMAC-SHA256 of *value*."""
        self.check()
        return hmac.new(self._secret, _as_bytes(value), hashlib.sha256).hexdigest()

    def create_signed_string(self, value: str | BytesLike) -> str:
        """Return ``signature-base64(value)`` for *value*."""
        raw = _as_bytes(value)
        return pack(self.get_signature(raw), raw)

    def validate_signed_string(self, signed: str) -> bool:
        """Whether *signed* carries a valid signature over its payload.

        Malformed input yields False.  A misconfigured secret raises
        :class:`ConfigurationError` instead.
        """
        return self._unpack(signed) is not None

    def get_value_from_signed_string(self, signed: str) -> bytes | None:
        """Return the payload of *signed*, or None if it is not properly signed."""
        return self._unpack(signed)

    def _unpack(self, signed: str) -> bytes | None:
        """Validate *signed* and return the exact bytes that were verified."""
        if not isinstance(signed, str):
            return None
        parts = split_signed_string(signed)
        if parts is None:
            logger.debug("Rejected signed string: missing separator")
            return None
        signature, payload = parts
        if not signature.isascii():
            # Hex digests are ASCII; this one can never match.
            signature = ""

        value = decode_payload(payload)
        # An undecodable payload still goes through the comparison below.
        candidate = b"" if value is None else value

        expected = self.get_signature(candidate)
        if not secure_compare(signature, expected) or value is None:
            logger.debug("Rejected signed string: signature mismatch")
            return None
        return value
