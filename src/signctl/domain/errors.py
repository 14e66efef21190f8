"""Error taxonomy for signing and randomness primitives.

Callers can catch :class:`CryptoError` to handle every fault raised by
this package, or the concrete subclasses for finer control.

INVARIANT: Messages never include the secret or the signed payload.
Malformed or forged signed strings are not errors; they surface as
``False`` / ``None`` return values.
"""

from __future__ import annotations


class CryptoError(Exception):
    """Base class for all signctl faults."""


class ConfigurationError(CryptoError):
    """The signature secret is missing or shorter than the minimum length.

    Fatal: no signing operation can proceed until an operator fixes the
    configuration. Not retryable.
    """


class RandomnessUnavailableError(CryptoError):
    """The secure entropy source failed to deliver the requested bytes."""


class DegenerateRangeError(CryptoError, ValueError):
    """A bounded random integer was requested with ``min == max``."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(
            f"Cannot generate a secure random number, min and max are both {value}"
        )
