"""Cryptographically secure random bytes and bounded integers.

All entropy comes from a single source chosen at construction, the OS
CSPRNG (:func:`os.urandom`) by default.  There is no fallback: a failing
source raises :class:`RandomnessUnavailableError`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import NamedTuple

from signctl.domain.errors import DegenerateRangeError, RandomnessUnavailableError

logger = logging.getLogger(__name__)

EntropySource = Callable[[int], bytes]


class IntDraw(NamedTuple):
    """A bounded integer together with the sampling work behind it."""

    value: int
    draws: int
    bits: int
    width: int  # bytes per draw


def _check_count(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"byte count must be int, got {type(n).__name__}")
    if n < 0:
        raise ValueError(f"byte count must be non-negative, got {n}")


class SecureRandom:
    """Secure random generator over an injected entropy source.

    Thread safety is delegated to the source; :func:`os.urandom` is safe
    to call concurrently.
    """

    __slots__ = ("_source",)

    def __init__(self, source: EntropySource = os.urandom) -> None:
        self._source = source

    def random_bytes(self, n: int) -> bytes:
        """Return *n* fresh random bytes.

        Raises:
            TypeError: *n* is not an int.
            ValueError: *n* is negative.
            RandomnessUnavailableError: the source failed or returned a short read.
        """
        _check_count(n)
        try:
            data = self._source(n)
        except (OSError, NotImplementedError) as exc:
            logger.warning("Entropy source failed for %d bytes: %s", n, exc)
            raise RandomnessUnavailableError("Cannot generate a secure stream of bytes.") from exc
        if len(data) != n:
            raise RandomnessUnavailableError(
                f"Cannot generate a secure stream of bytes: requested {n}, got {len(data)}."
            )
        return bytes(data)

    def random_int(self, min_value: int, max_value: int) -> int:
        """Return an integer uniformly distributed over ``[min_value, max_value]``."""
        return self.draw_int(min_value, max_value).value

    def draw_int(self, min_value: int, max_value: int) -> IntDraw:
        """Draw a uniform integer and report how many reads it took.

        Uses rejection sampling: draw just enough bytes to cover the bit
        width of the range, mask off the excess bits, and redraw while the
        result lies above the range.  Fewer than two draws on average.

        Raises:
            DegenerateRangeError: ``min_value == max_value``.
            ValueError: ``min_value > max_value``.
            RandomnessUnavailableError: the source failed.
        """
        if min_value == max_value:
            raise DegenerateRangeError(min_value)
        if min_value > max_value:
            raise ValueError(f"min must not exceed max, got min={min_value} max={max_value}")

        span = max_value - min_value
        bits = span.bit_length()
        n_bytes = bits // 8 + 1
        mask = (1 << bits) - 1

        draws = 0
        while True:
            draws += 1
            candidate = int.from_bytes(self.random_bytes(n_bytes), "big") & mask
            if candidate <= span:
                return IntDraw(min_value + candidate, draws, bits, n_bytes)


_default = SecureRandom()


def random_bytes(n: int) -> bytes:
    """Return *n* bytes from the OS CSPRNG."""
    return _default.random_bytes(n)


def random_int(min_value: int, max_value: int) -> int:
    """Return a uniform integer in ``[min_value, max_value]`` from the OS CSPRNG."""
    return _default.random_int(min_value, max_value)
