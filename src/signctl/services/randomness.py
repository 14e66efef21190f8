"""RandomService — secure random bytes and integers for CLI and adapters."""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING

from signctl.domain.errors import CryptoError
from signctl.infrastructure.entropy import SecureRandom
from signctl.services.base import BaseService
from signctl.services.result import ServiceResult
from signctl.services.telemetry import note, stage, traced

if TYPE_CHECKING:
    from signctl.config.settings import SignSettings

ENCODERS = {
    "hex": bytes.hex,
    "base64": lambda data: base64.b64encode(data).decode("ascii"),
}


class RandomService(BaseService):
    """Draw secure random values, with defaults and limits from ``[random]`` config."""

    def __init__(self, settings: SignSettings, rng: SecureRandom | None = None) -> None:
        super().__init__(settings)
        self._rng = rng or SecureRandom()

    @traced
    def random_bytes(self, n: int | None = None, *, encoding: str | None = None) -> ServiceResult:
        """Draw *n* bytes (default ``random.default_bytes``) and encode them."""
        op = "random_bytes"
        cfg = self._settings.random
        count = cfg.default_bytes if n is None else n
        enc = encoding or cfg.encoding
        encoder = ENCODERS.get(enc)
        if encoder is None:
            return ServiceResult.failure(
                op, "INVALID_ARGUMENT", f"Unknown encoding: {enc!r}", choices=sorted(ENCODERS)
            )
        if isinstance(count, int) and count > cfg.max_bytes:
            return ServiceResult.failure(
                op,
                "INVALID_ARGUMENT",
                f"Byte count {count} exceeds the limit of {cfg.max_bytes}",
                max_bytes=cfg.max_bytes,
            )
        try:
            with stage("entropy.read"):
                data = self._rng.random_bytes(count)
                note(bytes=count)
        except (TypeError, ValueError) as exc:
            return ServiceResult.failure(op, "INVALID_ARGUMENT", str(exc))
        except CryptoError as exc:
            return self._fault(op, exc)
        return ServiceResult.success(op, bytes=encoder(data), length=count, encoding=enc)

    @traced
    def random_int(self, min_value: int, max_value: int) -> ServiceResult:
        """Draw a uniform integer from ``[min_value, max_value]``."""
        op = "random_int"
        try:
            with stage("entropy.sample"):
                draw = self._rng.draw_int(min_value, max_value)
                note(draws=draw.draws, rejected=draw.draws - 1, bits=draw.bits, width=draw.width)
        except CryptoError as exc:
            return self._fault(op, exc)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_ARGUMENT", str(exc))
        return ServiceResult.success(op, value=draw.value, min=min_value, max=max_value)
