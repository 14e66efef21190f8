"""BaseService — shared foundation for signctl services.

Every service receives the frozen :class:`SignSettings` at construction.
Domain faults raised by the primitives are converted into failed
ServiceResults here, so adapters only ever deal with one return type.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from signctl.domain.errors import (
    ConfigurationError,
    CryptoError,
    DegenerateRangeError,
    RandomnessUnavailableError,
)
from signctl.services.result import ServiceResult

if TYPE_CHECKING:
    from signctl.config.settings import SignSettings

logger = logging.getLogger(__name__)

ERROR_CODES: dict[type[CryptoError], str] = {
    ConfigurationError: "CONFIGURATION_ERROR",
    RandomnessUnavailableError: "RANDOMNESS_UNAVAILABLE",
    DegenerateRangeError: "DEGENERATE_RANGE",
}


class BaseService:
    """Base for service-layer classes.

    Usage::

        class SigningService(BaseService):
            def sign(self, value: bytes) -> ServiceResult:
                try:
                    ...
                except CryptoError as exc:
                    return self._fault(op, exc)
    """

    def __init__(self, settings: SignSettings) -> None:
        self._settings = settings

    @staticmethod
    def _fault(op: str, exc: CryptoError) -> ServiceResult:
        """Convert a domain fault into a failed result."""
        code = ERROR_CODES.get(type(exc), "CRYPTO_ERROR")
        logger.warning("%s failed: %s", op, code)
        return ServiceResult.failure(op, code, str(exc))
