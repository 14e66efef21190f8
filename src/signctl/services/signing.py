"""SigningService — signatures and signed strings for CLI and adapters."""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING

from signctl.config.discovery import secret_exposure
from signctl.domain.errors import CryptoError
from signctl.domain.signing import MIN_SECRET_LENGTH, SignatureService
from signctl.services.base import BaseService
from signctl.services.result import ServiceResult
from signctl.services.telemetry import note, stage, traced

if TYPE_CHECKING:
    from signctl.config.settings import SignSettings

logger = logging.getLogger(__name__)


def build_signer(settings: SignSettings) -> SignatureService:
    """Create a SignatureService from the configured secret."""
    return SignatureService(settings.signature.secret_bytes())


def describe_value(value: bytes) -> dict[str, str | int]:
    """Render raw bytes for output: UTF-8 text when possible, else base64."""
    try:
        return {"value": value.decode("utf-8"), "encoding": "utf-8", "length": len(value)}
    except UnicodeDecodeError:
        return {
            "value": base64.b64encode(value).decode("ascii"),
            "encoding": "base64",
            "length": len(value),
        }


class SigningService(BaseService):
    """Sign, verify, and unpack values with the configured secret."""

    def __init__(self, settings: SignSettings, signer: SignatureService | None = None) -> None:
        super().__init__(settings)
        self._signer = signer or build_signer(settings)

    @traced
    def check_secret(self) -> ServiceResult:
        """Validate the configured secret without signing anything.

        A config file that stores the secret with group or other access
        passes, but with a warning.
        """
        op = "check_secret"
        try:
            self._signer.check()
        except CryptoError as exc:
            return self._fault(op, exc)
        warnings: list[str] = []
        if self._settings.config_path is not None:
            exposure = secret_exposure(self._settings.config_path)
            if exposure is not None:
                warnings.append(exposure)
        return ServiceResult(
            ok=True,
            op=op,
            data={"secret_length": self._signer.secret_length, "min_length": MIN_SECRET_LENGTH},
            warnings=warnings,
        )

    @traced
    def signature(self, value: bytes) -> ServiceResult:
        """Hex HMAC-SHA256 signature of *value*."""
        op = "signature"
        note(bytes=len(value))
        try:
            with stage("hmac.sign"):
                sig = self._signer.get_signature(value)
        except CryptoError as exc:
            return self._fault(op, exc)
        return ServiceResult.success(op, signature=sig, length=len(value))

    @traced
    def sign(self, value: bytes) -> ServiceResult:
        """Signed string for *value*."""
        op = "sign"
        note(bytes=len(value))
        try:
            with stage("hmac.sign"):
                signed = self._signer.create_signed_string(value)
        except CryptoError as exc:
            return self._fault(op, exc)
        return ServiceResult.success(op, signed=signed, length=len(value))

    @traced
    def verify(self, signed: str) -> ServiceResult:
        """Check *signed*; a bad signature is a failed result, not an exception."""
        op = "verify"
        try:
            with stage("hmac.verify"):
                valid = self._signer.validate_signed_string(signed)
        except CryptoError as exc:
            return self._fault(op, exc)
        if not valid:
            logger.info("verify: signed string rejected")
            return ServiceResult.failure(
                op,
                "INVALID_SIGNED_STRING",
                "Signed string is malformed or its signature does not match",
                valid=False,
            )
        return ServiceResult.success(op, valid=True)

    @traced
    def unsign(self, signed: str) -> ServiceResult:
        """Return the payload of *signed* after verifying it."""
        op = "unsign"
        try:
            with stage("hmac.verify"):
                value = self._signer.get_value_from_signed_string(signed)
        except CryptoError as exc:
            return self._fault(op, exc)
        if value is None:
            logger.info("unsign: signed string rejected")
            return ServiceResult.failure(
                op,
                "INVALID_SIGNED_STRING",
                "Signed string is malformed or its signature does not match",
            )
        return ServiceResult.success(op, **describe_value(value))
