"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, signctl.toml only contains
overrides.  A working deployment needs only ``[signature] secret``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, SecretStr, model_validator

MAX_RANDOM_BYTES = 1 << 20

# --- signctl.toml sections ---


class SignatureConfig(BaseModel):
    """[signature] section.

    The secret is held as :class:`~pydantic.SecretStr` so it never shows up
    in ``repr``, logs, or ``model_dump_json`` output.
    """

    model_config = {"frozen": True}

    secret: SecretStr | None = None

    def secret_bytes(self) -> bytes:
        """The configured secret as UTF-8 bytes (empty if unset)."""
        if self.secret is None:
            return b""
        return self.secret.get_secret_value().encode("utf-8")


class RandomConfig(BaseModel):
    """[random] section.

    ``max_bytes`` caps a single ``random bytes`` request so an oversized
    count is refused before any memory is allocated.
    """

    model_config = {"frozen": True}

    default_bytes: int = Field(default=32, ge=0)
    max_bytes: int = Field(default=MAX_RANDOM_BYTES, ge=1)
    encoding: Literal["hex", "base64"] = "hex"

    @model_validator(mode="after")
    def _default_within_limit(self) -> RandomConfig:
        if self.default_bytes > self.max_bytes:
            msg = f"default_bytes ({self.default_bytes}) exceeds max_bytes ({self.max_bytes})"
            raise ValueError(msg)
        return self


class SignConfig(BaseModel):
    """Root config model mirroring signctl.toml structure."""

    model_config = {"frozen": True}

    signature: SignatureConfig = Field(default_factory=SignatureConfig)
    random: RandomConfig = Field(default_factory=RandomConfig)
