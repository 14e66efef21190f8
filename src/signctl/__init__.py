"""signctl — keyed signatures, signed strings, and secure randomness."""

from signctl.domain.errors import (
    ConfigurationError,
    CryptoError,
    DegenerateRangeError,
    RandomnessUnavailableError,
)
from signctl.domain.signing import SignatureService, secure_compare
from signctl.infrastructure.entropy import SecureRandom, random_bytes, random_int

__version__ = "0.3.0"

__all__ = [
    "ConfigurationError",
    "CryptoError",
    "DegenerateRangeError",
    "RandomnessUnavailableError",
    "SecureRandom",
    "SignatureService",
    "__version__",
    "random_bytes",
    "random_int",
    "secure_compare",
]
