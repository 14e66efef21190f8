"""Tests for SignatureService and secure_compare."""

from __future__ import annotations

import base64
import hashlib
import hmac

import pytest

from signctl.domain.errors import ConfigurationError, CryptoError
from signctl.domain.signing import MIN_SECRET_LENGTH, SignatureService, secure_compare
from tests.conftest import TEST_SECRET


def _oracle(value: bytes, secret: str = TEST_SECRET) -> str:
    return hmac.new(secret.encode(), value, hashlib.sha256).hexdigest()


# ---------------------------------------------------------------------------
# get_signature
# ---------------------------------------------------------------------------


class TestGetSignature:
    def test_known_vector(self, signer: SignatureService) -> None:
        assert signer.get_signature(b"hello") == _oracle(b"hello")

    def test_lowercase_hex_64_chars(self, signer: SignatureService) -> None:
        sig = signer.get_signature(b"hello")
        assert len(sig) == 64
        assert sig == sig.lower()
        int(sig, 16)

    def test_deterministic(self, signer: SignatureService) -> None:
        assert signer.get_signature(b"payload") == signer.get_signature(b"payload")

    def test_secret_changes_output(self, signer: SignatureService) -> None:
        other = SignatureService("b" * 30)
        assert signer.get_signature(b"payload") != other.get_signature(b"payload")

    def test_str_is_signed_as_utf8(self, signer: SignatureService) -> None:
        assert signer.get_signature("héllo") == _oracle("héllo".encode())

    def test_accepts_bytearray_and_memoryview(self, signer: SignatureService) -> None:
        expected = _oracle(b"abc")
        assert signer.get_signature(bytearray(b"abc")) == expected
        assert signer.get_signature(memoryview(b"abc")) == expected

    def test_empty_value(self, signer: SignatureService) -> None:
        assert signer.get_signature(b"") == _oracle(b"")


class TestSecretPolicy:
    def test_short_secret_raises_on_use(self) -> None:
        svc = SignatureService("x" * (MIN_SECRET_LENGTH - 1))
        with pytest.raises(ConfigurationError, match="too short"):
            svc.get_signature(b"hello")

    def test_construction_does_not_check(self) -> None:
        SignatureService("short")

    def test_minimum_length_is_accepted(self) -> None:
        svc = SignatureService("x" * MIN_SECRET_LENGTH)
        assert len(svc.get_signature(b"hello")) == 64

    def test_missing_secret(self) -> None:
        svc = SignatureService(None)
        with pytest.raises(ConfigurationError, match="not configured"):
            svc.check()

    def test_length_measured_in_bytes(self) -> None:
        # 8 characters, 16 bytes in UTF-8.
        svc = SignatureService("é" * 8)
        assert svc.secret_length == 16
        svc.check()

    def test_every_operation_checks(self) -> None:
        svc = SignatureService("tooshort")
        signed = SignatureService(TEST_SECRET).create_signed_string(b"v")
        for call in (
            lambda: svc.get_signature(b"v"),
            lambda: svc.create_signed_string(b"v"),
            lambda: svc.validate_signed_string(signed),
            lambda: svc.get_value_from_signed_string(signed),
        ):
            with pytest.raises(ConfigurationError):
                call()

    def test_error_is_crypto_error(self) -> None:
        with pytest.raises(CryptoError):
            SignatureService("").get_signature(b"v")

    def test_message_does_not_leak_secret(self) -> None:
        secret = "hunter2-secret"
        with pytest.raises(ConfigurationError) as exc_info:
            SignatureService(secret).check()
        assert secret not in str(exc_info.value)

    def test_repr_hides_secret(self, signer: SignatureService) -> None:
        assert TEST_SECRET not in repr(signer)
        assert "30 bytes" in repr(signer)


# ---------------------------------------------------------------------------
# Signed strings
# ---------------------------------------------------------------------------


class TestCreateSignedString:
    def test_known_vector(self, signer: SignatureService) -> None:
        assert signer.create_signed_string(b"hello") == f"{_oracle(b'hello')}-aGVsbG8="

    @pytest.mark.parametrize(
        "value",
        [b"", b"hello", b"\x00\xff\xfe binary", "ünïcödé".encode(), b"a-b-c", b"x" * 4096],
    )
    def test_round_trip(self, signer: SignatureService, value: bytes) -> None:
        signed = signer.create_signed_string(value)
        assert signer.validate_signed_string(signed) is True
        assert signer.get_value_from_signed_string(signed) == value

    def test_payload_with_plus_and_slash(self, signer: SignatureService) -> None:
        value = b"\xfb\xff\xbf"
        signed = signer.create_signed_string(value)
        assert "+" in signed or "/" in signed
        assert signer.get_value_from_signed_string(signed) == value


class TestValidateSignedString:
    @pytest.mark.parametrize(
        "bad",
        [
            "",
            "no-separator-but-garbage",
            "nodash",
            "-",
            "-aGVsbG8=",
            "deadbeef-",
            "deadbeef-aGVsbG8=",
            "abc-not base64!!",
            "abc-aGVsbG8",
            "résumé-aGVsbG8=",
            "\ud800-aGVsbG8=",
            "\udcff-aGVsbG8=",
            "deadbeef-\udcff",
        ],
    )
    def test_malformed_returns_false(self, signer: SignatureService, bad: str) -> None:
        assert signer.validate_signed_string(bad) is False
        assert signer.get_value_from_signed_string(bad) is None

    def test_non_string_returns_false(self, signer: SignatureService) -> None:
        assert signer.validate_signed_string(None) is False  # type: ignore[arg-type]
        assert signer.validate_signed_string(b"abc-def") is False  # type: ignore[arg-type]

    def test_extra_separator_in_signature_part(self, signer: SignatureService) -> None:
        signed = signer.create_signed_string(b"hello")
        assert signer.validate_signed_string("x-" + signed) is False

    def test_trailing_garbage_rejected(self, signer: SignatureService) -> None:
        signed = signer.create_signed_string(b"hello")
        assert signer.validate_signed_string(signed + "-extra") is False

    def test_other_secret_rejected(self, signer: SignatureService) -> None:
        signed = SignatureService("b" * 30).create_signed_string(b"hello")
        assert signer.validate_signed_string(signed) is False

    def test_uppercase_signature_rejected(self, signer: SignatureService) -> None:
        sig, payload = signer.create_signed_string(b"hello").split("-", 1)
        assert signer.validate_signed_string(f"{sig.upper()}-{payload}") is False

    def test_invalid_payload_with_empty_value_signature(self, signer: SignatureService) -> None:
        # The signature of b"" must not validate an undecodable payload.
        forged = f"{signer.get_signature(b'')}-%%%"
        assert signer.validate_signed_string(forged) is False
        assert signer.get_value_from_signed_string(forged) is None

    def test_empty_payload_is_valid_when_signed(self, signer: SignatureService) -> None:
        signed = signer.create_signed_string(b"")
        assert signed.endswith("-")
        assert signer.get_value_from_signed_string(signed) == b""


class TestTamperDetection:
    def test_every_single_character_flip(self, signer: SignatureService) -> None:
        signed = signer.create_signed_string(b"user:42;role=admin")
        alphabet = "0123456789abcdefABCDEFghijklmnopqrstuvwxyz+/="
        for i, ch in enumerate(signed):
            if ch == "-":
                continue
            replacement = next(c for c in alphabet if c != ch)
            tampered = signed[:i] + replacement + signed[i + 1 :]
            assert signer.validate_signed_string(tampered) is False, (i, ch)

    def test_swapped_payload(self, signer: SignatureService) -> None:
        a = signer.create_signed_string(b"user:1")
        b = signer.create_signed_string(b"user:2")
        forged = a.split("-", 1)[0] + "-" + b.split("-", 1)[1]
        assert signer.get_value_from_signed_string(forged) is None


class TestSecureCompare:
    def test_equal_strings(self) -> None:
        assert secure_compare("abc", "abc") is True

    def test_unequal_strings(self) -> None:
        assert secure_compare("abc", "abd") is False

    def test_different_lengths(self) -> None:
        assert secure_compare("abc", "abcd") is False

    def test_mixed_str_and_bytes(self) -> None:
        assert secure_compare("abc", b"abc") is True

    def test_non_ascii_text(self) -> None:
        assert secure_compare("é", "é") is True
        assert secure_compare("é", "e") is False


def test_padded_payload_tamper_in_trailing_bits(signer: SignatureService) -> None:
    signed = signer.create_signed_string(b"hello")
    assert signed.endswith("aGVsbG8=")
    assert signer.validate_signed_string(signed[:-2] + "9=") is False
