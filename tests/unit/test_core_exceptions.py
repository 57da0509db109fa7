"""Tests for the ironseal error taxonomy."""

import pytest

from ironseal.core.exceptions import (
    CryptoProviderError,
    DecryptionError,
    FormatError,
    IntegrityError,
    IronError,
    PasswordLookupError,
    UnknownAlgorithmError,
)


@pytest.mark.parametrize(
    "exc_type",
    [FormatError, PasswordLookupError, IntegrityError, CryptoProviderError, DecryptionError, UnknownAlgorithmError],
)
def test_all_errors_share_a_base(exc_type):
    assert issubclass(exc_type, IronError)


def test_format_error_carries_token():
    err = FormatError("a*b", "Wrong number of token parts")
    assert err.token == "a*b"
    assert str(err) == "Wrong number of token parts"


def test_integrity_error_carries_token_and_mac():
    err = IntegrityError("tok", b"\x01\x02")
    assert err.token == "tok"
    assert err.hmac == b"\x01\x02"
    assert str(err) == "Invalid integrity signature"


def test_decryption_error_is_provider_error():
    assert issubclass(DecryptionError, CryptoProviderError)
