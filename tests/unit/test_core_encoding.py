"""Tests for ironseal.core.encoding."""

import base64

import pytest

from ironseal.core import encoding


def test_b64url_encode_strips_padding() -> None:
    """Output never carries '=' and uses the URL-safe alphabet."""
    data = b"\xfb\xff\xfe"  # encodes to '+//+' in the standard alphabet
    assert encoding.b64url_encode(data) == "-__-"
    assert encoding.b64url_encode(b"a") == "YQ"
    assert encoding.b64url_encode(b"") == ""


@pytest.mark.parametrize("payload", [b"a", b"ab", b"abc", b"abcd", bytes(range(256))])
def test_b64url_decode_tolerates_missing_padding(payload: bytes) -> None:
    padded = base64.urlsafe_b64encode(payload).decode("ascii")
    assert encoding.b64url_decode(padded.rstrip("=")) == payload
    assert encoding.b64url_decode(padded) == payload


def test_b64url_decode_rejects_impossible_length() -> None:
    """A single leftover character can not encode a byte."""
    with pytest.raises(ValueError):
        encoding.b64url_decode("abcde")


def test_constant_time_equal_same() -> None:
    assert encoding.constant_time_equal(b"", b"")
    assert encoding.constant_time_equal(b"secret-mac", b"secret-mac")


def test_constant_time_equal_content_mismatch() -> None:
    assert not encoding.constant_time_equal(b"secret-mac", b"secret-maC")
    assert not encoding.constant_time_equal(b"\x00" * 32, b"\x00" * 31 + b"\x01")


def test_constant_time_equal_length_mismatch() -> None:
    """Prefixes and empty operands are never equal to the longer value."""
    assert not encoding.constant_time_equal(b"abc", b"abcd")
    assert not encoding.constant_time_equal(b"abcd", b"abc")
    assert not encoding.constant_time_equal(b"", b"\x00")
    assert not encoding.constant_time_equal(b"\x00", b"")


def test_constant_time_equal_visits_every_position() -> None:
    """The comparison touches the full length of the longer operand."""

    class CountingBytes(bytes):
        reads = 0

        def __getitem__(self, index):
            CountingBytes.reads += 1
            return super().__getitem__(index)

    lhs = CountingBytes(b"x" * 10)
    assert not encoding.constant_time_equal(lhs, b"y" * 4)
    assert CountingBytes.reads == 10
