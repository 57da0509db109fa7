"""Tests for algorithm and option descriptors."""

import dataclasses

import pytest

from ironseal.core.exceptions import UnknownAlgorithmError
from ironseal.core.models import (
    AES_128_CBC,
    AES_256_CBC,
    ALGORITHMS,
    DEFAULT_ENCRYPTION_OPTIONS,
    DEFAULT_INTEGRITY_OPTIONS,
    DELIMITER,
    MAC_PREFIX,
    SHA_256,
    Algorithm,
    Options,
    get_algorithm,
)


def test_constants():
    assert MAC_PREFIX == "Fe26.1"
    assert DELIMITER == "*"


def test_predefined_algorithms():
    assert (AES_128_CBC.key_bytes, AES_128_CBC.iv_bytes) == (16, 16)
    assert (AES_256_CBC.key_bytes, AES_256_CBC.iv_bytes) == (32, 16)
    assert (SHA_256.key_bytes, SHA_256.iv_bytes) == (32, 0)


def test_byte_sizes_round_up():
    odd = Algorithm("odd", "odd", 9, 7)
    assert odd.key_bytes == 2
    assert odd.iv_bytes == 1


def test_default_options():
    assert DEFAULT_ENCRYPTION_OPTIONS == Options(256, AES_256_CBC, 1)
    assert DEFAULT_INTEGRITY_OPTIONS == Options(256, SHA_256, 1)


def test_descriptors_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        AES_256_CBC.key_bits = 128
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_ENCRYPTION_OPTIONS.iterations = 1000


@pytest.mark.parametrize("salt_bits, iterations", [(0, 1), (256, 0), (-8, 1), (256, -1)])
def test_options_validation(salt_bits, iterations):
    with pytest.raises(ValueError):
        Options(salt_bits, AES_256_CBC, iterations)


def test_get_algorithm():
    assert get_algorithm("aes-128-cbc") is AES_128_CBC
    assert set(ALGORITHMS) == {"aes-128-cbc", "aes-256-cbc", "sha256"}


def test_get_algorithm_unknown():
    with pytest.raises(UnknownAlgorithmError):
        get_algorithm("rot13")
    with pytest.raises(KeyError):
        get_algorithm("rot13")
