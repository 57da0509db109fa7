"""
Algorithm and option descriptors for sealing, plus the format constants
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

from .exceptions import UnknownAlgorithmError


MAC_FORMAT_VERSION = "1"
MAC_PREFIX = "Fe26." + MAC_FORMAT_VERSION
DELIMITER = "*"


@dataclass(frozen=True)
class Algorithm:
    # name is the symbolic id, transformation is what the crypto backend understands
    name: str
    transformation: str
    key_bits: int
    iv_bits: int

    @property
    def key_bytes(self) -> int:
        return math.ceil(self.key_bits / 8)

    @property
    def iv_bytes(self) -> int:
        return math.ceil(self.iv_bits / 8)


@dataclass(frozen=True)
class Options:
    """Salt size, target algorithm and PBKDF2 iteration count for one derived key."""

    salt_bits: int
    algorithm: Algorithm
    iterations: int

    def __post_init__(self):
        if self.salt_bits <= 0:
            raise ValueError(f"salt_bits must be positive, got {self.salt_bits}")
        if self.iterations <= 0:
            raise ValueError(f"iterations must be positive, got {self.iterations}")


AES_128_CBC = Algorithm("aes-128-cbc", "AES-128-CBC", 128, 128)
AES_256_CBC = Algorithm("aes-256-cbc", "AES-256-CBC", 256, 128)

# HMAC only, the key size has nothing to do with a block size
SHA_256 = Algorithm("sha256", "sha256", 256, 0)

DEFAULT_ENCRYPTION_OPTIONS = Options(256, AES_256_CBC, 1)
DEFAULT_INTEGRITY_OPTIONS = Options(256, SHA_256, 1)

ALGORITHMS: Dict[str, Algorithm] = {
    alg.name: alg for alg in (AES_128_CBC, AES_256_CBC, SHA_256)
}


def get_algorithm(name: str) -> Algorithm:
    """Look up a predefined algorithm by its symbolic name."""
    try:
        return ALGORITHMS[name]
    except KeyError:
        raise UnknownAlgorithmError(f"Unknown algorithm: {name}") from None
