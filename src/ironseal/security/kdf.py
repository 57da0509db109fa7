"""Key derivation for ironseal: salts, IVs, PBKDF2 keys and the integrity HMAC."""
import hmac
import logging
import math
import os

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ironseal.core.exceptions import CryptoProviderError
from ironseal.core.models import Algorithm

logger = logging.getLogger(__name__)


def generate_salt(nbits: int) -> str:
    """Return a random salt as a lowercase hex string of 2 * ceil(nbits / 8) chars.

    The salt goes into the token as-is.
    """
    return os.urandom(math.ceil(nbits / 8)).hex()


def generate_iv(nbits: int) -> bytes:
    """Return ceil(nbits / 8) cryptographically secure random bytes."""
    return os.urandom(math.ceil(nbits / 8))


def derive_key(
    password: bytes,
    salt: str,
    algorithm: Algorithm,
    iterations: int,
) -> bytes:
    """
    Derive a key for ``algorithm`` from a password using PBKDF2.

    The PRF is HMAC-SHA1. That is fixed by the Fe26 token format; changing it
    breaks every token sealed by other iron implementations.
    Returns ceil(algorithm.key_bits / 8) raw bytes.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    if iterations <= 0:
        raise ValueError(f"iterations must be positive, got {iterations}")

    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA1(),
            length=algorithm.key_bytes,
            salt=salt.encode("utf-8"),
            iterations=iterations,
        )
        return kdf.derive(password)
    except (ValueError, UnsupportedAlgorithm) as e:
        logger.error("PBKDF2 backend failed deriving a %d-byte key", algorithm.key_bytes)
        raise CryptoProviderError(f"Key derivation failed: {e}") from e


def calculate_hmac(
    password: bytes,
    base_string: str,
    salt: str,
    algorithm: Algorithm,
    iterations: int,
) -> bytes:
    """HMAC the UTF-8 base string with a key derived from password and salt."""
    key = derive_key(password, salt, algorithm, iterations)
    try:
        return hmac.new(key, base_string.encode("utf-8"), algorithm.transformation).digest()
    except ValueError as e:
        logger.error("HMAC backend rejected digest %r", algorithm.transformation)
        raise CryptoProviderError(f"Unsupported HMAC digest: {algorithm.transformation}") from e
