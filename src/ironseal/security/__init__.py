"""Security helpers: Fe26 token sealing for ironseal.

This package provides:
- PBKDF2 key derivation with per-key random salts
- AES-CBC encryption with an HMAC-SHA256 integrity check over the token
- password rotation through password ids embedded in the token

seal() and unseal() are the whole public surface; the rest is exported for
callers that need to build or inspect tokens piecewise.
"""

from .kdf import generate_salt, generate_iv, derive_key, calculate_hmac
from .passwords import PasswordSource
from .crypto import seal, unseal

__all__ = [
    "generate_salt",
    "generate_iv",
    "derive_key",
    "calculate_hmac",
    "PasswordSource",
    "seal",
    "unseal",
]
