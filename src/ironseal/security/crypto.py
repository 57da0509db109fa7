"""Seal and unseal Fe26 ("iron") tokens.

Token layout (text, seven '*'-delimited fields):
- prefix: 'Fe26.1'
- password id: may be empty
- encryption salt: lowercase hex
- IV: base64url, no padding
- ciphertext: base64url, no padding (AES-CBC, PKCS7 padded)
- integrity salt: lowercase hex
- HMAC: base64url, no padding, computed over the first five fields joined by '*'

Every field except the HMAC is readable by anyone holding the token. The
password never appears; both keys are derived from it with PBKDF2, each with
its own salt. unseal always checks the HMAC before it touches the ciphertext.
"""
import logging
from typing import Mapping, Optional, Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ironseal.core.encoding import b64url_decode, b64url_encode, constant_time_equal
from ironseal.core.exceptions import (
    CryptoProviderError,
    DecryptionError,
    FormatError,
    IntegrityError,
)
from ironseal.core.models import (
    DEFAULT_ENCRYPTION_OPTIONS,
    DEFAULT_INTEGRITY_OPTIONS,
    DELIMITER,
    MAC_PREFIX,
    Algorithm,
    Options,
)
from .kdf import calculate_hmac, derive_key, generate_iv, generate_salt
from .passwords import PasswordLike, PasswordSource

logger = logging.getLogger(__name__)

TOKEN_PARTS = 7

# transformations the cipher backend can run
_CBC_CIPHERS = {
    "AES-128-CBC": 16,
    "AES-256-CBC": 32,
}


def _cipher(algorithm: Algorithm, key: bytes, iv: bytes) -> Cipher:
    expected = _CBC_CIPHERS.get(algorithm.transformation)
    if expected is None:
        raise CryptoProviderError(f"Unsupported cipher: {algorithm.transformation}")
    if len(key) != expected:
        raise CryptoProviderError(f"{algorithm.transformation} needs a {expected}-byte key, got {len(key)}")
    return Cipher(algorithms.AES(key), modes.CBC(iv))


def _encrypt(algorithm: Algorithm, key: bytes, iv: bytes, data: bytes) -> bytes:
    try:
        cipher = _cipher(algorithm, key, iv)
        padder = padding.PKCS7(algorithm.iv_bits).padder()
        padded = padder.update(data) + padder.finalize()
        encryptor = cipher.encryptor()
        return encryptor.update(padded) + encryptor.finalize()
    except ValueError as e:
        raise CryptoProviderError(f"{algorithm.transformation} encryption failed: {e}") from e


def _decrypt(algorithm: Algorithm, key: bytes, iv: bytes, data: bytes) -> bytes:
    cipher = _cipher(algorithm, key, iv)
    decryptor = cipher.decryptor()
    padded = decryptor.update(data) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithm.iv_bits).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


def seal(
    data: Union[bytes, str],
    password_id: Optional[str],
    password: Union[PasswordSource, Mapping[str, PasswordLike], PasswordLike],
    enc_opts: Options = DEFAULT_ENCRYPTION_OPTIONS,
    int_opts: Options = DEFAULT_INTEGRITY_OPTIONS,
) -> str:
    """Seal ``data`` into a token.

    Args:
        data: payload; str is encoded as UTF-8
        password_id: id stored in the token for password rotation, None or "" for none
        password: the password; a rotation table is accepted too, in which case
            the entry for ``password_id`` is used
        enc_opts: options for the encryption key
        int_opts: options for the integrity key

    Returns:
        the token as a str
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    password_id = password_id or ""
    if DELIMITER in password_id:
        raise ValueError(f"Password ID must not contain {DELIMITER!r}")
    secret = PasswordSource.coerce(password).resolve(password_id)

    encryption_salt = generate_salt(enc_opts.salt_bits)
    encryption_iv = generate_iv(enc_opts.algorithm.iv_bits)
    key = derive_key(secret, encryption_salt, enc_opts.algorithm, enc_opts.iterations)
    encrypted = _encrypt(enc_opts.algorithm, key, encryption_iv, data)

    base_string = DELIMITER.join(
        [
            MAC_PREFIX,
            password_id,
            encryption_salt,
            b64url_encode(encryption_iv),
            b64url_encode(encrypted),
        ]
    )

    integrity_salt = generate_salt(int_opts.salt_bits)
    mac = calculate_hmac(secret, base_string, integrity_salt, int_opts.algorithm, int_opts.iterations)

    logger.debug("sealed %d bytes with password id %r", len(data), password_id)
    return DELIMITER.join([base_string, integrity_salt, b64url_encode(mac)])


def unseal(
    token: Union[str, bytes],
    password: Union[PasswordSource, Mapping[str, PasswordLike], PasswordLike],
    enc_opts: Options = DEFAULT_ENCRYPTION_OPTIONS,
    int_opts: Options = DEFAULT_INTEGRITY_OPTIONS,
) -> bytes:
    """Verify and decrypt a token produced by :func:`seal`.

    ``password`` is a single password or a mapping of password id -> password.
    The options must be the ones used for sealing; a mismatch shows up as an
    IntegrityError.

    Raises:
        FormatError: not UTF-8, wrong number of fields or unknown prefix
        PasswordLookupError: the token's password id cannot be resolved
        IntegrityError: HMAC mismatch; nothing is decrypted
        DecryptionError: the token verified but could not be decrypted
    """
    if isinstance(token, (bytes, bytearray)):
        try:
            token = bytes(token).decode("utf-8")
        except UnicodeDecodeError:
            raise FormatError(bytes(token).decode("utf-8", "replace"), "Token is not valid UTF-8") from None

    parts = token.split(DELIMITER)
    if len(parts) != TOKEN_PARTS:
        raise FormatError(token, f"Wrong number of token parts; split returned {len(parts)} parts")

    prefix, password_id, encryption_salt, iv_b64, encrypted_b64, integrity_salt, mac_b64 = parts
    base_string = DELIMITER.join(parts[:5])

    if prefix != MAC_PREFIX:
        raise FormatError(token, f"Incorrect prefix {prefix}")

    secret = PasswordSource.coerce(password).resolve(password_id)

    # a field that does not decode, or decodes but is not how seal would have
    # written it, can never match
    try:
        mac = b64url_decode(mac_b64)
        canonical = b64url_encode(mac) == mac_b64.rstrip("=")
    except ValueError:
        mac, canonical = b"", False

    expected = calculate_hmac(secret, base_string, integrity_salt, int_opts.algorithm, int_opts.iterations)
    matches = constant_time_equal(mac, expected)
    if not (matches and canonical):
        logger.warning("integrity check failed for token with password id %r", password_id)
        raise IntegrityError(token, mac, f"Invalid integrity signature {mac_b64}")

    try:
        encryption_iv = b64url_decode(iv_b64)
        encrypted = b64url_decode(encrypted_b64)
        key = derive_key(secret, encryption_salt, enc_opts.algorithm, enc_opts.iterations)
        decrypted = _decrypt(enc_opts.algorithm, key, encryption_iv, encrypted)
    except ValueError:
        logger.warning("decryption failed for verified token with password id %r", password_id)
        raise DecryptionError("Unable to decrypt token") from None

    logger.debug("unsealed %d bytes with password id %r", len(decrypted), password_id)
    return decrypted
