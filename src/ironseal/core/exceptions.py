"""
Exceptions for ironseal
IronError is the general catcher; everything raised by seal/unseal derives from it
"""


class IronError(Exception):
    # general container for errors
    pass


class FormatError(IronError):
    # raised when a token does not parse (field count, unknown prefix)

    def __init__(self, token: str, message: str = "Malformed token"):
        super().__init__(message)
        self.token = token


class PasswordLookupError(IronError, LookupError):
    # raised when the password id is missing from the token or the rotation table
    pass


class IntegrityError(IronError):
    # raised on an HMAC mismatch; hmac is the decoded value taken from the token

    def __init__(self, token: str, hmac: bytes = b"", message: str = "Invalid integrity signature"):
        super().__init__(message)
        self.token = token
        self.hmac = hmac


class CryptoProviderError(IronError):
    # raised when the cipher / kdf / hmac backend fails
    pass


class DecryptionError(CryptoProviderError):
    # raised when a verified token still fails to decrypt
    pass


class UnknownAlgorithmError(IronError, KeyError):
    # raised when an algorithm name is not registered
    pass
