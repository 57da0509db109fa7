""" Utility for token field encoding and comparison. """

import base64


# out-of-range reads in constant_time_equal; distinct so they never cancel out
_LHS_SENTINEL = 0x100
_RHS_SENTINEL = 0x200


def b64url_encode(data: bytes) -> str:
    # URL-safe base64 with the '=' padding removed
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(text: str) -> bytes:
    """Decode URL-safe base64, restoring any stripped '=' padding first."""
    text = text.rstrip("=")
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def constant_time_equal(lhs: bytes, rhs: bytes) -> bool:
    """Compare two byte strings without exiting early.

    The loop always runs over the longer operand. Missing positions read as
    fixed sentinels, and a length mismatch is folded into the accumulator, so
    the result is only decided once every position has been visited.
    """
    lhs_len = len(lhs)
    rhs_len = len(rhs)
    diff = lhs_len ^ rhs_len
    for i in range(max(lhs_len, rhs_len)):
        a = lhs[i] if i < lhs_len else _LHS_SENTINEL
        b = rhs[i] if i < rhs_len else _RHS_SENTINEL
        diff |= a ^ b
    return diff == 0
