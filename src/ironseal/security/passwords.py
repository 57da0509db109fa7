"""Password sources for unsealing: one password, or a rotation table keyed by password id.

Tokens record the id of the password they were sealed with. With a rotation
table an old token keeps unsealing as long as its id/password pair stays in the
table; a single password is used no matter which id the token carries.
"""
from __future__ import annotations

from typing import Dict, Mapping, Optional, Union

from ironseal.core.exceptions import PasswordLookupError

PasswordLike = Union[str, bytes, bytearray]


def _to_bytes(password: PasswordLike) -> bytes:
    # empty passwords are valid PBKDF2 input
    if isinstance(password, str):
        return password.encode("utf-8")
    if isinstance(password, (bytes, bytearray)):
        return bytes(password)
    raise TypeError(f"Password must be str or bytes, not {type(password).__name__}")


class PasswordSource:
    """Either a single password or a table of id -> password."""

    __slots__ = ("_password", "_table")

    def __init__(self, password: Optional[bytes] = None, table: Optional[Dict[str, bytes]] = None):
        if (password is None) == (table is None):
            raise ValueError("PasswordSource needs exactly one of password or table")
        self._password = password
        self._table = table

    @classmethod
    def single(cls, password: PasswordLike) -> "PasswordSource":
        return cls(password=_to_bytes(password))

    @classmethod
    def rotation(cls, table: Mapping[str, PasswordLike]) -> "PasswordSource":
        return cls(table={str(pid): _to_bytes(pw) for pid, pw in table.items()})

    @classmethod
    def coerce(cls, value: Union["PasswordSource", Mapping[str, PasswordLike], PasswordLike]) -> "PasswordSource":
        """Wrap whatever the caller handed to unseal."""
        if isinstance(value, PasswordSource):
            return value
        if isinstance(value, Mapping):
            return cls.rotation(value)
        return cls.single(value)

    @property
    def is_rotation(self) -> bool:
        return self._table is not None

    def resolve(self, password_id: str) -> bytes:
        """Return the password to use for a token carrying ``password_id``."""
        if self._table is None:
            return self._password
        if not password_id:
            raise PasswordLookupError("Using a password table for unsealing requires a password ID in the token")
        try:
            return self._table[password_id]
        except KeyError:
            raise PasswordLookupError(f"No password found in password table for password ID {password_id}") from None

    def __repr__(self) -> str:
        # never show the secrets
        if self._table is None:
            return "PasswordSource.single(<hidden>)"
        return f"PasswordSource.rotation(ids={sorted(self._table)!r})"
