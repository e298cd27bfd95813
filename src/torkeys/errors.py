"""
Exceptions raised by torkeys.
"""

from __future__ import annotations


class TorKeysError(Exception):
    """Base exception for torkeys errors."""

    pass


class EntropyUnavailableError(TorKeysError):
    """The secure random source could not supply key material."""

    pass


class InvalidKeyLengthError(TorKeysError, ValueError):
    """A key of the wrong length was passed in."""

    def __init__(self, expected: int, actual: int, what: str = "public key"):
        self.expected = expected
        self.actual = actual
        self.what = what
        super().__init__(f"{what} must be exactly {expected} bytes, got {actual}")


class InvalidAddressError(TorKeysError, ValueError):
    """Malformed or corrupted onion address."""

    pass


class KeyMismatchError(TorKeysError, ValueError):
    """Key halves or a stored address do not belong to the same public key."""

    pass
