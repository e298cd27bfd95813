"""
Tor v3 onion address derivation.

    checksum = SHA3-256(".onion checksum" || public_key || version)[:2]
    address  = base32(public_key || checksum || version) + ".onion"

with version = 0x03 and the lowercase, unpadded RFC 4648 base-32 alphabet.
Note this is SHA3-256, not SHA-256.

Reference: https://spec.torproject.org/rend-spec/encoding-onion-addresses.html
"""

from __future__ import annotations

import hashlib

from torkeys.constants import (
    ADDRESS_LABEL_LENGTH,
    BASE32_ALPHABET,
    CHECKSUM_LENGTH,
    CHECKSUM_MARKER,
    ONION_SUFFIX,
    PAYLOAD_LENGTH,
    PUBLIC_KEY_LENGTH,
    VERSION_BYTE,
)
from torkeys.encoding import b32decode_lower, b32encode_lower
from torkeys.errors import InvalidAddressError, InvalidKeyLengthError


def _check_public_key(public_key: bytes) -> None:
    if len(public_key) != PUBLIC_KEY_LENGTH:
        raise InvalidKeyLengthError(PUBLIC_KEY_LENGTH, len(public_key))


def _checksum(public_key: bytes) -> bytes:
    checksum_input = CHECKSUM_MARKER + public_key + VERSION_BYTE
    return hashlib.sha3_256(checksum_input).digest()[:CHECKSUM_LENGTH]


def compute_checksum(public_key: bytes) -> bytes:
    """
    Compute the truncated 2-byte address checksum for a public key.

    Raises:
        InvalidKeyLengthError: If public_key is not 32 bytes
    """
    _check_public_key(public_key)
    return _checksum(public_key)


def derive_address(public_key: bytes) -> str:
    """
    Derive the v3 onion address for an Ed25519 public key.

    Args:
        public_key: Raw 32-byte Ed25519 public key

    Returns:
        56 lowercase base-32 characters followed by ".onion"

    Raises:
        InvalidKeyLengthError: If public_key is not 32 bytes. Checked before
            any hashing happens.
        TypeError: If public_key is not a bytes-like object
    """
    public_key = bytes(memoryview(public_key))
    _check_public_key(public_key)

    payload = public_key + _checksum(public_key) + VERSION_BYTE
    return f"{b32encode_lower(payload)}{ONION_SUFFIX}"


def decode_address(address: str) -> bytes:
    """
    Decode an onion address back into its public key.

    The ".onion" suffix is optional and case is ignored. The version byte
    and checksum are verified.

    Returns:
        The 32-byte Ed25519 public key

    Raises:
        InvalidAddressError: If the address is malformed or its checksum
            does not match
    """
    label = address.strip().lower()
    if label.endswith(ONION_SUFFIX):
        label = label[: -len(ONION_SUFFIX)]

    if len(label) != ADDRESS_LABEL_LENGTH:
        raise InvalidAddressError(
            f"Onion address must have {ADDRESS_LABEL_LENGTH} characters, got {len(label)}"
        )
    bad_chars = sorted(set(label) - set(BASE32_ALPHABET))
    if bad_chars:
        raise InvalidAddressError(f"Invalid characters in onion address: {''.join(bad_chars)}")

    try:
        payload = b32decode_lower(label)
    except ValueError as e:
        raise InvalidAddressError(str(e)) from e

    if len(payload) != PAYLOAD_LENGTH:
        raise InvalidAddressError(f"Decoded payload has {len(payload)} bytes")

    public_key = payload[:PUBLIC_KEY_LENGTH]
    checksum = payload[PUBLIC_KEY_LENGTH : PUBLIC_KEY_LENGTH + CHECKSUM_LENGTH]
    version = payload[-1:]

    if version != VERSION_BYTE:
        raise InvalidAddressError(f"Unsupported onion address version: {version[0]}")
    if checksum != _checksum(public_key):
        raise InvalidAddressError("Onion address checksum mismatch")

    return public_key


def is_valid_address(address: str) -> bool:
    """Check whether a string is a well-formed v3 onion address."""
    try:
        decode_address(address)
        return True
    except InvalidAddressError:
        return False


__all__ = [
    "compute_checksum",
    "decode_address",
    "derive_address",
    "is_valid_address",
]
