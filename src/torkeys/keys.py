"""
Ed25519 keypair generation for Tor v3 onion services.

The private key is kept in the 64-byte "seed || public key" layout used by
libsodium and Go's crypto/ed25519. Tor itself stores the expanded form
(see expand_secret_key), which is what ADD_ONION expects.
"""

from __future__ import annotations

import base64
import hashlib
import secrets
from collections.abc import Callable
from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from torkeys.constants import (
    PRIVATE_KEY_LENGTH,
    PUBLIC_KEY_LENGTH,
    SEED_LENGTH,
    TOR_KEY_BLOB_PREFIX,
)
from torkeys.errors import EntropyUnavailableError, InvalidKeyLengthError, KeyMismatchError


def expand_secret_key(seed: bytes) -> bytes:
    """
    Expand a 32-byte Ed25519 seed to Tor's 64-byte expanded secret key.

    The first 32 bytes are the clamped scalar, the last 32 bytes are the
    nonce prefix used when signing.
    """
    if len(seed) != SEED_LENGTH:
        raise InvalidKeyLengthError(SEED_LENGTH, len(seed), "seed")

    h = hashlib.sha512(seed).digest()
    scalar = bytearray(h[:32])
    scalar[0] &= 248
    scalar[31] &= 127
    scalar[31] |= 64
    return bytes(scalar) + h[32:]


@dataclass(frozen=True)
class SigningKeyPair:
    """An Ed25519 keypair. Only public_key takes part in address derivation."""

    public_key: bytes
    private_key: bytes

    def __post_init__(self) -> None:
        if len(self.public_key) != PUBLIC_KEY_LENGTH:
            raise InvalidKeyLengthError(PUBLIC_KEY_LENGTH, len(self.public_key))
        if len(self.private_key) != PRIVATE_KEY_LENGTH:
            raise InvalidKeyLengthError(
                PRIVATE_KEY_LENGTH, len(self.private_key), "private key"
            )

    @property
    def seed(self) -> bytes:
        return self.private_key[:SEED_LENGTH]

    def sign(self, message: bytes) -> bytes:
        return Ed25519PrivateKey.from_private_bytes(self.seed).sign(message)

    def expanded_secret_key(self) -> bytes:
        return expand_secret_key(self.seed)

    def tor_key_blob(self) -> str:
        """Key argument for Tor's ADD_ONION command ("ED25519-V3:<base64>")."""
        encoded = base64.b64encode(self.expanded_secret_key()).decode("ascii")
        return f"{TOR_KEY_BLOB_PREFIX}:{encoded}"

    def __repr__(self) -> str:
        return f"SigningKeyPair(public_key={self.public_key.hex()}, private_key=<hidden>)"


def keypair_from_seed(seed: bytes) -> SigningKeyPair:
    """
    Build a keypair from a 32-byte Ed25519 seed.

    Raises:
        InvalidKeyLengthError: If seed is not 32 bytes
    """
    if len(seed) != SEED_LENGTH:
        raise InvalidKeyLengthError(SEED_LENGTH, len(seed), "seed")

    private_key = Ed25519PrivateKey.from_private_bytes(seed)
    public_key = private_key.public_key().public_bytes(
        encoding=Encoding.Raw,
        format=PublicFormat.Raw,
    )
    return SigningKeyPair(public_key=public_key, private_key=seed + public_key)


def keypair_from_private_key(private_key: bytes) -> SigningKeyPair:
    """
    Build a keypair from the 64-byte "seed || public key" form.

    Raises:
        InvalidKeyLengthError: If private_key is not 64 bytes
        KeyMismatchError: If the trailing public key does not match the seed
    """
    if len(private_key) != PRIVATE_KEY_LENGTH:
        raise InvalidKeyLengthError(PRIVATE_KEY_LENGTH, len(private_key), "private key")

    keypair = keypair_from_seed(private_key[:SEED_LENGTH])
    if keypair.public_key != private_key[SEED_LENGTH:]:
        raise KeyMismatchError("Private key does not contain the public key of its seed")
    return keypair


def generate_keypair(
    randbytes: Callable[[int], bytes] = secrets.token_bytes,
) -> SigningKeyPair:
    """
    Generate a fresh Ed25519 keypair.

    Args:
        randbytes: Secure random source returning the requested number of bytes

    Raises:
        EntropyUnavailableError: If the random source fails, returns a short
            read, or returns an all-zero seed. Never retried.
    """
    try:
        seed = randbytes(SEED_LENGTH)
    except (OSError, NotImplementedError) as e:
        raise EntropyUnavailableError(f"Secure random source unavailable: {e}") from e

    if len(seed) != SEED_LENGTH:
        raise EntropyUnavailableError(
            f"Secure random source returned {len(seed)} bytes, expected {SEED_LENGTH}"
        )
    if not any(seed):
        raise EntropyUnavailableError("Secure random source returned an all-zero seed")

    return keypair_from_seed(seed)


__all__ = [
    "SigningKeyPair",
    "expand_secret_key",
    "generate_keypair",
    "keypair_from_private_key",
    "keypair_from_seed",
]
