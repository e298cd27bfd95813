"""
torkeys - Ed25519 keys and Tor v3 onion addresses

Provides keypair generation and onion address derivation.
"""

__version__ = "0.1.0"

from torkeys.address import compute_checksum, decode_address, derive_address, is_valid_address
from torkeys.errors import (
    EntropyUnavailableError,
    InvalidAddressError,
    InvalidKeyLengthError,
    KeyMismatchError,
    TorKeysError,
)
from torkeys.keys import (
    SigningKeyPair,
    generate_keypair,
    keypair_from_private_key,
    keypair_from_seed,
)

__all__ = [
    "SigningKeyPair",
    "generate_keypair",
    "keypair_from_seed",
    "keypair_from_private_key",
    "derive_address",
    "compute_checksum",
    "decode_address",
    "is_valid_address",
    "TorKeysError",
    "EntropyUnavailableError",
    "InvalidKeyLengthError",
    "InvalidAddressError",
    "KeyMismatchError",
]
