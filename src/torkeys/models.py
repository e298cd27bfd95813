"""
External representation of a generated onion service identity.

Keys are stored as standard base-64 strings and the address as plain text,
which is the shape callers persist or transmit. The model does no
persistence itself.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SecretStr, field_validator

from torkeys.address import derive_address
from torkeys.constants import ONION_ADDRESS_PATTERN, PRIVATE_KEY_LENGTH, PUBLIC_KEY_LENGTH
from torkeys.encoding import decode_key, encode_key
from torkeys.errors import KeyMismatchError
from torkeys.keys import SigningKeyPair, keypair_from_private_key


class TorKeys(BaseModel):
    public_key: str = Field(..., description="Ed25519 public key, base64")
    private_key: SecretStr = Field(..., description="Ed25519 seed || public key, base64")
    address: str = Field(..., pattern=ONION_ADDRESS_PATTERN.pattern)

    model_config = {"frozen": True}

    @field_validator("public_key")
    @classmethod
    def validate_public_key(cls, v: str) -> str:
        if len(decode_key(v)) != PUBLIC_KEY_LENGTH:
            raise ValueError(f"Public key must decode to {PUBLIC_KEY_LENGTH} bytes")
        return v

    @field_validator("private_key")
    @classmethod
    def validate_private_key(cls, v: SecretStr) -> SecretStr:
        if len(decode_key(v.get_secret_value())) != PRIVATE_KEY_LENGTH:
            raise ValueError(f"Private key must decode to {PRIVATE_KEY_LENGTH} bytes")
        return v

    @classmethod
    def from_keypair(cls, keypair: SigningKeyPair) -> TorKeys:
        return cls(
            public_key=encode_key(keypair.public_key),
            private_key=SecretStr(encode_key(keypair.private_key)),
            address=derive_address(keypair.public_key),
        )

    def to_keypair(self) -> SigningKeyPair:
        """
        Rebuild the keypair, checking that every field belongs to it.

        Raises:
            KeyMismatchError: If the keys or the address do not match
        """
        keypair = keypair_from_private_key(decode_key(self.private_key.get_secret_value()))
        if keypair.public_key != decode_key(self.public_key):
            raise KeyMismatchError("Private key does not match public key")
        if derive_address(keypair.public_key) != self.address:
            raise KeyMismatchError("Address does not match public key")
        return keypair

    def to_dict(self, include_private_key: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "address": self.address,
            "public_key": self.public_key,
        }
        if include_private_key:
            data["private_key"] = self.private_key.get_secret_value()
        return data


__all__ = ["TorKeys"]
