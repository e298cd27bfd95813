"""
Text encodings for keys and onion address labels.

Keys are exchanged as standard base-64 strings. Address labels use the
RFC 4648 base-32 alphabet in lowercase without padding.
"""

from __future__ import annotations

import base64
import binascii


def encode_key(key: bytes) -> str:
    """Encode raw key bytes as standard (padded) base-64."""
    return base64.b64encode(key).decode("ascii")


def decode_key(value: str) -> bytes:
    """
    Decode a standard base-64 key string.

    Raises:
        ValueError: If the string is not valid base-64
    """
    try:
        return base64.b64decode(value.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 key: {e}") from e


def b32encode_lower(data: bytes) -> str:
    """Base-32 encode with the lowercase alphabet and no padding."""
    return base64.b32encode(data).decode("ascii").rstrip("=").lower()


def b32decode_lower(value: str) -> bytes:
    """
    Decode unpadded base-32 text (either case).

    Raises:
        ValueError: If the text contains characters outside the alphabet
            or has an impossible length
    """
    padding = "=" * (-len(value) % 8)
    try:
        return base64.b32decode(value.upper() + padding)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base32 text: {e}") from e
