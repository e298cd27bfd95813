"""
Constants for Tor v3 onion service addresses.

Reference: https://spec.torproject.org/rend-spec/encoding-onion-addresses.html
"""

from __future__ import annotations

import re

# Onion service protocol version embedded in checksum input and address payload
ONION_VERSION = 3
VERSION_BYTE = bytes([ONION_VERSION])

CHECKSUM_MARKER = b".onion checksum"
CHECKSUM_LENGTH = 2

PUBLIC_KEY_LENGTH = 32
SEED_LENGTH = 32
PRIVATE_KEY_LENGTH = 64

# public key || checksum[:2] || version
PAYLOAD_LENGTH = PUBLIC_KEY_LENGTH + CHECKSUM_LENGTH + len(VERSION_BYTE)

BASE32_ALPHABET = "abcdefghijklmnopqrstuvwxyz234567"
ADDRESS_LABEL_LENGTH = 56
ONION_SUFFIX = ".onion"

ONION_ADDRESS_PATTERN = re.compile(r"^[a-z2-7]{56}\.onion$")

# ADD_ONION key type prefix for v3 services
TOR_KEY_BLOB_PREFIX = "ED25519-V3"
