"""
Shared test vectors for torkeys tests.
"""

from __future__ import annotations

# RFC 8032 section 7.1, TEST 1
RFC8032_SEED = bytes.fromhex("9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60")
RFC8032_PUBLIC_KEY = bytes.fromhex(
    "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
)
RFC8032_PUBLIC_KEY_B64 = "11qYAYKxCrfVS/7TyWQHOg7hcvPapiMlrwIaaPcHURo="
# Same vector as tor's test_build_address (src/test/test_hs_common.c)
RFC8032_ONION_ADDRESS = "25njqamcweflpvkl73j4szahhihoc4xt3ktcgjnpaingr5yhkenl5sid.onion"

# bitnodes test_onion_v3 vector
BITNODES_PUBLIC_KEY = bytes.fromhex(
    "53f75b474bcc984e37efbdc130c19c95d93f4cdbfea50d3eb61118ea65446ef5"
)
BITNODES_ONION_ADDRESS = "kp3vwr2lzsme4n7pxxatbqm4sxmt6tg372sq2pvwcemouzken325dkad.onion"

ZERO_PUBLIC_KEY = bytes(32)
ZERO_ONION_ADDRESS = "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaam2dqd.onion"
