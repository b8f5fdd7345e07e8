"""Security helpers for kht: keyed hash bindings and root key handling.

This package provides:
- HMAC keyed hash bindings (stdlib ``hmac`` and ``cryptography``)
- random and Argon2id password-based root keys
- best-effort wiping of key buffers
"""

from .keyed_hash import (
    HashState,
    KeyedHash,
    HMACHash,
    CryptographyHMAC,
    hmac_hash,
    cryptography_hmac,
)
from .kdf import generate_root_key, generate_salt, derive_root_key, root_key_len
from .wipe import wipe

__all__ = [
    "HashState",
    "KeyedHash",
    "HMACHash",
    "CryptographyHMAC",
    "hmac_hash",
    "cryptography_hmac",
    "generate_root_key",
    "generate_salt",
    "derive_root_key",
    "root_key_len",
    "wipe",
]
