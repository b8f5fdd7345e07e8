"""Root key helpers for keyed hash trees.

A root key is either random (one per encrypted file) or stretched from a
password with Argon2id. Password-derived roots default to the digest size of
the keyed hash the tree will use, so every node key has the same length.
"""
import os
from typing import Optional, Union

from argon2.low_level import Type, hash_secret_raw

from .keyed_hash import KeyedHash

DEFAULT_ROOT_KEY_LEN = 32


def root_key_len(keyed_hash: Optional[KeyedHash] = None) -> int:
    """Root key length matching ``keyed_hash``'s digest, or 32 bytes if unknown."""
    return getattr(keyed_hash, "digest_size", None) or DEFAULT_ROOT_KEY_LEN


def generate_root_key(length: int = DEFAULT_ROOT_KEY_LEN) -> bytes:
    """Return a fresh random root key."""
    if length <= 0:
        raise ValueError(f"root key length must be positive, got {length}")
    return os.urandom(length)


def generate_salt(length: int = 16) -> bytes:
    """Return a cryptographically secure random salt."""
    return os.urandom(length)


def derive_root_key(
    password: Union[bytes, str],
    salt: bytes,
    keyed_hash: Optional[KeyedHash] = None,
    time_cost: int = 3,
    memory_cost: int = 65536,
    parallelism: int = 1,
    key_len: Optional[int] = None,
) -> bytes:
    """
    Stretch a password into a tree root key with Argon2id.

    ``key_len`` defaults to the digest size of ``keyed_hash``. The same salt
    and costs must be supplied again to reproduce the root, and with it every
    block key of the tree.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    if not password:
        raise ValueError("password must not be empty")
    if key_len is None:
        key_len = root_key_len(keyed_hash)

    return hash_secret_raw(
        secret=password,
        salt=salt,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=key_len,
        type=Type.ID,
    )
