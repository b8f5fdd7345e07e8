"""Keyed hash bindings used to derive tree nodes.

A keyed hash is any callable taking a secret key and returning a fresh hash
state with ``update(data)`` and ``digest()``. Two HMAC bindings are provided:

- :func:`hmac_hash` over the standard library ``hmac`` module
- :func:`cryptography_hmac` over ``cryptography.hazmat.primitives.hmac``

Both produce identical output for the same underlying hash algorithm.
"""
from __future__ import annotations

import hashlib
import hmac
from typing import Callable, Optional, Protocol, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac


class HashState(Protocol):
    def update(self, data: bytes) -> None:
        ...

    def digest(self) -> bytes:
        ...


class KeyedHash(Protocol):
    def __call__(self, key: bytes) -> HashState:
        ...


Digestmod = Union[str, Callable[[], "hashlib._Hash"]]


class HMACHash:
    """HMAC keyed hash over a hashlib algorithm (name or constructor)."""

    __slots__ = ("_digestmod", "digest_size", "name")

    def __init__(self, digestmod: Digestmod):
        sample = hmac.new(b"\x00", digestmod=digestmod)
        self._digestmod = digestmod
        self.digest_size: int = sample.digest_size
        self.name: str = sample.name

    def __call__(self, key: bytes) -> HashState:
        return hmac.new(bytes(key), digestmod=self._digestmod)

    def __repr__(self) -> str:
        return f"HMACHash({self.name!r})"


class _CryptographyHMACState:
    # adapts cryptography's update()/finalize() to update()/digest()
    __slots__ = ("_ctx",)

    def __init__(self, ctx: crypto_hmac.HMAC):
        self._ctx = ctx

    def update(self, data: bytes) -> None:
        self._ctx.update(data)

    def digest(self) -> bytes:
        return self._ctx.finalize()


class CryptographyHMAC:
    """HMAC keyed hash backed by the ``cryptography`` package."""

    __slots__ = ("_algorithm", "digest_size", "name")

    def __init__(self, algorithm: hashes.HashAlgorithm):
        if not isinstance(algorithm, hashes.HashAlgorithm):
            raise TypeError(
                f"algorithm must be a cryptography HashAlgorithm, got {type(algorithm).__name__}"
            )
        self._algorithm = algorithm
        self.digest_size: int = algorithm.digest_size
        self.name: str = f"hmac-{algorithm.name}"

    def __call__(self, key: bytes) -> HashState:
        return _CryptographyHMACState(crypto_hmac.HMAC(bytes(key), self._algorithm))

    def __repr__(self) -> str:
        return f"CryptographyHMAC({self._algorithm.name!r})"


def hmac_hash(digestmod: Digestmod = "sha256") -> HMACHash:
    """Return an HMAC keyed hash using the stdlib ``hmac`` module."""
    return HMACHash(digestmod)


def cryptography_hmac(algorithm: Optional[hashes.HashAlgorithm] = None) -> CryptographyHMAC:
    """Return an HMAC keyed hash using ``cryptography`` (SHA-256 by default)."""
    return CryptographyHMAC(algorithm if algorithm is not None else hashes.SHA256())
