"""Keyed hash tree: per-block key derivation for large encrypted files.

A keyed hash tree is a hash tree built with a keyed hash (e.g. HMAC). Each
node's key is the keyed hash of its position, keyed by its parent's key, and
each leaf key covers one ``block_size`` block of the addressable space.

With a branching factor of 2 and ``max_size / block_size == 8`` the tree has
three derivation steps::

    level 3 (root)    K(0,0)
    level 2           K(1,0)                    K(1,1)
    level 1           K(2,0)      K(2,1)        K(2,2)      K(2,3)
    leaves            K(3,0) K(3,1) K(3,2) ...                     K(3,7)

Only the root key is stored. Deriving a block key walks from the root to the
leaf, hashing ``le_u64(step) || le_u64(node_index)`` once per level, so a tree
costs a few hundred bytes no matter how large ``max_size`` is.
"""
from __future__ import annotations

import logging
import math
import struct
from typing import Iterator, Optional, Tuple, Union

from .exceptions import InvalidParametersError, OffsetOutOfRangeError
from .params import TreeParams, compute_depth, validate_shape
from ..security.kdf import derive_root_key
from ..security.keyed_hash import KeyedHash

logger = logging.getLogger(__name__)

# step counter followed by node index, both unsigned 64-bit little-endian
_INDEX = struct.Struct("<QQ")

BytesLike = Union[bytes, bytearray, memoryview]


class KeyedHashTree:
    """
    Immutable keyed hash tree over the byte range ``[0, max_size]``.

    Args:
        root_key: secret root of the tree (copied)
        keyed_hash: callable mapping a key to a fresh ``update``/``digest`` hash state
        block_size: bytes covered by one leaf key
        max_size: largest addressable offset (inclusive)
        factor: branching factor, any real number > 1
    """

    __slots__ = ("_root", "_keyed_hash", "_block_size", "_max_size", "_factor", "_depth")

    def __init__(
        self,
        root_key: BytesLike,
        keyed_hash: KeyedHash,
        block_size: int,
        max_size: int,
        factor: float,
    ):
        if not isinstance(root_key, (bytes, bytearray, memoryview)):
            raise TypeError(f"root_key must be bytes-like, got {type(root_key).__name__}")
        root = bytes(root_key)
        if not root:
            raise InvalidParametersError("root_key must not be empty")
        if not callable(keyed_hash):
            raise InvalidParametersError("keyed_hash must be callable")
        factor = validate_shape(block_size, max_size, factor)

        set_ = object.__setattr__
        set_(self, "_root", root)
        set_(self, "_keyed_hash", keyed_hash)
        set_(self, "_block_size", block_size)
        set_(self, "_max_size", max_size)
        set_(self, "_factor", factor)
        set_(self, "_depth", compute_depth(block_size, max_size, factor))

        logger.debug(
            "keyed hash tree: block_size=%d max_size=%d factor=%g depth=%d",
            block_size,
            max_size,
            factor,
            self._depth,
        )

    @classmethod
    def from_params(cls, root_key: BytesLike, keyed_hash: KeyedHash, params: TreeParams) -> "KeyedHashTree":
        return cls(root_key, keyed_hash, params.block_size, params.max_size, params.factor)

    @classmethod
    def from_password(
        cls,
        password: Union[bytes, str],
        salt: bytes,
        keyed_hash: KeyedHash,
        params: TreeParams,
        **kdf_options,
    ) -> "KeyedHashTree":
        """
        Build a tree whose root is stretched from ``password`` with Argon2id.

        ``kdf_options`` are passed to :func:`derive_root_key` (``time_cost``,
        ``memory_cost``, ``parallelism``, ``key_len``).
        """
        root = derive_root_key(password, salt, keyed_hash, **kdf_options)
        return cls.from_params(root, keyed_hash, params)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        # never show the root key
        return (
            f"{type(self).__name__}(keyed_hash={self._keyed_hash!r}, "
            f"block_size={self._block_size}, max_size={self._max_size}, "
            f"factor={self._factor:g}, depth={self._depth})"
        )

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def factor(self) -> float:
        return self._factor

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def params(self) -> TreeParams:
        return TreeParams(self._block_size, self._max_size, self._factor)

    @property
    def block_count(self) -> int:
        """Number of leaf blocks covering offsets 0..max_size."""
        return self._max_size // self._block_size + 1

    @property
    def key_size(self) -> Optional[int]:
        """Length of a derived key, or None if the keyed hash does not say."""
        if self._depth == 0:
            return len(self._root)
        return getattr(self._keyed_hash, "digest_size", None)

    def _check_offset(self, offset: int) -> None:
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise TypeError(f"offset must be an int, got {type(offset).__name__}")
        if offset < 0 or offset > self._max_size:
            raise OffsetOutOfRangeError(
                f"offset {offset} outside of [0, {self._max_size}]"
            )

    def block_index(self, offset: int) -> int:
        """Index of the leaf block containing ``offset``."""
        self._check_offset(offset)
        return offset // self._block_size

    def key(self, offset: int) -> bytes:
        """
        Derive the key of the block containing ``offset``.

        Every call walks the tree from the root; nothing is cached.

        Raises:
            OffsetOutOfRangeError: offset is negative or greater than max_size
        """
        self._check_offset(offset)

        k = self._root
        depth = self._depth
        for i in range(depth):
            level = depth - i
            level_block_size = int(math.pow(self._factor, level - 1)) * self._block_size
            y = offset // level_block_size

            h = self._keyed_hash(k)
            h.update(_INDEX.pack(i, y))
            k = h.digest()
        return k

    def block_keys(self, start: int = 0, stop: Optional[int] = None) -> Iterator[Tuple[int, bytes]]:
        """
        Yield ``(block_index, key)`` for every block overlapping ``[start, stop)``.

        ``stop`` defaults to one past ``max_size`` so the whole tree is covered.
        Keys are derived one at a time as the iterator advances.
        """
        if stop is None:
            stop = self._max_size + 1
        self._check_offset(start)
        if isinstance(stop, bool) or not isinstance(stop, int):
            raise TypeError(f"stop must be an int, got {type(stop).__name__}")
        if stop < start or stop > self._max_size + 1:
            raise OffsetOutOfRangeError(
                f"range [{start}, {stop}) outside of [0, {self._max_size + 1})"
            )
        return self._iter_block_keys(start, stop)

    def _iter_block_keys(self, start: int, stop: int) -> Iterator[Tuple[int, bytes]]:
        if stop == start:
            return
        first = start // self._block_size
        last = (stop - 1) // self._block_size
        for index in range(first, last + 1):
            yield index, self.key(index * self._block_size)
