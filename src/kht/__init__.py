"""kht: keyed hash trees for deriving per-block encryption keys.

Typical use::

    from kht import KeyedHashTree, hmac_hash, generate_root_key

    tree = KeyedHashTree(generate_root_key(), hmac_hash("sha256"), 4096, 1 << 40, 64)
    block_key = tree.key(offset)
"""

from .core import (
    KhtError,
    InvalidParametersError,
    OffsetOutOfRangeError,
    TreeParams,
    KeyedHashTree,
)
from .security import (
    HashState,
    KeyedHash,
    hmac_hash,
    cryptography_hmac,
    generate_root_key,
    derive_root_key,
    wipe,
)

__version__ = "0.1.0"

__all__ = [
    "KhtError",
    "InvalidParametersError",
    "OffsetOutOfRangeError",
    "TreeParams",
    "KeyedHashTree",
    "HashState",
    "KeyedHash",
    "hmac_hash",
    "cryptography_hmac",
    "generate_root_key",
    "derive_root_key",
    "wipe",
]
