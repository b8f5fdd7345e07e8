"""
Integration tests: per-block AES-GCM encryption keyed by a keyed hash tree.

Each block is sealed with its own derived key so any block can be decrypted
or re-encrypted without touching the rest of the file.
"""

import os

import pytest
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from kht import KeyedHashTree, TreeParams, cryptography_hmac, derive_root_key, hmac_hash
from kht.security.kdf import generate_salt

BLOCK_SIZE = 4096
NONCE = b"\x00" * 12  # unique key per block, so a fixed nonce is never reused with a key


def _seal_blocks(tree, data):
    sealed = []
    for offset in range(0, len(data), BLOCK_SIZE):
        key = tree.key(offset)
        block = data[offset:offset + BLOCK_SIZE]
        ad = f"block:{offset // BLOCK_SIZE}".encode("utf-8")
        sealed.append(AESGCM(key).encrypt(NONCE, block, ad))
    return sealed


def _open_block(tree, sealed, index):
    key = tree.key(index * BLOCK_SIZE)
    ad = f"block:{index}".encode("utf-8")
    return AESGCM(key).decrypt(NONCE, sealed[index], ad)


@pytest.fixture
def tree():
    params = TreeParams(block_size=BLOCK_SIZE, max_size=1 << 30, factor=16)
    return KeyedHashTree.from_params(os.urandom(32), cryptography_hmac(hashes.SHA256()), params)


def test_roundtrip_all_blocks(tree):
    data = os.urandom(BLOCK_SIZE * 10 + 123)
    sealed = _seal_blocks(tree, data)

    out = b"".join(_open_block(tree, sealed, i) for i in range(len(sealed)))
    assert out == data


def test_random_access_single_block(tree):
    data = os.urandom(BLOCK_SIZE * 8)
    sealed = _seal_blocks(tree, data)

    assert _open_block(tree, sealed, 5) == data[5 * BLOCK_SIZE:6 * BLOCK_SIZE]


def test_reencrypt_one_block_leaves_others_valid(tree):
    data = bytearray(os.urandom(BLOCK_SIZE * 4))
    sealed = _seal_blocks(tree, bytes(data))

    data[BLOCK_SIZE * 2:BLOCK_SIZE * 3] = b"\xff" * BLOCK_SIZE
    sealed[2] = _seal_blocks(tree, bytes(data))[2]

    assert _open_block(tree, sealed, 2) == b"\xff" * BLOCK_SIZE
    assert _open_block(tree, sealed, 1) == bytes(data[BLOCK_SIZE:BLOCK_SIZE * 2])


def test_swapped_blocks_fail_to_open(tree):
    data = os.urandom(BLOCK_SIZE * 2)
    sealed = _seal_blocks(tree, data)
    sealed[0], sealed[1] = sealed[1], sealed[0]

    with pytest.raises(InvalidTag):
        _open_block(tree, sealed, 0)


def test_password_root_key_reproduces_block_keys():
    salt = generate_salt()
    params = TreeParams(block_size=BLOCK_SIZE, max_size=1 << 24, factor=8)

    root = derive_root_key("correct horse battery staple", salt, time_cost=1, memory_cost=8)
    writer = KeyedHashTree.from_params(root, hmac_hash("sha256"), params)
    sealed = _seal_blocks(writer, b"hello world" * 1000)

    again = derive_root_key("correct horse battery staple", salt, time_cost=1, memory_cost=8)
    reader = KeyedHashTree.from_params(again, cryptography_hmac(), params)
    assert _open_block(reader, sealed, 1) == (b"hello world" * 1000)[BLOCK_SIZE:2 * BLOCK_SIZE]

    wrong = derive_root_key("wrong password", salt, time_cost=1, memory_cost=8)
    intruder = KeyedHashTree.from_params(wrong, hmac_hash("sha256"), params)
    with pytest.raises(InvalidTag):
        _open_block(intruder, sealed, 0)
