"""Unit tests for the benchmark script."""

import pytest

import benchmark_keys
from kht.core.tree import KeyedHashTree
from kht.security.keyed_hash import hmac_hash


def test_benchmark_returns_positive_mean():
    tree = KeyedHashTree(bytes(32), hmac_hash("sha256"), 1024, 1 << 20, 8)
    assert benchmark_keys.benchmark(tree, 10) > 0


def test_benchmark_rejects_zero_iterations():
    tree = KeyedHashTree(bytes(32), hmac_hash("sha256"), 1024, 1 << 20, 8)
    with pytest.raises(ValueError):
        benchmark_keys.benchmark(tree, 0)


def test_main_prints_result(capsys):
    benchmark_keys.main(["--iterations", "5", "--max-size", "1048576", "--factor", "4"])
    out = capsys.readouterr().out
    assert "us/key" in out
    assert "depth 5" in out
