"""
Tree shape parameters and the depth computation shared by every tree
"""

from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping

from .exceptions import InvalidParametersError

# offsets and node indexes are hashed as unsigned 64-bit little-endian words
MAX_OFFSET = 2**64 - 1

# upper bound on hashing steps per derived key
MAX_DEPTH = 128

DEFAULT_BLOCK_SIZE = 1024
DEFAULT_MAX_SIZE = 1 << 32
DEFAULT_FACTOR = 8.0


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value


def _require_real(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    return float(value)


def validate_shape(block_size: int, max_size: int, factor: float) -> float:
    """
    Check a tree shape and return the factor as a float.

    Raises:
        TypeError: sizes are not ints or the factor is not a real number
        InvalidParametersError: the shape cannot yield a finite depth of at most MAX_DEPTH
    """
    _require_int("block_size", block_size)
    _require_int("max_size", max_size)
    factor = _require_real("factor", factor)

    if block_size <= 0:
        raise InvalidParametersError(f"block_size must be positive, got {block_size}")
    if max_size < block_size:
        raise InvalidParametersError(
            f"max_size ({max_size}) must be at least block_size ({block_size})"
        )
    if max_size > MAX_OFFSET:
        raise InvalidParametersError(f"max_size must fit in 64 bits, got {max_size}")
    if not math.isfinite(factor) or factor <= 1:
        raise InvalidParametersError(f"factor must be a finite number > 1, got {factor}")
    depth = compute_depth(block_size, max_size, factor)
    if depth > MAX_DEPTH:
        raise InvalidParametersError(
            f"factor {factor!r} gives depth {depth}, more than the {MAX_DEPTH} allowed"
        )
    return factor


def compute_depth(block_size: int, max_size: int, factor: float) -> int:
    """
    Number of derivation steps from root to leaf:
    ceil(log(max_size / block_size) / log(factor)).

    Uses float logarithms; derived keys depend on the exact result.
    """
    return int(math.ceil(math.log(float(max_size) / float(block_size)) / math.log(factor)))


@dataclass(frozen=True)
class TreeParams:
    """Shape of a keyed hash tree, independent of any root key."""

    block_size: int = DEFAULT_BLOCK_SIZE
    max_size: int = DEFAULT_MAX_SIZE
    factor: float = DEFAULT_FACTOR

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        factor = validate_shape(self.block_size, self.max_size, self.factor)
        # normalise ints like 8 to 8.0 so equal shapes compare equal
        object.__setattr__(self, "factor", factor)

    @property
    def depth(self) -> int:
        return compute_depth(self.block_size, self.max_size, self.factor)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TreeParams":
        """Build params from a mapping; unknown keys are rejected."""
        known = {"block_size", "max_size", "factor"}
        unknown = set(data) - known
        if unknown:
            raise InvalidParametersError(
                f"unknown tree parameter(s): {', '.join(sorted(unknown))}"
            )
        return cls(**{k: data[k] for k in known if k in data})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
