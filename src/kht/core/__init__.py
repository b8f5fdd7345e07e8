"""Core of kht: the keyed hash tree, its parameters and its exceptions."""

from .exceptions import KhtError, InvalidParametersError, OffsetOutOfRangeError
from .params import TreeParams
from .tree import KeyedHashTree

__all__ = [
    "KhtError",
    "InvalidParametersError",
    "OffsetOutOfRangeError",
    "TreeParams",
    "KeyedHashTree",
]
