"""
Exceptions for the kht core module
Everything raised on purpose derives from KhtError so callers can catch it in one place
"""


class KhtError(Exception):
    # general container for errors
    pass


class InvalidParametersError(KhtError, ValueError):
    # raised when a tree shape has no well-defined, positive, finite depth
    # (factor <= 1, block_size <= 0, max_size < block_size, ...)
    pass


class OffsetOutOfRangeError(KhtError, IndexError):
    # raised when an offset falls outside [0, max_size]
    pass
