"""Best-effort zeroing of key material held in mutable buffers.

Python ``bytes`` are immutable and cannot be cleared; callers that want to
scrub a derived key copy it into a ``bytearray`` first and wipe that.
"""
from typing import Union


def wipe(buffer: Union[bytearray, memoryview]) -> None:
    """Overwrite a writable buffer with zeros in place."""
    view = memoryview(buffer)
    if view.readonly:
        raise TypeError("cannot wipe a read-only buffer")
    view = view.cast("B")
    for i in range(len(view)):
        view[i] = 0
