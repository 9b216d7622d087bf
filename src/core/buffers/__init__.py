"""
Buffers — capability-абстракция хранилища для Container.
"""

from src.core.buffers.buffer import (
    Buffer,
    BufferKind,
    BufferView,
    GrowableBuffer,
    MutableBuffer,
    MutableBufferView,
    ReadOnlyBuffer,
    as_buffer,
)

__all__ = [
    "Buffer",
    "BufferKind",
    "BufferView",
    "MutableBufferView",
    "ReadOnlyBuffer",
    "MutableBuffer",
    "GrowableBuffer",
    "as_buffer",
]
