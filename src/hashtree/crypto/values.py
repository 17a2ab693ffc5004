"""
hashtree - Tree Values

A tree value must be expressible as bytes (so it can be hashed) and must be
duplicable (so padding can clone the last element). Text and byte buffers
work out of the box; other types implement AsBytes, define __bytes__, or
register with to_bytes.
"""

import copy
from functools import singledispatch
from typing import Any, Protocol, TypeVar, runtime_checkable

V = TypeVar("V")


class UnsupportedValueError(TypeError):
    """Value has no byte representation."""

    pass


@runtime_checkable
class AsBytes(Protocol):
    """Values that expose their own byte representation."""

    def as_bytes(self) -> bytes:
        ...


@singledispatch
def to_bytes(value: Any) -> bytes:
    """
    Get the bytes that are hashed for a tree value.

    Args:
        value: Tree value

    Returns:
        Byte representation, with no framing added

    Raises:
        UnsupportedValueError: If the value has no byte representation
    """
    if isinstance(value, AsBytes):
        return bytes(value.as_bytes())
    # int has no __bytes__ and falls through to the error below
    if hasattr(type(value), "__bytes__"):
        return bytes(value)
    raise UnsupportedValueError(
        f"Cannot hash value of type {type(value).__name__}"
    )


@to_bytes.register
def _(value: str) -> bytes:
    return value.encode("utf-8")


@to_bytes.register(bytes)
@to_bytes.register(bytearray)
@to_bytes.register(memoryview)
def _(value: bytes | bytearray | memoryview) -> bytes:
    return bytes(value)


@singledispatch
def duplicate(value: V) -> V:
    """Shallow copy of a tree value."""
    return copy.copy(value)


@duplicate.register
def _(value: memoryview) -> memoryview:
    return memoryview(value.tobytes())


@singledispatch
def freeze(value: V) -> V:
    """
    Copy of a value for storage in a finished tree.

    Mutable byte buffers become immutable; other values are shallow copies,
    so a mutable custom type can still be changed through its leaf.
    """
    return duplicate(value)


@freeze.register
def _(value: bytearray) -> bytes:
    return bytes(value)


@freeze.register
def _(value: memoryview) -> memoryview:
    return memoryview(value.tobytes())
