"""Runtime shape classification of arbitrary values."""

from __future__ import annotations

import asyncio
import queue
import weakref
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any

from testarossa.errors import UnsupportedTypeError

_CHANNEL_TYPES = (queue.Queue, queue.SimpleQueue, asyncio.Queue)
_BYTES_TYPES = (bytes, bytearray, memoryview)


class Shape(str, Enum):
    ABSENT = "absent"
    TEXT = "text"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SET = "set"
    CHANNEL = "channel"
    OTHER = "other"


def is_absent(value: Any) -> bool:
    """Return True for None and for weak references whose referent is gone."""
    if value is None:
        return True
    # isinstance() on a dead proxy raises, so look at the concrete type first
    if type(value) in weakref.ProxyTypes:
        try:
            value.__class__
        except ReferenceError:
            return True
        return False
    if isinstance(value, weakref.ref):
        return value() is None
    return False


def classify(value: Any) -> Shape:
    """Classify *value* by its runtime type. Never raises."""
    if is_absent(value):
        return Shape.ABSENT
    if isinstance(value, str):
        return Shape.TEXT
    if isinstance(value, _BYTES_TYPES):
        return Shape.BYTES
    if isinstance(value, Mapping):
        return Shape.MAPPING
    if isinstance(value, Set):
        return Shape.SET
    if isinstance(value, Sequence):
        return Shape.SEQUENCE
    if isinstance(value, _CHANNEL_TYPES):
        return Shape.CHANNEL
    return Shape.OTHER


def length_of(value: Any) -> int:
    """Return the length of *value*.

    Absent values have length 0. Queues report their current ``qsize()``.
    Raises UnsupportedTypeError for values that have no length.
    """
    shape = classify(value)
    if shape is Shape.ABSENT:
        return 0
    if shape is Shape.CHANNEL:
        return value.qsize()
    if shape is Shape.OTHER:
        raise UnsupportedTypeError(f"{type(value).__name__} does not have a length")
    return len(value)
