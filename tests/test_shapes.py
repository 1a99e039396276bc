"""Tests for value shape classification and length measurement."""

import asyncio
import gc
import queue
import weakref
from collections import OrderedDict, deque

import pytest

from testarossa.errors import UnsupportedTypeError
from testarossa.shapes import Shape, classify, is_absent, length_of


class Thing:
    pass


def _dead_ref():
    obj = Thing()
    ref = weakref.ref(obj)
    del obj
    gc.collect()
    return ref


def _dead_proxy():
    obj = Thing()
    proxy = weakref.proxy(obj)
    del obj
    gc.collect()
    return proxy


# --- classify ---


@pytest.mark.parametrize(
    "value, shape",
    [
        (None, Shape.ABSENT),
        ("", Shape.TEXT),
        ("abc", Shape.TEXT),
        (b"abc", Shape.BYTES),
        (bytearray(b"abc"), Shape.BYTES),
        (memoryview(b"abc"), Shape.BYTES),
        ([1, 2], Shape.SEQUENCE),
        ((1, 2), Shape.SEQUENCE),
        (range(3), Shape.SEQUENCE),
        (deque([1]), Shape.SEQUENCE),
        ({"a": 1}, Shape.MAPPING),
        (OrderedDict(a=1), Shape.MAPPING),
        ({1, 2}, Shape.SET),
        (frozenset(), Shape.SET),
        (queue.Queue(), Shape.CHANNEL),
        (queue.SimpleQueue(), Shape.CHANNEL),
        (1, Shape.OTHER),
        (1.5, Shape.OTHER),
        (True, Shape.OTHER),
        (Thing(), Shape.OTHER),
    ],
)
def test_classify(value, shape):
    assert classify(value) is shape


def test_classify_asyncio_queue():
    assert classify(asyncio.Queue()) is Shape.CHANNEL


def test_dead_weak_references_are_absent():
    assert classify(_dead_ref()) is Shape.ABSENT
    assert classify(_dead_proxy()) is Shape.ABSENT


def test_live_weak_reference_is_present():
    obj = Thing()
    assert not is_absent(weakref.ref(obj))
    assert not is_absent(weakref.proxy(obj))


def test_falsy_values_are_not_absent():
    for value in (0, "", False, [], {}):
        assert not is_absent(value)


# --- length_of ---


def test_length_of_absent_is_zero():
    assert length_of(None) == 0
    assert length_of(_dead_ref()) == 0


def test_length_of_containers():
    assert length_of("foo") == 3
    assert length_of(b"ab") == 2
    assert length_of([1, 2, 3]) == 3
    assert length_of((1, 2, 3, 4, 5)) == 5
    assert length_of({1: 10, 2: 20}) == 2
    assert length_of({1, 2}) == 2


def test_length_of_queue_is_buffered_count():
    q = queue.Queue(maxsize=3)
    for _ in range(3):
        q.put(True)
    assert length_of(q) == 3


@pytest.mark.parametrize("value", [123, 1.5, False, Thing()])
def test_length_of_unsupported(value):
    with pytest.raises(UnsupportedTypeError, match="does not have a length"):
        length_of(value)
