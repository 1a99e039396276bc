"""Tests for the containment engine."""

import queue
from dataclasses import dataclass

import pytest

from testarossa.containment import contains
from testarossa.errors import UnsupportedTypeError


@dataclass
class E:
    x: int


@pytest.mark.parametrize(
    "whole, sub, want",
    [
        ("hello world", "world", True),
        ("hello world", "goodbye", False),
        ("hello", "", True),
        (b"ABC", b"AB", True),
        (b"ABC", b"X", False),
        (b"ABC", b"ABCD", False),
        (b"", b"X", False),
        ("hello", b"ell", True),
        (b"hello", "ell", True),
        (bytearray(b"hello"), "xyz", False),
        ([1, 2, 3], 3, True),
        ([1, 2, 3], 4, False),
        ([1, 2, 3], "3", False),
        ([1, 2, 3], None, False),
        ((1, 2, 3), 2, True),
        ([E(1), E(2), E(3)], E(3), True),
        ([E(1), E(2), E(3)], E(4), False),
        ([E(1), E(2), E(3)], 1, False),
        ([[1, 2], [3]], [3], True),
        ({"x": "X", "y": "Y"}, "x", True),
        ({"x": "X", "y": "Y"}, "X", False),
        ({"x": "X", "y": "Y"}, 1, False),
        ({"x": "X", "y": "Y"}, None, False),
        ({1, 2}, 2, True),
        (ValueError("This is bad"), "bad", True),
        (ValueError("This is bad"), "really", False),
        ("123", 1, False),
        (None, 1, False),
    ],
)
def test_contains(whole, sub, want):
    assert contains(whole, sub) is want


def test_bytes_contains_byte_value():
    assert contains(b"ABC", ord("B"))


@pytest.mark.parametrize("whole", [1, 1.5, True, E(1), queue.Queue()])
def test_unsupported_whole(whole):
    with pytest.raises(UnsupportedTypeError, match="does not support containment"):
        contains(whole, 1)
