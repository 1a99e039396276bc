"""Structural (deep) equality and zero-value checks."""

from __future__ import annotations

import dataclasses
import numbers
from typing import Any

from pydantic import BaseModel

from testarossa.errors import ComparisonError
from testarossa.shapes import Shape, classify, is_absent, length_of

_CONTAINER_SHAPES = frozenset(
    {Shape.TEXT, Shape.BYTES, Shape.SEQUENCE, Shape.MAPPING, Shape.SET, Shape.CHANNEL}
)


def deep_equal(expected: Any, actual: Any) -> bool:
    """Compare two values structurally.

    Two absent values are equal, an absent and a present value are not.
    Sequences compare element-wise in order, mappings key by key regardless
    of order, and plain objects by their attribute state rather than by
    identity. Values of different shapes are never equal. Objects whose
    state lives in C, such as functools.partial, are only equal to
    themselves.

    Raises ComparisonError when a user-defined ``__eq__`` raises.
    """
    return _deep_equal(expected, actual, set())


def _deep_equal(a: Any, b: Any, seen: set[tuple[int, int]]) -> bool:
    a_absent, b_absent = is_absent(a), is_absent(b)
    if a_absent or b_absent:
        return a_absent and b_absent
    if a is b:
        return True

    shape = classify(a)
    if classify(b) is not shape:
        return False

    if shape is Shape.TEXT:
        return a == b
    if shape is Shape.BYTES:
        return bytes(a) == bytes(b)
    if shape is Shape.SET:
        return _user_eq(a, b)
    if shape is Shape.CHANNEL:
        return False

    # Cycles compare equal once the same pair comes around again
    pair = (id(a), id(b))
    if pair in seen:
        return True
    seen.add(pair)

    if shape is Shape.SEQUENCE:
        if len(a) != len(b):
            return False
        return all(_deep_equal(x, y, seen) for x, y in zip(a, b))
    if shape is Shape.MAPPING:
        if len(a) != len(b):
            return False
        for key, value in a.items():
            found, other = _lookup(b, key)
            if not found or not _deep_equal(value, other, seen):
                return False
        return True
    return _objects_equal(a, b, seen)


# Py_TPFLAGS_HEAPTYPE: set on classes created by a class statement
_HEAPTYPE = 1 << 9


def _user_eq(a: Any, b: Any) -> bool:
    try:
        return bool(a == b)
    except Exception as e:
        raise ComparisonError(
            f"Cannot compare {type(a).__name__} with {type(b).__name__}: {type(e).__name__}: {e}"
        ) from e


def _lookup(mapping: Any, key: Any) -> tuple[bool, Any]:
    try:
        if key not in mapping:
            return False, None
        return True, mapping[key]
    except Exception as e:
        raise ComparisonError(f"Cannot look up {type(key).__name__} key in {type(mapping).__name__}: {type(e).__name__}: {e}") from e


def _defines_eq(obj: Any) -> bool:
    return type(obj).__eq__ is not object.__eq__


def _slot_names(cls: type) -> tuple[str, ...]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return tuple(name for name in slots if name not in ("__dict__", "__weakref__"))


def _state_visible(obj: Any) -> bool:
    """Whether the attribute state of *obj* is all there is to compare."""
    cls = type(obj)
    if not cls.__flags__ & _HEAPTYPE:
        return False
    return hasattr(obj, "__dict__") or any(_slot_names(c) for c in cls.__mro__)


def _state(obj: Any) -> dict[str, Any]:
    state = dict(getattr(obj, "__dict__", {}))
    for cls in type(obj).__mro__:
        for name in _slot_names(cls):
            if hasattr(obj, name):
                state[name] = getattr(obj, name)
    return state


def _objects_equal(a: Any, b: Any, seen: set[tuple[int, int]]) -> bool:
    if dataclasses.is_dataclass(a) and not isinstance(a, type) and type(a) is type(b):
        return all(
            _deep_equal(getattr(a, f.name), getattr(b, f.name), seen)
            for f in dataclasses.fields(a)
            if f.compare
        )
    if _defines_eq(a) or _defines_eq(b):
        return _user_eq(a, b)
    if type(a) is not type(b):
        return False
    if isinstance(a, BaseException):
        return _deep_equal(a.args, b.args, seen) and _deep_equal(_state(a), _state(b), seen)
    if not _state_visible(a):
        return False
    return _deep_equal(_state(a), _state(b), seen)


def type_mismatch(expected: Any, actual: Any) -> bool:
    """Whether two present values have different runtime types.

    Only used to word failure messages.
    """
    if is_absent(expected) or is_absent(actual):
        return False
    return type(expected) is not type(actual)


def _truthiness(value: Any) -> bool:
    try:
        return bool(value)
    except Exception as e:
        raise ComparisonError(f"Cannot test {type(value).__name__} for truth: {type(e).__name__}: {e}") from e


def _defines_truth(value: Any) -> bool:
    cls = type(value)
    return hasattr(cls, "__bool__") or hasattr(cls, "__len__")


def is_zero(value: Any) -> bool:
    """Whether *value* is the zero value of its type.

    None, empty containers and numbers equal to zero are zero. Dataclasses
    and plain objects are zero when every field is; an object without
    attributes is therefore zero. Exceptions are zero when they carry no
    arguments. Classes defining ``__bool__`` or ``__len__`` are zero when
    falsy, and objects whose state is hidden in C are never zero. No
    constructor is ever called.

    Raises ComparisonError when a user-defined ``__bool__`` or ``__len__`` raises.
    """
    return _is_zero(value, set())


def _is_zero(value: Any, seen: set[int]) -> bool:
    shape = classify(value)
    if shape is Shape.ABSENT:
        return True
    if shape in _CONTAINER_SHAPES:
        return length_of(value) == 0
    if isinstance(value, numbers.Number):
        return _user_eq(value, 0)

    # An object that contains itself is not the zero value
    if id(value) in seen:
        return False
    seen.add(id(value))
    try:
        return _composite_zero(value, seen)
    finally:
        seen.discard(id(value))


def _composite_zero(value: Any, seen: set[int]) -> bool:
    if isinstance(value, BaseModel):
        return all(_is_zero(getattr(value, name), seen) for name in type(value).model_fields)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(_is_zero(getattr(value, f.name), seen) for f in dataclasses.fields(value))
    if isinstance(value, BaseException):
        return not value.args and all(_is_zero(v, seen) for v in _state(value).values())
    if _defines_truth(value):
        return not _truthiness(value)
    if not _state_visible(value):
        return False
    return all(_is_zero(v, seen) for v in _state(value).values())
