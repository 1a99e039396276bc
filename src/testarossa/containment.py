"""Containment checks dispatched on the shape of the containing value."""

from __future__ import annotations

import logging
from typing import Any

from testarossa.equality import deep_equal
from testarossa.errors import UnsupportedTypeError
from testarossa.shapes import Shape, classify, is_absent

logger = logging.getLogger(__name__)

_TEXTUAL = (Shape.TEXT, Shape.BYTES)


def _coerce(whole: str | bytes, sub: Any) -> tuple[Any, Any]:
    """Bring a str/bytes pair to a common type for substring search."""
    if isinstance(whole, str):
        if not isinstance(sub, str):
            sub = bytes(sub).decode("utf-8", errors="replace")
        return whole, sub
    whole = bytes(whole)
    if isinstance(sub, str):
        sub = sub.encode("utf-8")
    return whole, bytes(sub)


def contains(whole: Any, sub: Any) -> bool:
    """Return whether *whole* contains *sub*.

    Exceptions are searched by their message. Strings and bytes are searched
    for substrings, converting between the two as UTF-8 when mixed.
    Sequences and sets are searched element by element and mappings key by
    key, both using deep equality. An absent *whole* contains nothing.

    Raises UnsupportedTypeError when *whole* has no notion of containment.
    ComparisonError from the element comparison propagates.
    """
    if is_absent(whole):
        return False
    if isinstance(whole, BaseException):
        whole = str(whole)

    shape = classify(whole)
    sub_shape = classify(sub)
    logger.debug(f"contains: whole shape={shape.value}, sub shape={sub_shape.value}")

    if shape in _TEXTUAL and sub_shape in _TEXTUAL:
        haystack, needle = _coerce(whole, sub)
        return needle in haystack
    if shape is Shape.TEXT:
        return False
    if shape in (Shape.SEQUENCE, Shape.BYTES, Shape.SET):
        return any(deep_equal(item, sub) for item in whole)
    if shape is Shape.MAPPING:
        return any(deep_equal(key, sub) for key in whole)
    raise UnsupportedTypeError(f"{type(whole).__name__} does not support containment")
