"""Assertions that report failures through a test handle and return a bool.

Every assertion takes the handle first, then its inputs, then optional
message arguments. A failing assertion writes a report and calls
``t.fail()``; it never raises and the test keeps running.
"""

from __future__ import annotations

from typing import Any

from testarossa import containment, markup
from testarossa.equality import deep_equal, is_zero, type_mismatch
from testarossa.errors import ComparisonError, MarkupError, UnsupportedTypeError
from testarossa.handles import TestingT
from testarossa.reporter import fail_with, render
from testarossa.shapes import is_absent, length_of


def _describe_inequality(expected: Any, actual: Any) -> str:
    if type_mismatch(expected, actual):
        return (
            f"Type mismatch: expected {type(expected).__name__} {render(expected)}, "
            f"actual {type(actual).__name__} {render(actual)}"
        )
    return f"Expected {render(expected)}, actual {render(actual)}"


# --- errors ---


def error(t: TestingT, err: BaseException | None, *args: Any) -> bool:
    """Fail the test if *err* is None."""
    return not fail_with(t, is_absent(err), "Expected error", args)


def error_contains(t: TestingT, err: BaseException | None, substr: str, *args: Any) -> bool:
    """Fail the test if *err* is None or its message does not contain *substr*."""
    return not fail_with(
        t,
        is_absent(err) or substr not in str(err),
        f"Expected error to contain '{substr}', actual {render(err)}",
        args,
    )


def no_error(t: TestingT, err: BaseException | None, *args: Any) -> bool:
    """Fail the test if *err* is not None."""
    return not fail_with(t, not is_absent(err), f"Expected no error, actual {render(err)}", args)


# --- equality ---


def equal(t: TestingT, expected: Any, actual: Any, *args: Any) -> bool:
    """Fail the test if the two values are not deeply equal."""
    try:
        same = deep_equal(expected, actual)
    except ComparisonError as e:
        return not fail_with(t, True, str(e), args)
    if same:
        return True
    return not fail_with(t, True, _describe_inequality(expected, actual), args)


def not_equal(t: TestingT, expected: Any, actual: Any, *args: Any) -> bool:
    """Fail the test if the two values are deeply equal."""
    try:
        same = deep_equal(expected, actual)
    except ComparisonError as e:
        return not fail_with(t, True, str(e), args)
    return not fail_with(
        t,
        same,
        f"Expected actual to differ from {render(expected)}",
        args,
    )


def expect(t: TestingT, *pairs: Any) -> bool:
    """Check several ``actual, expected`` pairs at once.

    ``expect(t, a1, e1, a2, e2)`` is ``equal(t, e1, a1) and equal(t, e2, a2)``
    except that every pair is checked and reported.
    """
    if len(pairs) % 2:
        return not fail_with(t, True, f"Expected pairs of values, got {len(pairs)} value(s)", ())
    ok = True
    for i in range(0, len(pairs), 2):
        actual, expected = pairs[i], pairs[i + 1]
        try:
            if deep_equal(expected, actual):
                continue
            problem = _describe_inequality(expected, actual)
        except ComparisonError as e:
            problem = str(e)
        fail_with(t, True, f"Pair {i // 2}: {problem}", ())
        ok = False
    return ok


# --- zero and truth ---


def zero(t: TestingT, actual: Any, *args: Any) -> bool:
    """Fail the test if *actual* is not the zero value of its type."""
    try:
        empty = is_zero(actual)
    except ComparisonError as e:
        return not fail_with(t, True, str(e), args)
    return not fail_with(t, not empty, f"Expected zero value, actual {render(actual)}", args)


def not_zero(t: TestingT, actual: Any, *args: Any) -> bool:
    """Fail the test if *actual* is the zero value of its type."""
    try:
        empty = is_zero(actual)
    except ComparisonError as e:
        return not fail_with(t, True, str(e), args)
    return not fail_with(t, empty, f"Expected non-zero value, actual {render(actual)}", args)


def true(t: TestingT, condition: bool, *args: Any) -> bool:
    """Fail the test if *condition* is false."""
    return not fail_with(t, not condition, "Expected condition to be true", args)


def false(t: TestingT, condition: bool, *args: Any) -> bool:
    """Fail the test if *condition* is true."""
    return not fail_with(t, bool(condition), "Expected condition to be false", args)


# --- containment and length ---


def contains(t: TestingT, whole: Any, sub: Any, *args: Any) -> bool:
    """Fail the test if *whole* does not contain *sub*.

    Strings and bytes are searched for substrings, sequences and sets for
    elements, mappings for keys, and exceptions by their message.
    """
    try:
        found = containment.contains(whole, sub)
    except (UnsupportedTypeError, ComparisonError) as e:
        return not fail_with(t, True, str(e), args)
    return not fail_with(
        t,
        not found,
        f"Expected {render(whole)} to contain {render(sub)}",
        args,
    )


def not_contains(t: TestingT, whole: Any, sub: Any, *args: Any) -> bool:
    """Fail the test if *whole* contains *sub*. A None *whole* contains nothing."""
    try:
        found = containment.contains(whole, sub)
    except (UnsupportedTypeError, ComparisonError) as e:
        return not fail_with(t, True, str(e), args)
    return not fail_with(
        t,
        found,
        f"Expected {render(whole)} not to contain {render(sub)}",
        args,
    )


def length(t: TestingT, obj: Any, expected: int, *args: Any) -> bool:
    """Fail the test if the length of *obj* is not *expected*.

    None has length 0. Queues are measured by their ``qsize()``.
    """
    try:
        actual = length_of(obj)
    except UnsupportedTypeError as e:
        return not fail_with(t, True, str(e), args)
    return not fail_with(
        t,
        actual != expected,
        f"Expected length {expected}, actual {actual}",
        args,
    )


# --- absence ---


def none(t: TestingT, obj: Any, *args: Any) -> bool:
    """Fail the test if *obj* is not None (or a dead weak reference)."""
    return not fail_with(t, not is_absent(obj), f"Expected None, actual {render(obj)}", args)


def not_none(t: TestingT, obj: Any, *args: Any) -> bool:
    """Fail the test if *obj* is None (or a dead weak reference)."""
    return not fail_with(t, is_absent(obj), "Expected object not to be None", args)


# --- markup ---


def html_match(t: TestingT, body: bytes | str, selector: str, pattern: str, *args: Any) -> bool:
    """Fail the test unless an element matching *selector* has text matching *pattern*.

    An empty *pattern* only requires that some element matches *selector*.
    """
    try:
        matched = markup.match(body, selector, pattern)
    except MarkupError as e:
        return not fail_with(t, True, str(e), args)
    if pattern:
        msg = f"Expected an element matching '{selector}' with text matching '{pattern}'"
    else:
        msg = f"Expected an element matching '{selector}'"
    return not fail_with(t, not matched, msg, args)


def html_not_match(t: TestingT, body: bytes | str, selector: str, pattern: str, *args: Any) -> bool:
    """Fail the test if an element matching *selector* has text matching *pattern*."""
    try:
        matched = markup.match(body, selector, pattern)
    except MarkupError as e:
        return not fail_with(t, True, str(e), args)
    if pattern:
        msg = f"Expected no element matching '{selector}' with text matching '{pattern}'"
    else:
        msg = f"Expected no element matching '{selector}'"
    return not fail_with(t, matched, msg, args)
