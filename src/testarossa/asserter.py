from __future__ import annotations

from typing import Any

from testarossa import assertions, reporter
from testarossa.handles import TestingT


class Asserter:
    """Binds a test handle so assertions can be called without it.

    Example::

        tt = Asserter(t)
        tt.equal(3, len(items))
        tt.contains(items, "x")
    """

    def __init__(self, t: TestingT):
        self.t = t

    def error(self, err: BaseException | None, *args: Any) -> bool:
        return assertions.error(self.t, err, *args)

    def error_contains(self, err: BaseException | None, substr: str, *args: Any) -> bool:
        return assertions.error_contains(self.t, err, substr, *args)

    def no_error(self, err: BaseException | None, *args: Any) -> bool:
        return assertions.no_error(self.t, err, *args)

    def equal(self, expected: Any, actual: Any, *args: Any) -> bool:
        return assertions.equal(self.t, expected, actual, *args)

    def not_equal(self, expected: Any, actual: Any, *args: Any) -> bool:
        return assertions.not_equal(self.t, expected, actual, *args)

    def expect(self, *pairs: Any) -> bool:
        return assertions.expect(self.t, *pairs)

    def zero(self, actual: Any, *args: Any) -> bool:
        return assertions.zero(self.t, actual, *args)

    def not_zero(self, actual: Any, *args: Any) -> bool:
        return assertions.not_zero(self.t, actual, *args)

    def true(self, condition: bool, *args: Any) -> bool:
        return assertions.true(self.t, condition, *args)

    def false(self, condition: bool, *args: Any) -> bool:
        return assertions.false(self.t, condition, *args)

    def contains(self, whole: Any, sub: Any, *args: Any) -> bool:
        return assertions.contains(self.t, whole, sub, *args)

    def not_contains(self, whole: Any, sub: Any, *args: Any) -> bool:
        return assertions.not_contains(self.t, whole, sub, *args)

    def length(self, obj: Any, expected: int, *args: Any) -> bool:
        return assertions.length(self.t, obj, expected, *args)

    def none(self, obj: Any, *args: Any) -> bool:
        return assertions.none(self.t, obj, *args)

    def not_none(self, obj: Any, *args: Any) -> bool:
        return assertions.not_none(self.t, obj, *args)

    def html_match(self, body: bytes | str, selector: str, pattern: str, *args: Any) -> bool:
        return assertions.html_match(self.t, body, selector, pattern, *args)

    def html_not_match(self, body: bytes | str, selector: str, pattern: str, *args: Any) -> bool:
        return assertions.html_not_match(self.t, body, selector, pattern, *args)

    def fail_if(self, condition: bool, *args: Any) -> bool:
        return reporter.fail_if(self.t, condition, *args)

    def fatal_if(self, condition: bool, *args: Any) -> bool:
        return reporter.fatal_if(self.t, condition, *args)

    def fail_if_error(self, err: BaseException | None, *args: Any) -> bool:
        return reporter.fail_if_error(self.t, err, *args)

    def fatal_if_error(self, err: BaseException | None, *args: Any) -> bool:
        return reporter.fatal_if_error(self.t, err, *args)
