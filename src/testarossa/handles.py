"""Test handles: the capability through which failures reach the host runner."""

from __future__ import annotations

import unittest
from typing import Protocol, runtime_checkable

import pytest

from testarossa.errors import FailNow


@runtime_checkable
class TestingT(Protocol):
    """Anything that can be marked failed, aborted and named."""

    def fail(self) -> None: ...

    def fail_now(self) -> None: ...

    def name(self) -> str: ...


class RecordingT:
    """In-process handle that records outcomes instead of reporting them.

    ``fail_now`` raises FailNow, which callers catch to observe the abort.
    """

    __test__ = False

    def __init__(self, name: str = "") -> None:
        self._name = name
        self.failed = False
        self.aborted = False
        self.failures = 0

    def fail(self) -> None:
        self.failed = True
        self.failures += 1

    def fail_now(self) -> None:
        self.failed = True
        self.aborted = True
        raise FailNow(self._name)

    def name(self) -> str:
        return self._name

    def reset(self) -> bool:
        """Clear the failure state and return whether it was set."""
        failed = self.failed
        self.failed = False
        self.aborted = False
        return failed


class PytestT:
    """Handle for a pytest test item.

    Non-fatal failures are collected and turned into a single test failure
    by ``check()`` once the test body has finished.
    """

    __test__ = False

    def __init__(self, nodeid: str) -> None:
        self._nodeid = nodeid
        self.failures = 0

    @property
    def failed(self) -> bool:
        return self.failures > 0

    def fail(self) -> None:
        self.failures += 1

    def fail_now(self) -> None:
        self.failures += 1
        pytest.fail(f"{self._nodeid}: aborted after failed assertion", pytrace=False)

    def name(self) -> str:
        return self._nodeid.rpartition("::")[2]

    def check(self) -> None:
        if self.failures:
            pytest.fail(f"{self.failures} assertion(s) failed", pytrace=False)


class UnitTestT:
    """Handle for a ``unittest.TestCase``.

    Non-fatal failures are raised from a cleanup after the test method so
    the remaining statements still run.
    """

    __test__ = False

    def __init__(self, case: unittest.TestCase) -> None:
        self._case = case
        self.failures = 0
        self.aborted = False
        self._abort: BaseException | None = None
        case.addCleanup(self._check)

    @property
    def failed(self) -> bool:
        return self.failures > 0

    def fail(self) -> None:
        self.failures += 1

    def fail_now(self) -> None:
        self.failures += 1
        self.aborted = True
        self._abort = self._case.failureException(f"aborted after {self.failures} failed assertion(s)")
        raise self._abort

    def name(self) -> str:
        return self._case.id().rpartition(".")[2]

    def _check(self) -> None:
        # An abort already failed the test unless the test body swallowed it
        if self.failures and not self._abort_reported():
            self._case.fail(f"{self.failures} assertion(s) failed")

    def _abort_reported(self) -> bool:
        if self._abort is None:
            return False
        # unittest marks its own modules with __unittest; the abort reached
        # the runner only if the outermost traceback frame is one of them
        tb = self._abort.__traceback__
        return tb is not None and "__unittest" in tb.tb_frame.f_globals
