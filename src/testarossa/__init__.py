"""Lightweight assertions that report failures without stopping the test."""

from testarossa.asserter import Asserter
from testarossa.assertions import (
    contains,
    equal,
    error,
    error_contains,
    expect,
    false,
    html_match,
    html_not_match,
    length,
    no_error,
    none,
    not_contains,
    not_equal,
    not_none,
    not_zero,
    true,
    zero,
)
from testarossa.config import Settings, configure, get_settings, load_config
from testarossa.errors import FailNow
from testarossa.handles import PytestT, RecordingT, TestingT, UnitTestT
from testarossa.reporter import fail_if, fail_if_error, fatal_if, fatal_if_error

__all__ = [
    "Asserter",
    "FailNow",
    "PytestT",
    "RecordingT",
    "Settings",
    "TestingT",
    "UnitTestT",
    "configure",
    "contains",
    "equal",
    "error",
    "error_contains",
    "expect",
    "fail_if",
    "fail_if_error",
    "false",
    "fatal_if",
    "fatal_if_error",
    "get_settings",
    "html_match",
    "html_not_match",
    "length",
    "load_config",
    "no_error",
    "none",
    "not_contains",
    "not_equal",
    "not_none",
    "not_zero",
    "true",
    "zero",
]
