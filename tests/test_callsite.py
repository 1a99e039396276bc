"""Tests for call-site attribution."""

import sys
from pathlib import Path

from testarossa.callsite import CallSite, resolve
from testarossa.config import Settings, configure
from testarossa.reporter import fail_if


def _resolve_from_helper(settings=None):
    return resolve(settings or Settings())


def _nested_helper():
    return _resolve_from_helper()


def test_resolve_finds_test_function():
    line = sys._getframe().f_lineno + 1
    site = _resolve_from_helper()
    assert site
    assert site.test_name == "test_resolve_finds_test_function"
    assert Path(site.filename).name == "test_callsite.py"
    assert site.lineno == line


def test_resolve_collects_helper_frames_innermost_first():
    site = _nested_helper()
    functions = [frame.function for frame in site.frames]
    assert functions == [
        "_resolve_from_helper",
        "_nested_helper",
        "test_resolve_collects_helper_frames_innermost_first",
    ]


def test_resolve_stops_at_runner_without_test_frame():
    site = _resolve_from_helper(Settings(test_prefixes=["no_such_prefix"]))
    assert not site
    assert site == CallSite()


def test_custom_prefix():
    def check_it():
        return _resolve_from_helper(Settings(test_prefixes=["check_"]))

    site = check_it()
    assert site.test_name == "check_it"


def test_benchmark_prefix():
    def benchmark_equal():
        return _resolve_from_helper()

    site = benchmark_equal()
    assert site.test_name == "benchmark_equal"


def test_closure_inside_test_attributes_to_test(mt, capsys):
    def check(value):
        fail_if(mt, value != 0, "not zero")

    line = sys._getframe().f_lineno + 1
    check(5)
    out = capsys.readouterr().out
    assert out.startswith("--- FAIL: test_closure_inside_test_attributes_to_test\n")
    assert f"test_callsite.py:{line}\n" in out


def test_report_without_location(mt, capsys):
    configure(Settings(test_prefixes=["no_such_prefix"]))
    fail_if(mt, True, "boom")
    assert capsys.readouterr().out == "--- FAIL: \n    boom\n"
