"""Exception types raised inside testarossa."""

from __future__ import annotations


class TestarossaError(Exception):
    """Base class for errors raised by the comparison engines and config loader."""


class UnsupportedTypeError(TestarossaError, TypeError):
    """A value does not belong to a shape the operation supports."""


class ComparisonError(TestarossaError):
    """User code such as ``__eq__`` or ``__bool__`` raised while comparing values."""


class MarkupError(TestarossaError, ValueError):
    """Markup, selector or pattern could not be compiled."""


class ConfigError(TestarossaError):
    """Settings file could not be read or validated."""


class FailNow(BaseException):
    """Aborts the current test body.

    Derives from BaseException so that ``except Exception`` blocks in the
    code under test do not swallow it.
    """
