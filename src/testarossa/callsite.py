"""Attribute failures to the test function that triggered them."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from types import FrameType

from testarossa.config import Settings

logger = logging.getLogger(__name__)

_PACKAGE = __name__.partition(".")[0]


@dataclass(frozen=True)
class Frame:
    function: str
    filename: str
    lineno: int


@dataclass(frozen=True)
class CallSite:
    """Where a failure is attributed.

    Attributes:
        test_name: Unqualified name of the test or benchmark function.
        filename: Source file of the attributed frame, "" when unknown.
        lineno: Line within *filename*, 0 when unknown.
        frames: Path from the innermost non-library frame out to the
            attributed frame, for stack display.
    """

    test_name: str = ""
    filename: str = ""
    lineno: int = 0
    frames: tuple[Frame, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return bool(self.filename)


def _in_modules(module: str, prefixes: list[str]) -> bool:
    return any(module == p or module.startswith(p + ".") for p in prefixes)


def _current_frame() -> FrameType | None:
    getframe = getattr(sys, "_getframe", None)
    if getframe is None:
        return None
    try:
        return getframe(2)
    except ValueError:
        return None


def resolve(settings: Settings) -> CallSite:
    """Walk the stack outward from the caller and find the test frame.

    Library frames are skipped unless they are themselves test entry points.
    The walk stops at the first function whose name starts with one of
    ``settings.test_prefixes``. Reaching a host-runner frame or the bottom
    of the stack first yields an empty CallSite.
    """
    frame = _current_frame()
    path: list[Frame] = []
    try:
        while frame is not None:
            code = frame.f_code
            module = frame.f_globals.get("__name__", "")
            name = code.co_name
            is_entry = name.startswith(tuple(settings.test_prefixes))

            if _in_modules(module, settings.runner_modules) and not is_entry:
                logger.debug(f"Reached runner frame {module}.{name} without a test frame")
                break
            if _in_modules(module, [_PACKAGE]) and not is_entry:
                frame = frame.f_back
                continue

            path.append(Frame(name, code.co_filename, frame.f_lineno))
            if is_entry:
                return CallSite(
                    test_name=name,
                    filename=code.co_filename,
                    lineno=frame.f_lineno,
                    frames=tuple(path),
                )
            frame = frame.f_back
    finally:
        del frame
    return CallSite()
