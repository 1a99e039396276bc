"""Failure reporting: message formatting, attribution and handle signalling."""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from testarossa.callsite import CallSite, resolve
from testarossa.config import Settings, current_settings
from testarossa.handles import TestingT
from testarossa.shapes import is_absent

logger = logging.getLogger(__name__)

# printf-style conversion, e.g. %s, %d, %-5.2f, %(name)s
_PLACEHOLDER = re.compile(r"%(?:\([^)]*\))?[#0\- +]*(?:\*|\d+)?(?:\.(?:\*|\d+))?[diouxXeEfFgGcrsa]")


@dataclass(frozen=True)
class Template:
    template: str
    args: tuple[Any, ...]


@dataclass(frozen=True)
class Dump:
    values: tuple[Any, ...]


Message = Template | Dump


def parse_message(args: tuple[Any, ...]) -> Message:
    """Decide once how the caller's message arguments are to be shown."""
    if len(args) > 1 and isinstance(args[0], str) and _PLACEHOLDER.search(args[0]):
        return Template(args[0], tuple(args[1:]))
    return Dump(tuple(args))


def truncate(text: str, settings: Settings | None = None) -> str:
    settings = settings or current_settings()
    if len(text) <= settings.max_value_length:
        return text
    return text[: settings.max_value_length] + settings.ellipsis


def render(value: Any, settings: Settings | None = None) -> str:
    """Render a value for a failure report.

    Pydantic models render as JSON, exceptions as ``Type: message`` and
    everything else through ``str()``. The result is truncated to
    ``max_value_length`` characters.
    """
    if isinstance(value, str):
        text = value
    elif is_absent(value):
        text = repr(value)
    elif isinstance(value, BaseModel):
        text = value.model_dump_json()
    elif isinstance(value, BaseException):
        text = f"{type(value).__name__}: {value}" if str(value) else type(value).__name__
    else:
        try:
            text = str(value)
        except Exception as e:
            text = f"<unprintable {type(value).__name__}: {type(e).__name__}>"
    return truncate(text, settings)


def format_lines(message: Message, settings: Settings | None = None) -> list[str]:
    """Turn a message into rendered, non-empty lines."""
    settings = settings or current_settings()
    if isinstance(message, Template):
        try:
            return [truncate(message.template % message.args, settings)]
        except (TypeError, ValueError, KeyError):
            message = Dump((message.template, *message.args))
    lines = []
    for value in message.values:
        text = render(value, settings)
        if text:
            lines.append(text)
    return lines


def format_report(name: str, site: CallSite, lines: list[str], settings: Settings) -> str:
    indent = settings.indent
    out = [f"--- FAIL: {name}"]
    if site:
        for frame in site.frames:
            out.append(f"{indent}{frame.filename}:{frame.lineno}")
    for line in lines:
        out.append(indent + line.replace("\n", "\n" + indent))
    return "\n".join(out) + "\n"


def _handle_name(t: TestingT, site: CallSite) -> str:
    name_fn = getattr(t, "name", None)
    name = name_fn() if callable(name_fn) else ""
    return name or site.test_name


def fail_with(t: TestingT, condition: bool, headline: str, args: tuple[Any, ...]) -> bool:
    """Like fail_if, but leads the report with a fixed *headline*.

    The headline is never interpolated; only *args* are parsed as a message.
    """
    if not condition:
        return False
    settings = current_settings()
    lines = [truncate(headline, settings), *format_lines(parse_message(args), settings)]
    _report(t, lines, settings)
    return True


def fail_if(t: TestingT, condition: bool, *args: Any) -> bool:
    """Fail the test if *condition* holds. Returns *condition*.

    The report names the test, lists the source locations from the failing
    helper out to the test function, and shows each argument on its own
    line (or interpolates them when the first is a ``%`` template).
    """
    if not condition:
        return False
    settings = current_settings()
    _report(t, format_lines(parse_message(args), settings), settings)
    return True


def _report(t: TestingT, lines: list[str], settings: Settings) -> None:
    site = resolve(settings)
    report = format_report(_handle_name(t, site), site, lines, settings)
    stream = sys.stdout if settings.output == "stdout" else sys.stderr
    stream.write(report)
    stream.flush()
    logger.debug(report.rstrip("\n"))
    t.fail()


def fail_if_error(t: TestingT, err: BaseException | None, *args: Any) -> bool:
    """Shortcut for ``fail_if(t, err is not None, err, *args)``."""
    return fail_if(t, err is not None, err, *args)


def fatal_if(t: TestingT, condition: bool, *args: Any) -> bool:
    """Fail the test and stop it if *condition* holds."""
    if condition:
        fail_if(t, condition, *args)
        t.fail_now()
    return condition


def fatal_if_error(t: TestingT, err: BaseException | None, *args: Any) -> bool:
    """Shortcut for ``fatal_if(t, err is not None, err, *args)``."""
    return fatal_if(t, err is not None, err, *args)
