"""pytest plugin providing the ``t`` and ``asserter`` fixtures."""

from __future__ import annotations

import pytest

from testarossa.asserter import Asserter
from testarossa.config import get_settings
from testarossa.errors import ConfigError
from testarossa.handles import PytestT
from testarossa.verbose import configure_logging, reset_logging

_handle_key = pytest.StashKey[PytestT]()


def pytest_configure(config: pytest.Config) -> None:
    try:
        settings = get_settings()
    except ConfigError as e:
        raise pytest.UsageError(str(e)) from e
    configure_logging(settings)


def pytest_unconfigure(config: pytest.Config) -> None:
    reset_logging()


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item):
    result = yield
    # Only reached when the test body did not raise
    handle = item.stash.get(_handle_key, None)
    if handle is not None:
        handle.check()
    return result


@pytest.fixture
def t(request: pytest.FixtureRequest) -> PytestT:
    """Test handle whose non-fatal failures fail the test once it returns."""
    handle = PytestT(request.node.nodeid)
    request.node.stash[_handle_key] = handle
    return handle


@pytest.fixture
def asserter(t: PytestT) -> Asserter:
    """Fluent assertions bound to the ``t`` handle."""
    return Asserter(t)
