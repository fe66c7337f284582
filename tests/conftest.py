"""
Shared fixtures: a pinned clock and an engine built on it

Time is pinned to 2000-12-31 23:59:59 UTC so date shortcodes render
predictably.
"""

from datetime import datetime, timezone

import pytest

from slickcode.lib.engine import ShortcodeEngine
from slickcode.lib.handlers import handlers_registerBuiltins
from slickcode.lib.registry import HandlerRegistry
from slickcode.models.host import HostContext


FIXED_NOW = datetime(2000, 12, 31, 23, 59, 59, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def registry(fixed_clock):
    registry = HandlerRegistry(builtins=False)
    handlers_registerBuiltins(registry, clock=fixed_clock)
    return registry


@pytest.fixture
def engine(registry):
    return ShortcodeEngine(registry)


@pytest.fixture
def host():
    return HostContext(
        site_url="https://example.org",
        date_format="F j, Y",
        timezone="UTC",
    )
