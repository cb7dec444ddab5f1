# Shared fixtures. Qt-backed tests run on the offscreen platform so no
# display is required.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from appearance.services.appearance_source import StaticAppearanceSource  # noqa: E402
from appearance.services.event_bus import EventBus, ThemeEvent  # noqa: E402
from appearance.services.service_locator import ServiceLocator  # noqa: E402
from appearance.services.theme_resolver import ThemeResolver  # noqa: E402


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def make_resolver(bus):
    """Build a started resolver over a static host seeded with ``scheme``."""
    created = []

    def factory(scheme=None, *, queued=False):
        source = StaticAppearanceSource(scheme, queued=queued)
        resolver = ThemeResolver(source, bus).start()
        created.append(resolver)
        return resolver, source

    yield factory
    for resolver in created:
        resolver.close()


@pytest.fixture
def theme_events(bus):
    received = []
    bus.subscribe(ThemeEvent.THEME_CHANGED, lambda evt: received.append(evt.payload))
    return received


@pytest.fixture
def locator():
    return ServiceLocator()
