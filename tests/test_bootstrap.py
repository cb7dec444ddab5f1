import logging

import pytest

from appearance.app.bootstrap import create_theme_session, select_source, theme_session
from appearance.config.settings import ThemeSettings
from appearance.services.appearance_source import StaticAppearanceSource
from appearance.services.event_bus import EventBus
from appearance.services.logging_service import LoggingService
from appearance.services.service_locator import (
    EVENT_BUS_KEY,
    LOGGING_SERVICE_KEY,
    RESOLVER_KEY,
    ServiceAlreadyRegisteredError,
    ServiceLocator,
)
from appearance.services.theme_resolver import ThemeResolver


def test_session_registers_and_starts(locator):
    settings = ThemeSettings(source="static", static_scheme="dark")
    with theme_session(settings, locator=locator) as session:
        resolver = locator.get_typed(RESOLVER_KEY, ThemeResolver)
        assert resolver is session.resolver
        assert locator.get_typed(EVENT_BUS_KEY, EventBus) is session.bus
        assert resolver.active
        assert resolver.resolved_theme().active_scheme == "dark"
        assert session.metadata["source"] == "StaticAppearanceSource"
    assert list(locator.list_keys()) == []
    assert session.resolver.closed


def test_session_teardown_on_error_releases_host(locator):
    host = StaticAppearanceSource("light")
    with pytest.raises(ValueError):
        with theme_session(ThemeSettings(log_capture=False), source=host, locator=locator):
            assert host.listener_count == 1
            raise ValueError("view failed")
    assert host.listener_count == 0
    assert list(locator.list_keys()) == []


def test_second_open_session_in_same_registry_is_rejected(locator):
    settings = ThemeSettings(source="static", log_capture=False)
    first = create_theme_session(settings, locator=locator)
    host = StaticAppearanceSource("dark")
    with pytest.raises(ServiceAlreadyRegisteredError):
        create_theme_session(settings, source=host, locator=locator)
    # The failed session left nothing behind and did not disturb the first one.
    assert host.listener_count == 0
    assert locator.get(RESOLVER_KEY) is first.resolver
    first.close()
    first.close()
    assert list(locator.list_keys()) == []


def test_log_capture_records_transitions(locator):
    settings = ThemeSettings(source="static", static_scheme="light", log_capacity=50)
    with theme_session(settings, locator=locator) as session:
        log_svc = locator.get_typed(LOGGING_SERVICE_KEY, LoggingService)
        session.resolver.set_dark_mode()
        messages = [e.message for e in log_svc.recent()]
        assert any("light -> dark" in m or "system -> dark" in m for m in messages)
    assert not log_svc.attached


def test_select_source_static_uses_seed():
    source = select_source(ThemeSettings(source="static", static_scheme="dark"))
    assert isinstance(source, StaticAppearanceSource)
    assert source.current() == "dark"


def test_overlapping_sessions_restore_logger_level():
    logger = logging.getLogger("appearance")
    before = logger.level
    settings = ThemeSettings(source="static", static_scheme="light")
    first = create_theme_session(settings, locator=ServiceLocator())
    second = create_theme_session(settings, locator=ServiceLocator())
    first.close()
    second.resolver.set_dark_mode()
    assert any("-> dark" in e.message for e in second.logging_service.recent())
    second.close()
    assert logger.level == before
