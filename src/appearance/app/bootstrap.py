"""Theme session bootstrap.

Builds everything a consumer needs to render with the resolved theme:

 - the host appearance source (Qt style hints or an in-process static source)
 - the session's EventBus and ThemeResolver (started, subscription registered)
 - optional ring-buffer log capture
 - registration of those objects in a ``ServiceLocator``

``theme_session()`` is the preferred entry point: a context manager that
tears the session down on every exit path (subscription released,
services unregistered, log capture detached).
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from appearance.config.settings import ThemeSettings
from appearance.services.appearance_source import (
    AppearanceSource,
    QtAppearanceSource,
    StaticAppearanceSource,
    qt_application_running,
)
from appearance.services.event_bus import EventBus
from appearance.services.logging_service import LoggingService
from appearance.services.service_locator import (
    APPEARANCE_SOURCE_KEY,
    EVENT_BUS_KEY,
    LOGGING_SERVICE_KEY,
    RESOLVER_KEY,
    ServiceLocator,
    services as default_services,
)
from appearance.services.theme_resolver import ThemeResolver

__all__ = [
    "ThemeSession",
    "create_theme_session",
    "theme_session",
    "select_source",
]

_logger = logging.getLogger(__name__)

_SESSION_KEYS = (RESOLVER_KEY, EVENT_BUS_KEY, APPEARANCE_SOURCE_KEY, LOGGING_SERVICE_KEY)


@dataclass
class ThemeSession:
    """References created for one theme session.

    Attributes
    ----------
    resolver: Started ThemeResolver
    bus: EventBus the resolver publishes on
    source: Host appearance adapter in use
    services: Registry the session objects were registered in
    settings: Configuration the session was built from
    logging_service: Log capture (None when disabled)
    started_at: Monotonic timestamp when the session started
    metadata: Free-form dict (e.g. which adapter was chosen)
    """

    resolver: ThemeResolver
    bus: EventBus
    source: AppearanceSource
    services: ServiceLocator
    settings: ThemeSettings
    logging_service: Optional[LoggingService]
    started_at: float
    metadata: dict[str, Any] = field(default_factory=dict)
    closed: bool = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.resolver.close()
        finally:
            owned = {
                RESOLVER_KEY: self.resolver,
                EVENT_BUS_KEY: self.bus,
                APPEARANCE_SOURCE_KEY: self.source,
                LOGGING_SERVICE_KEY: self.logging_service,
            }
            for key in _SESSION_KEYS:
                if owned[key] is not None and self.services.try_get(key) is owned[key]:
                    self.services.unregister(key)
            if self.logging_service is not None:
                self.logging_service.detach()
        _logger.debug("Theme session closed after %.3fs", time.perf_counter() - self.started_at)


def select_source(settings: ThemeSettings) -> AppearanceSource:
    """Pick the host adapter described by ``settings``.

    ``"auto"`` uses Qt when a QGuiApplication is running, else a static source.
    """
    if settings.source == "qt":
        return QtAppearanceSource()
    if settings.source == "auto" and qt_application_running():
        return QtAppearanceSource()
    return StaticAppearanceSource(settings.static_scheme)


def create_theme_session(
    settings: ThemeSettings | None = None,
    *,
    source: AppearanceSource | None = None,
    locator: ServiceLocator | None = None,
) -> ThemeSession:
    """Create and start a theme session.

    Parameters
    ----------
    settings: Explicit configuration; read from the environment when None.
    source: Host adapter to use instead of ``select_source(settings)``.
    locator: Registry for the session objects (module default when None).
        Registering into a registry that still holds an open session raises
        ``ServiceAlreadyRegisteredError``.
    """
    started = time.perf_counter()
    if settings is None:
        settings = ThemeSettings.from_env()
    registry = locator if locator is not None else default_services
    host = source if source is not None else select_source(settings)

    log_svc: Optional[LoggingService] = None
    if settings.log_capture:
        log_svc = LoggingService(capacity=settings.log_capacity)
        log_svc.attach()

    bus = EventBus()
    resolver = ThemeResolver(host, bus)
    registered: list[str] = []
    try:
        for key, value in [
            (RESOLVER_KEY, resolver),
            (EVENT_BUS_KEY, bus),
            (APPEARANCE_SOURCE_KEY, host),
        ] + ([(LOGGING_SERVICE_KEY, log_svc)] if log_svc is not None else []):
            registry.register(key, value, origin=__name__)
            registered.append(key)
        resolver.start()
    except BaseException:
        resolver.close()
        for key in registered:
            registry.unregister(key)
        if log_svc is not None:
            log_svc.detach()
        raise

    session = ThemeSession(
        resolver=resolver,
        bus=bus,
        source=host,
        services=registry,
        settings=settings,
        logging_service=log_svc,
        started_at=started,
        metadata={"source": type(host).__name__},
    )
    _logger.debug(
        "Theme session started with %s (appearance=%s)",
        type(host).__name__,
        resolver.system_color_scheme.value,
    )
    return session


@contextmanager
def theme_session(
    settings: ThemeSettings | None = None,
    *,
    source: AppearanceSource | None = None,
    locator: ServiceLocator | None = None,
) -> Iterator[ThemeSession]:
    session = create_theme_session(settings, source=source, locator=locator)
    try:
        yield session
    finally:
        session.close()
