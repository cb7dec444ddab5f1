"""Appearance public API.

Small, stable surface for callers that render with the resolved theme.
Deeper modules stay importable (``appearance.services.appearance_source``
for host adapters, ``appearance.design`` for palette data).

Importing this package never creates a QGuiApplication.
"""

from __future__ import annotations

from .design import (  # noqa: F401
    AppearanceSignal,
    OverrideState,
    Palette,
    LIGHT_PALETTE,
    DARK_PALETTE,
    ROLE_NAMES,
)
from .services.event_bus import EventBus, ThemeEvent, Event, Subscription  # noqa: F401
from .services.service_locator import (  # noqa: F401
    services,
    ServiceLocator,
    ServiceAlreadyRegisteredError,
    ServiceNotFoundError,
)
from .services.appearance_source import (  # noqa: F401
    AppearanceSource,
    StaticAppearanceSource,
    QtAppearanceSource,
)
from .services.theme_resolver import (  # noqa: F401
    ThemeResolver,
    ResolvedTheme,
    ThemeDiff,
    InvalidOverrideError,
)
from .app.bootstrap import ThemeSession, create_theme_session, theme_session  # noqa: F401

from . import design  # noqa: F401

__all__ = [
    "AppearanceSignal",
    "OverrideState",
    "Palette",
    "LIGHT_PALETTE",
    "DARK_PALETTE",
    "ROLE_NAMES",
    "EventBus",
    "ThemeEvent",
    "Event",
    "Subscription",
    "services",
    "ServiceLocator",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "AppearanceSource",
    "StaticAppearanceSource",
    "QtAppearanceSource",
    "ThemeResolver",
    "ResolvedTheme",
    "ThemeDiff",
    "InvalidOverrideError",
    "ThemeSession",
    "create_theme_session",
    "theme_session",
    "design",
]
