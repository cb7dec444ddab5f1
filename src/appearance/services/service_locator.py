"""Service registry for theme sessions.

Lets a bootstrap hand the session's resolver, event bus and host source to
consumers that are not constructed with direct references (views built by
a framework, plugins).

    locator = ServiceLocator()
    locator.register(RESOLVER_KEY, resolver)
    resolver = locator.get_typed(RESOLVER_KEY, ThemeResolver)

Nothing in the resolver itself reads from a registry; a registry is only a
lookup convenience for the session that owns the objects. The module-level
``services`` instance is the default registry for application code; tests
normally build their own ``ServiceLocator``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Type, TypeVar

T = TypeVar("T")

__all__ = [
    "ServiceLocator",
    "services",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "RESOLVER_KEY",
    "EVENT_BUS_KEY",
    "APPEARANCE_SOURCE_KEY",
    "LOGGING_SERVICE_KEY",
]

RESOLVER_KEY = "theme_resolver"
EVENT_BUS_KEY = "theme_event_bus"
APPEARANCE_SOURCE_KEY = "appearance_source"
LOGGING_SERVICE_KEY = "logging_service"


class ServiceAlreadyRegisteredError(RuntimeError):
    """Raised when registering an existing key without allow_override."""


class ServiceNotFoundError(KeyError):
    """Raised when a requested service key is not present."""


@dataclass
class ServiceRecord:
    key: str
    value: Any
    origin: str | None = None


class ServiceLocator:
    """Session objects keyed by role (``RESOLVER_KEY``, ``EVENT_BUS_KEY``, ...).

    A key holds one object at a time: a second open session registering
    into the same locator is rejected unless it asks to replace the entry.
    """

    def __init__(self) -> None:
        self._services: Dict[str, ServiceRecord] = {}

    def register(
        self, key: str, value: Any, *, allow_override: bool = False, origin: str | None = None
    ) -> None:
        if key in self._services and not allow_override:
            owner = self._services[key].origin or "another session"
            raise ServiceAlreadyRegisteredError(f"'{key}' is already held by {owner}")
        self._services[key] = ServiceRecord(key=key, value=value, origin=origin)

    def get(self, key: str) -> Any:
        record = self._services.get(key)
        if record is None:
            raise ServiceNotFoundError(key)
        return record.value

    def get_typed(self, key: str, expected_type: Type[T]) -> T:
        """Look up a session object, e.g. ``get_typed(RESOLVER_KEY, ThemeResolver)``.

        A key holding some other kind of object raises TypeError; that means
        a caller registered the wrong thing under a session role.
        """
        value = self.get(key)
        if not isinstance(value, expected_type):
            raise TypeError(
                f"'{key}' holds {type(value).__name__}, not {expected_type.__name__}"
            )
        return value

    def try_get(self, key: str, default: Any = None) -> Any:
        """Lookup that tolerates a missing role (session closed or never opened)."""
        record = self._services.get(key)
        return record.value if record else default

    def unregister(self, key: str) -> None:
        """Drop a role; a missing key is ignored so teardown can run twice."""
        self._services.pop(key, None)

    def list_keys(self) -> List[str]:
        return list(self._services.keys())


services = ServiceLocator()
