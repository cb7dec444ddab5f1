"""Host appearance adapters.

An ``AppearanceSource`` is the resolver's only view of the host platform:

 - ``current()`` returns ``"light"``, ``"dark"`` or ``None`` (host cannot tell)
 - ``subscribe(callback)`` registers for change notifications and returns a
   zero-argument ``Unsubscribe`` callable releasing that registration

Two implementations live here:

``StaticAppearanceSource``
    In-process producer for headless sessions and tests. ``emit()`` publishes
    a change. With ``queued=True`` changes are held until
    ``process_pending()`` runs, the way an event loop delivers platform
    notifications between caller operations (FIFO, no coalescing).

``QtAppearanceSource``
    PyQt6 adapter over ``QStyleHints.colorScheme()`` and its
    ``colorSchemeChanged`` signal (Qt 6.5+).

PyQt6 is imported lazily so headless use never needs a display or Qt.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, List, Optional, Protocol, runtime_checkable

__all__ = [
    "AppearanceSource",
    "AppearanceCallback",
    "Unsubscribe",
    "StaticAppearanceSource",
    "QtAppearanceSource",
    "qt_application_running",
]

_logger = logging.getLogger(__name__)

try:  # Lazy / optional Qt import
    from PyQt6.QtGui import QGuiApplication  # type: ignore

    _QT_AVAILABLE = True
except Exception:  # noqa: BLE001
    QGuiApplication = None  # type: ignore
    _QT_AVAILABLE = False

AppearanceCallback = Callable[[Optional[str]], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class AppearanceSource(Protocol):
    def current(self) -> Optional[str]: ...  # pragma: no cover - structural

    def subscribe(self, callback: AppearanceCallback) -> Unsubscribe: ...  # pragma: no cover


def _release_once(action: Callable[[], None]) -> Unsubscribe:
    released = False

    def unsubscribe() -> None:
        nonlocal released
        if released:
            return
        released = True
        action()

    return unsubscribe


class StaticAppearanceSource:
    def __init__(self, scheme: Optional[str] = None, *, queued: bool = False) -> None:
        self._scheme = scheme
        self._queued = queued
        self._listeners: List[AppearanceCallback] = []
        self._pending: Deque[Optional[str]] = deque()

    def current(self) -> Optional[str]:
        return self._scheme

    def subscribe(self, callback: AppearanceCallback) -> Unsubscribe:
        self._listeners.append(callback)

        def remove() -> None:
            # Identity match: the same callable may be registered twice.
            for i, existing in enumerate(self._listeners):
                if existing is callback:
                    del self._listeners[i]
                    break

        return _release_once(remove)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def emit(self, scheme: Optional[str]) -> None:
        """Record a host change and notify listeners (now, or on next pump)."""
        self._scheme = scheme
        if self._queued:
            self._pending.append(scheme)
            return
        self._deliver(scheme)

    def process_pending(self) -> int:
        """Deliver queued changes in emission order. Returns how many ran."""
        delivered = 0
        while self._pending:
            self._deliver(self._pending.popleft())
            delivered += 1
        return delivered

    def _deliver(self, scheme: Optional[str]) -> None:
        for listener in list(self._listeners):
            listener(scheme)


def _scheme_from_qt(value: Any) -> Optional[str]:
    name = getattr(value, "name", value)
    if name == "Dark":
        return "dark"
    if name == "Light":
        return "light"
    return None


class QtAppearanceSource:
    """Reads the platform color scheme through Qt style hints.

    ``style_hints`` defaults to the running ``QGuiApplication``'s hints. Any
    object with ``colorScheme()`` and a ``colorSchemeChanged`` signal works,
    which keeps the adapter testable with a stand-in ``QObject``.
    """

    def __init__(self, style_hints: Any = None) -> None:
        if style_hints is None:
            if not _QT_AVAILABLE:
                raise RuntimeError("PyQt6 is not installed; QtAppearanceSource unavailable")
            app = QGuiApplication.instance()
            if app is None:
                raise RuntimeError("QtAppearanceSource requires a running QGuiApplication")
            style_hints = app.styleHints()
        if not hasattr(style_hints, "colorScheme"):
            raise RuntimeError("Qt >= 6.5 is required for color scheme reporting")
        self._hints = style_hints

    def current(self) -> Optional[str]:
        return _scheme_from_qt(self._hints.colorScheme())

    def subscribe(self, callback: AppearanceCallback) -> Unsubscribe:
        def on_changed(scheme: Any) -> None:
            callback(_scheme_from_qt(scheme))

        signal = self._hints.colorSchemeChanged
        signal.connect(on_changed)
        _logger.debug("Connected to Qt colorSchemeChanged")

        def disconnect() -> None:
            try:
                signal.disconnect(on_changed)
            except (TypeError, RuntimeError):  # hints object already destroyed
                _logger.debug("Qt colorSchemeChanged already disconnected")

        return _release_once(disconnect)


def qt_application_running() -> bool:
    return _QT_AVAILABLE and QGuiApplication.instance() is not None
