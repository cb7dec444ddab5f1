"""Theme EventBus.

Small synchronous publish/subscribe channel between the resolver and the
consumers that render with its palette.

 - Typed event names (``ThemeEvent``) with free-form string names allowed
 - Handler failures are isolated: logged, recorded on ``errors``, dispatch continues
 - One-shot (``once``) subscriptions
 - ``Subscription`` handles that release themselves exactly once

Dispatch runs on the caller's thread; there is no queueing here. Ordering
across publishes is the order of ``publish`` calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional, Protocol

__all__ = [
    "ThemeEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_logger = logging.getLogger(__name__)


class ThemeEvent(str, Enum):
    APPEARANCE_CHANGED = "appearance_changed"
    OVERRIDE_CHANGED = "override_changed"
    THEME_CHANGED = "theme_changed"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True
    _release: Optional[Callable[["Subscription"], None]] = field(
        default=None, repr=False, compare=False
    )

    def cancel(self) -> None:
        """Detach from the bus. Safe to call more than once."""
        if not self.active:
            return
        self.active = False
        release, self._release = self._release, None
        if release is not None:
            release(self)


def _key(name: str | ThemeEvent) -> str:
    return name.value if isinstance(name, ThemeEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers are snapshotted before dispatch so a handler may subscribe or
    cancel (itself included) while an event is being delivered.
    """

    def __init__(self) -> None:
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self, name: str | ThemeEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = _key(name)
        sub = Subscription(event=key, handler=handler, once=once, _release=self._detach)
        self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        sub.cancel()
        # Handles created elsewhere (no release hook) still get removed.
        self._detach(sub)

    def _detach(self, sub: Subscription) -> None:
        bucket = self._subs.get(sub.event)
        if not bucket:
            return
        self._subs[sub.event] = [s for s in bucket if s is not sub]
        if not self._subs[sub.event]:
            self._subs.pop(sub.event, None)

    def clear(self) -> None:
        for bucket in list(self._subs.values()):
            for sub in bucket:
                sub.active = False
                sub._release = None
        self._subs.clear()
        self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | ThemeEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        for sub in list(self._subs.get(key, ())):
            if not sub.active:
                continue
            if sub.once:
                sub.cancel()
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - one bad observer must not break the rest
                self._errors.append((evt, exc))
                _logger.exception("Handler %r failed for event %s", sub.handler, key)
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | ThemeEvent) -> int:
        return len(self._subs.get(_key(name), ()))

    def list_events(self) -> list[str]:
        return list(self._subs.keys())

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        return list(self._errors)
