"""Theme awareness hook for consumers.

Widgets (or any render-side object) inherit ``ThemeAwareMixin`` and override
``on_theme_changed(theme, changed_keys)``. ``bind_theme_aware`` wires one
such object to a resolver and immediately delivers the current theme, so
the consumer never renders with a stale palette.

The returned ``Subscription`` belongs to the consumer; cancel it when the
consumer is destroyed so the resolver does not keep calling into it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol, runtime_checkable

from appearance.design.palettes import ROLE_NAMES
from appearance.services.event_bus import Event, Subscription

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from appearance.services.theme_resolver import ResolvedTheme, ThemeResolver

__all__ = ["ThemeAwareMixin", "ThemeAwareProtocol", "bind_theme_aware"]


@runtime_checkable
class ThemeAwareProtocol(Protocol):  # pragma: no cover - structural protocol
    def on_theme_changed(self, theme: "ResolvedTheme", changed_keys: List[str]) -> None: ...


class ThemeAwareMixin:
    """Anchor for isinstance checks; subclasses override ``on_theme_changed``."""

    def on_theme_changed(
        self, theme: "ResolvedTheme", changed_keys: List[str]
    ) -> None:  # pragma: no cover - override in subclass
        pass


def bind_theme_aware(
    resolver: "ThemeResolver", target: ThemeAwareProtocol, *, initial: bool = True
) -> Subscription:
    def handler(evt: Event) -> None:
        payload = evt.payload or {}
        target.on_theme_changed(payload["theme"], list(payload.get("changed", [])))

    sub = resolver.subscribe(handler)
    if initial:
        # First paint: every role counts as changed.
        target.on_theme_changed(resolver.resolved_theme(), list(ROLE_NAMES))
    return sub
