"""Theme resolver.

Single source of truth for "which palette is active right now". Combines:

 - the host appearance signal (seeded once on ``start()``, then updated only
   by the host subscription)
 - the user's override (light / dark / follow system)

Precedence: an explicit override always wins; in follow-system mode the host
signal decides; an unknown host signal resolves to light.

Observers subscribe through the resolver's ``EventBus``. Every operation that
changes the resolved theme publishes ``ThemeEvent.THEME_CHANGED`` with the new
``ResolvedTheme`` and the list of palette roles whose color changed. Calls
that change nothing publish nothing.

The host subscription is a scoped resource: ``start()`` registers it once,
``close()`` releases it once. Use the resolver as a context manager so every
exit path releases it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from appearance.design.palettes import Palette, diff_palettes, palette_for
from appearance.design.schemes import AppearanceSignal, OverrideState, Scheme
from .appearance_source import AppearanceSource, Unsubscribe
from .event_bus import EventBus, EventHandler, Subscription, ThemeEvent

__all__ = [
    "ResolvedTheme",
    "ThemeDiff",
    "ThemeResolver",
    "InvalidOverrideError",
    "resolve",
]

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class InvalidOverrideError(ValueError):
    """Raised by ``set_override`` for a value that is not an override state."""


@dataclass(frozen=True)
class ResolvedTheme:
    active_scheme: Scheme
    colors: Palette
    is_following_system: bool

    @property
    def is_dark(self) -> bool:
        return self.active_scheme == "dark"

    @property
    def is_light(self) -> bool:
        return self.active_scheme == "light"


@dataclass
class ThemeDiff:
    """Role-level changes between two resolved themes.

    Attributes
    ----------
    changed : dict[str, tuple[str|None, str]]
        Mapping of palette role -> (old_color, new_color)
    """

    changed: Dict[str, Tuple[Optional[str], str]]

    @property
    def no_changes(self) -> bool:  # noqa: D401 - trivial
        return not self.changed


def resolve(override: OverrideState, appearance: AppearanceSignal) -> ResolvedTheme:
    """Pure resolution of an (override, appearance) pair."""
    if override is OverrideState.DARK:
        scheme: Scheme = "dark"
    elif override is OverrideState.LIGHT:
        scheme = "light"
    else:
        scheme = appearance.scheme()
    return ResolvedTheme(
        active_scheme=scheme,
        colors=palette_for(scheme),
        is_following_system=override is OverrideState.FOLLOW_SYSTEM,
    )


class ThemeResolver:
    def __init__(self, source: AppearanceSource, bus: Optional[EventBus] = None) -> None:
        self._source = source
        self._bus = bus if bus is not None else EventBus()
        self._override = OverrideState.FOLLOW_SYSTEM
        self._appearance = AppearanceSignal.UNKNOWN
        self._unsubscribe: Optional[Unsubscribe] = None
        self._closed = False

    # Lifecycle ------------------------------------------------------------
    def start(self) -> "ThemeResolver":
        if self._closed:
            raise RuntimeError("ThemeResolver cannot be restarted after close()")
        if self._unsubscribe is not None:
            return self
        self._appearance = AppearanceSignal.from_host(self._source.current())
        self._unsubscribe = self._source.subscribe(self._on_host_appearance)
        _logger.debug("Theme resolver started (appearance=%s)", self._appearance.value)
        return self

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        release, self._unsubscribe = self._unsubscribe, None
        if release is not None:
            release()
        # Override is session state; it does not outlive the session.
        self._override = OverrideState.FOLLOW_SYSTEM
        _logger.debug("Theme resolver closed")

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "ThemeResolver":
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Query ------------------------------------------------------------------
    def resolved_theme(self) -> ResolvedTheme:
        return resolve(self._override, self._appearance)

    @property
    def override(self) -> OverrideState:
        return self._override

    @property
    def system_color_scheme(self) -> AppearanceSignal:
        return self._appearance

    @property
    def colors(self) -> Palette:
        return self.resolved_theme().colors

    @property
    def is_dark(self) -> bool:
        return self.resolved_theme().is_dark

    @property
    def is_light(self) -> bool:
        return self.resolved_theme().is_light

    @property
    def is_following_system(self) -> bool:
        return self._override is OverrideState.FOLLOW_SYSTEM

    def create_styles(self, style_fn: Callable[[Palette], T]) -> T:
        """Build a style object from the active palette."""
        return style_fn(self.resolved_theme().colors)

    # Observers --------------------------------------------------------------
    @property
    def bus(self) -> EventBus:
        return self._bus

    def subscribe(self, handler: EventHandler, *, once: bool = False) -> Subscription:
        """Observe ``THEME_CHANGED``; cancel the returned handle on teardown."""
        return self._bus.subscribe(ThemeEvent.THEME_CHANGED, handler, once=once)

    # Mutators ---------------------------------------------------------------
    def set_light_mode(self) -> None:
        self._set_override(OverrideState.LIGHT)

    def set_dark_mode(self) -> None:
        self._set_override(OverrideState.DARK)

    def set_system_mode(self) -> None:
        self._set_override(OverrideState.FOLLOW_SYSTEM)

    def toggle(self) -> None:
        if self._override is OverrideState.DARK:
            self.set_light_mode()
        elif self._override is OverrideState.LIGHT:
            self.set_dark_mode()
        elif self._appearance is AppearanceSignal.DARK:
            self.set_light_mode()
        else:
            self.set_dark_mode()

    def set_override(self, value: OverrideState | str) -> None:
        try:
            state = OverrideState(value)
        except ValueError:
            raise InvalidOverrideError(
                f"Unknown theme override {value!r}; expected one of "
                f"{[s.value for s in OverrideState]}"
            ) from None
        self._set_override(state)

    # Internal ---------------------------------------------------------------
    def _set_override(self, state: OverrideState) -> None:
        if state is self._override:
            return
        before = self.resolved_theme()
        old, self._override = self._override, state
        _logger.debug("Theme override %s -> %s", old.value, state.value)
        # Theme first: a handler reacting to the raw event may mutate again,
        # and its THEME_CHANGED must chain from the theme observers already saw.
        self._publish_if_changed(before)
        self._bus.publish(ThemeEvent.OVERRIDE_CHANGED, {"old": old, "new": state})

    def _on_host_appearance(self, value: Any) -> None:
        if self._closed:
            return
        signal = AppearanceSignal.from_host(value)
        if signal is self._appearance:
            return
        before = self.resolved_theme()
        old, self._appearance = self._appearance, signal
        _logger.debug("Host appearance %s -> %s", old.value, signal.value)
        self._publish_if_changed(before)
        self._bus.publish(ThemeEvent.APPEARANCE_CHANGED, {"old": old, "new": signal})

    def _publish_if_changed(self, before: ResolvedTheme) -> None:
        after = self.resolved_theme()
        if after == before:
            return
        diff = ThemeDiff(diff_palettes(before.colors, after.colors))
        self._bus.publish(
            ThemeEvent.THEME_CHANGED,
            {
                "theme": after,
                "previous": before,
                "changed": list(diff.changed.keys()),
                "diff": diff,
            },
        )
