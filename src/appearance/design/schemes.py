"""Color scheme vocabulary.

Two independent state axes feed theme resolution:

 - ``AppearanceSignal``: what the host platform reports (externally driven)
 - ``OverrideState``: what the user explicitly asked for

Both are ``str`` enums so values can be logged, compared against plain
strings and serialized without conversion.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Literal

__all__ = [
    "AppearanceSignal",
    "OverrideState",
    "Scheme",
    "FALLBACK_SCHEME",
]

_logger = logging.getLogger(__name__)

Scheme = Literal["light", "dark"]

# Used whenever the host cannot tell us which scheme is active.
FALLBACK_SCHEME: Scheme = "light"


class AppearanceSignal(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    UNKNOWN = "unknown"

    @classmethod
    def from_host(cls, value: Any) -> "AppearanceSignal":
        """Normalize a raw host value into a signal.

        Accepts ``"light"``/``"dark"`` (any case), existing signals, ``None``
        and enum-like objects exposing a ``name`` (e.g. ``Qt.ColorScheme``).
        Anything unrecognized maps to ``UNKNOWN``.
        """
        if value is None:
            return cls.UNKNOWN
        if isinstance(value, cls):
            return value
        text = value if isinstance(value, str) else getattr(value, "name", None)
        if isinstance(text, str):
            lowered = text.strip().lower()
            if lowered == "light":
                return cls.LIGHT
            if lowered == "dark":
                return cls.DARK
            if lowered in ("unknown", ""):
                return cls.UNKNOWN
        _logger.warning("Unrecognized host appearance value %r; treating as unknown", value)
        return cls.UNKNOWN

    def scheme(self) -> Scheme:
        if self is AppearanceSignal.DARK:
            return "dark"
        if self is AppearanceSignal.LIGHT:
            return "light"
        return FALLBACK_SCHEME


class OverrideState(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    FOLLOW_SYSTEM = "system"

    @property
    def is_explicit(self) -> bool:
        return self is not OverrideState.FOLLOW_SYSTEM
