"""Environment-driven configuration for theme sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final, Mapping, Optional

__all__ = [
    "SOURCE_CHOICES",
    "DEFAULT_SOURCE",
    "DEFAULT_LOG_CAPACITY",
    "ThemeSettings",
]

SOURCE_CHOICES: Final = ("auto", "qt", "static")
DEFAULT_SOURCE: Final = "auto"
DEFAULT_LOG_CAPACITY: Final = 200

ENV_SOURCE: Final = "APPEARANCE_SOURCE"
ENV_STATIC_SCHEME: Final = "APPEARANCE_STATIC_SCHEME"
ENV_LOG_CAPTURE: Final = "APPEARANCE_LOG_CAPTURE"
ENV_LOG_CAPACITY: Final = "LOG_CAPTURE_CAPACITY"

_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class ThemeSettings:
    """Session configuration.

    Attributes
    ----------
    source: Host adapter selection ("auto" picks Qt when an application is running).
    static_scheme: Seed scheme for the static source (None = host unknown).
    log_capture: Attach the ring-buffer logging service for the session.
    log_capacity: Ring buffer size.
    """

    source: str = DEFAULT_SOURCE
    static_scheme: Optional[str] = None
    log_capture: bool = True
    log_capacity: int = DEFAULT_LOG_CAPACITY

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ThemeSettings":
        env = os.environ if environ is None else environ
        source = env.get(ENV_SOURCE, DEFAULT_SOURCE).strip().lower()
        if source not in SOURCE_CHOICES:
            source = DEFAULT_SOURCE
        try:
            capacity = int(env.get(ENV_LOG_CAPACITY, DEFAULT_LOG_CAPACITY))
        except ValueError:
            capacity = DEFAULT_LOG_CAPACITY
        return cls(
            source=source,
            static_scheme=env.get(ENV_STATIC_SCHEME) or None,
            log_capture=env.get(ENV_LOG_CAPTURE, "1").strip().lower() not in _FALSY,
            log_capacity=max(1, capacity),
        )
