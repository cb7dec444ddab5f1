"""Design package.

Static palette data and the scheme vocabulary shared by the resolver and
its consumers.
"""

from .schemes import AppearanceSignal, OverrideState, Scheme, FALLBACK_SCHEME  # noqa: F401
from .palettes import (  # noqa: F401
    Palette,
    LIGHT_PALETTE,
    DARK_PALETTE,
    PALETTES,
    ROLE_NAMES,
    palette_for,
    validate_palette,
    diff_palettes,
)

__all__ = [
    "AppearanceSignal",
    "OverrideState",
    "Scheme",
    "FALLBACK_SCHEME",
    "Palette",
    "LIGHT_PALETTE",
    "DARK_PALETTE",
    "PALETTES",
    "ROLE_NAMES",
    "palette_for",
    "validate_palette",
    "diff_palettes",
]
