"""Static light / dark color palettes.

A ``Palette`` is a frozen record with one field per semantic color role.
Because both palettes are instances of the same record type their role sets
are identical by construction; there is no per-palette key list to drift.

Palettes also behave as read-only mappings (``palette["background"]``,
``palette.keys()``) so style builders can iterate roles generically.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .schemes import Scheme

__all__ = [
    "Palette",
    "LIGHT_PALETTE",
    "DARK_PALETTE",
    "PALETTES",
    "ROLE_NAMES",
    "palette_for",
    "validate_palette",
    "diff_palettes",
]


@dataclass(frozen=True)
class Palette(Mapping[str, str]):
    background: str
    surface: str
    card: str
    text: str
    text_secondary: str
    text_tertiary: str
    border: str
    divider: str
    primary: str
    success: str
    warning: str
    error: str
    shadow: str
    navigation_background: str
    navigation_text: str
    modal_overlay: str

    # Mapping protocol ----------------------------------------------------
    def __getitem__(self, role: str) -> str:
        if role not in ROLE_NAMES:
            raise KeyError(role)
        return getattr(self, role)

    def __iter__(self) -> Iterator[str]:
        return iter(ROLE_NAMES)

    def __len__(self) -> int:
        return len(ROLE_NAMES)

    __hash__ = object.__hash__  # identity hash; palettes are module singletons

    def to_dict(self) -> Dict[str, str]:
        return {role: getattr(self, role) for role in ROLE_NAMES}


ROLE_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(Palette))


LIGHT_PALETTE = Palette(
    background="#fafafa",
    surface="#ffffff",
    card="#ffffff",
    text="#1a1a1a",
    text_secondary="#666666",
    text_tertiary="#999999",
    border="#f0f0f0",
    divider="#e5e5e5",
    primary="#f59e0b",
    success="#34C759",
    warning="#FF9500",
    error="#FF3B30",
    shadow="#000000",
    navigation_background="#fafafa",
    navigation_text="#1a1a1a",
    modal_overlay="rgba(0, 0, 0, 0.5)",
)

DARK_PALETTE = Palette(
    background="#000000",
    surface="#1c1c1e",
    card="#2c2c2e",
    text="#ffffff",
    text_secondary="#a1a1a6",
    text_tertiary="#6d6d70",
    border="#38383a",
    divider="#48484a",
    primary="#f59e0b",
    success="#30D158",
    warning="#FF9F0A",
    error="#FF453A",
    shadow="#000000",
    navigation_background="#000000",
    navigation_text="#ffffff",
    modal_overlay="rgba(0, 0, 0, 0.7)",
)

PALETTES: Mapping[str, Palette] = {"light": LIGHT_PALETTE, "dark": DARK_PALETTE}


def palette_for(scheme: Scheme) -> Palette:
    return DARK_PALETTE if scheme == "dark" else LIGHT_PALETTE


def validate_palette(palette: Palette) -> List[str]:
    """Return roles whose color value is missing or empty."""
    return [role for role in ROLE_NAMES if not getattr(palette, role, None)]


def diff_palettes(
    old: Optional[Palette], new: Palette
) -> Dict[str, Tuple[Optional[str], str]]:
    """Map role -> (old_value, new_value) for every role whose color differs."""
    if old is new:
        return {}
    changed: Dict[str, Tuple[Optional[str], str]] = {}
    for role in ROLE_NAMES:
        ov = getattr(old, role) if old is not None else None
        nv = getattr(new, role)
        if ov != nv:
            changed[role] = (ov, nv)
    return changed
