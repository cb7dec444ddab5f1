from dataclasses import FrozenInstanceError

import pytest

from appearance.design.palettes import (
    DARK_PALETTE,
    LIGHT_PALETTE,
    PALETTES,
    ROLE_NAMES,
    diff_palettes,
    palette_for,
    validate_palette,
)


def test_palettes_share_identical_role_sets():
    assert set(LIGHT_PALETTE.keys()) == set(DARK_PALETTE.keys()) == set(ROLE_NAMES)
    assert len(ROLE_NAMES) == 16


@pytest.mark.parametrize("palette", [LIGHT_PALETTE, DARK_PALETTE])
def test_every_role_has_a_color(palette):
    assert validate_palette(palette) == []
    for role in ROLE_NAMES:
        assert palette[role]


def test_palettes_are_immutable():
    with pytest.raises(FrozenInstanceError):
        LIGHT_PALETTE.background = "#123456"  # type: ignore[misc]


def test_mapping_access_matches_attributes():
    assert LIGHT_PALETTE["text_secondary"] == LIGHT_PALETTE.text_secondary == "#666666"
    assert DARK_PALETTE.get("modal_overlay") == "rgba(0, 0, 0, 0.7)"
    assert "navigation_text" in DARK_PALETTE
    assert "nope" not in DARK_PALETTE
    with pytest.raises(KeyError):
        LIGHT_PALETTE["nope"]


def test_to_dict_preserves_role_order():
    assert list(DARK_PALETTE.to_dict().keys()) == list(ROLE_NAMES)


def test_palette_for_returns_module_instances():
    assert palette_for("dark") is DARK_PALETTE
    assert palette_for("light") is LIGHT_PALETTE
    assert PALETTES["dark"] is DARK_PALETTE


def test_diff_skips_roles_shared_between_palettes():
    changed = diff_palettes(LIGHT_PALETTE, DARK_PALETTE)
    # primary and shadow are identical in both schemes
    assert "primary" not in changed
    assert "shadow" not in changed
    assert changed["background"] == ("#fafafa", "#000000")
    assert diff_palettes(DARK_PALETTE, DARK_PALETTE) == {}
