import logging
from enum import Enum

import pytest

from appearance.design.schemes import AppearanceSignal, OverrideState


class _FakeQtScheme(Enum):
    Unknown = 0
    Light = 1
    Dark = 2


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("light", AppearanceSignal.LIGHT),
        ("dark", AppearanceSignal.DARK),
        ("DARK", AppearanceSignal.DARK),
        (None, AppearanceSignal.UNKNOWN),
        ("", AppearanceSignal.UNKNOWN),
        (AppearanceSignal.DARK, AppearanceSignal.DARK),
        (_FakeQtScheme.Dark, AppearanceSignal.DARK),
        (_FakeQtScheme.Unknown, AppearanceSignal.UNKNOWN),
    ],
)
def test_from_host_normalizes(raw, expected):
    assert AppearanceSignal.from_host(raw) is expected


def test_unrecognized_value_is_unknown_and_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="appearance.design.schemes"):
        assert AppearanceSignal.from_host("sepia") is AppearanceSignal.UNKNOWN
    assert "sepia" in caplog.text


def test_unknown_signal_falls_back_to_light():
    assert AppearanceSignal.UNKNOWN.scheme() == "light"
    assert AppearanceSignal.DARK.scheme() == "dark"


def test_override_explicitness():
    assert OverrideState.LIGHT.is_explicit
    assert OverrideState.DARK.is_explicit
    assert not OverrideState.FOLLOW_SYSTEM.is_explicit
