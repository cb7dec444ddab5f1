from appearance.components.theme_aware import ThemeAwareMixin, bind_theme_aware
from appearance.design.palettes import DARK_PALETTE, ROLE_NAMES


class DemoView(ThemeAwareMixin):
    def __init__(self):
        self.calls = []

    def on_theme_changed(self, theme, changed_keys):  # type: ignore[override]
        self.calls.append((theme.active_scheme, tuple(changed_keys)))


def test_bind_delivers_current_theme_immediately(make_resolver):
    resolver, _ = make_resolver("dark")
    view = DemoView()
    bind_theme_aware(resolver, view)
    assert view.calls == [("dark", ROLE_NAMES)]


def test_bound_view_receives_changes_until_cancelled(make_resolver):
    resolver, host = make_resolver("light")
    view = DemoView()
    sub = bind_theme_aware(resolver, view, initial=False)
    host.emit("dark")
    assert view.calls[-1][0] == "dark"
    assert "background" in view.calls[-1][1]
    sub.cancel()
    resolver.set_light_mode()
    assert len(view.calls) == 1


def test_view_can_restyle_from_palette(make_resolver):
    resolver, _ = make_resolver("light")

    class Card(ThemeAwareMixin):
        background = None

        def on_theme_changed(self, theme, changed_keys):  # type: ignore[override]
            if "card" in changed_keys:
                self.background = theme.colors.card

    card = Card()
    bind_theme_aware(resolver, card)
    resolver.set_dark_mode()
    assert card.background == DARK_PALETTE.card
