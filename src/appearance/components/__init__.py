from .theme_aware import ThemeAwareMixin, ThemeAwareProtocol, bind_theme_aware  # noqa: F401

__all__ = ["ThemeAwareMixin", "ThemeAwareProtocol", "bind_theme_aware"]
