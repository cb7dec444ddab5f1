"""Application-side wiring (session bootstrap)."""

from .bootstrap import ThemeSession, create_theme_session, theme_session, select_source  # noqa: F401

__all__ = ["ThemeSession", "create_theme_session", "theme_session", "select_source"]
