"""Terminal UI for Sumppi."""

from sumppi.ui.theme import Theme, ThemeMode, get_theme, reset_theme, set_theme

__all__ = ["Theme", "ThemeMode", "get_theme", "set_theme", "reset_theme"]
