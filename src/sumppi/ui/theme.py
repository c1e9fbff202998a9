"""Theme system for the Sumppi terminal output.

Colors are rich-compatible color names. Dark and light variants keep the
menu readable on either terminal background.

Usage:
    from sumppi.ui import get_theme

    theme = get_theme()
    console.print(theme.success_text("Feed written"))
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Literal


class ThemeMode(str, Enum):
    """Available theme modes."""

    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


@dataclass(frozen=True)
class Theme:
    """Color theme for terminal output."""

    mode: str

    header: str  # Menu title
    selected: str  # Row under the cursor
    normal: str  # Other rows
    status: str  # Status line and key help
    success: str
    error: str
    data_url: str

    def success_text(self, text: str) -> str:
        """Format text with success color and checkmark."""
        return f"[{self.success}]✓[/{self.success}] {text}"

    def error_text(self, text: str) -> str:
        """Format text with error color and X mark."""
        return f"[{self.error}]✗[/{self.error}] {text}"

    def status_text(self, text: str) -> str:
        """Format text as a dim status line."""
        return f"[{self.status}]{text}[/{self.status}]"


DARK_THEME = Theme(
    mode="dark",
    header="bold magenta",
    selected="bold orchid",
    normal="default",
    status="grey50",
    success="green",
    error="red",
    data_url="steel_blue1",
)

LIGHT_THEME = Theme(
    mode="light",
    header="bold dark_magenta",
    selected="bold purple",
    normal="default",
    status="grey42",
    success="dark_green",
    error="red",
    data_url="blue",
)


def detect_terminal_theme() -> Literal["light", "dark"]:
    """Guess whether the terminal has a light or dark background.

    Defaults to dark.
    """
    if os.environ.get("SUMPPI_THEME", "").lower() == "light":
        return "light"

    # Format is "foreground;background" where 15=white bg, 0=black bg
    colorfgbg = os.environ.get("COLORFGBG", "")
    parts = colorfgbg.split(";")
    if len(parts) >= 2 and parts[-1].isdigit():
        return "light" if int(parts[-1]) >= 7 else "dark"

    return "dark"


_current_theme: Theme | None = None


def set_theme(mode: ThemeMode | str) -> Theme:
    """Set and cache the current theme.

    Args:
        mode: Theme mode ('light', 'dark', or 'auto')

    Returns:
        The active Theme instance
    """
    global _current_theme

    if isinstance(mode, str):
        mode = ThemeMode(mode.lower())

    if mode == ThemeMode.AUTO:
        mode = ThemeMode(detect_terminal_theme())

    _current_theme = LIGHT_THEME if mode == ThemeMode.LIGHT else DARK_THEME
    return _current_theme


def get_theme() -> Theme:
    """Get the current theme, auto-detecting it on first use."""
    if _current_theme is None:
        return set_theme(ThemeMode.AUTO)
    return _current_theme


def reset_theme() -> None:
    """Reset the theme cache, forcing re-detection on next access."""
    global _current_theme
    _current_theme = None
