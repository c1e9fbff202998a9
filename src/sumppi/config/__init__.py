"""Configuration loading for Sumppi."""

from sumppi.config.manager import ConfigManager
from sumppi.config.schema import SeriesEntry, SumppiConfig

__all__ = ["ConfigManager", "SeriesEntry", "SumppiConfig"]
