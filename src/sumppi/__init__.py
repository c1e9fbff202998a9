"""Sumppi - generate podcast RSS feeds from series API data."""

__version__ = "0.1.0"
