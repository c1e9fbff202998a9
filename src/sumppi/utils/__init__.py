"""Utility functions and helpers for Sumppi."""

from sumppi.utils.errors import (
    ClipboardError,
    ConfigError,
    ConfigNotFoundError,
    DuplicateSeriesError,
    EpisodeDateError,
    FeedGenerationError,
    FetchError,
    InvalidConfigError,
    InvalidStoragePathError,
    NoEpisodesError,
    NoValidEpisodesError,
    SeriesDecodeError,
    SeriesNotFoundError,
    StorageError,
    SumppiError,
)

__all__ = [
    "SumppiError",
    "ConfigError",
    "InvalidConfigError",
    "ConfigNotFoundError",
    "SeriesNotFoundError",
    "DuplicateSeriesError",
    "FetchError",
    "SeriesDecodeError",
    "FeedGenerationError",
    "EpisodeDateError",
    "NoEpisodesError",
    "NoValidEpisodesError",
    "StorageError",
    "InvalidStoragePathError",
    "ClipboardError",
]
