"""Custom exceptions for Sumppi."""


class SumppiError(Exception):
    """Base exception for all Sumppi errors."""

    pass


class ConfigError(SumppiError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    pass


class SeriesNotFoundError(ConfigError):
    """Series not found in configuration."""

    pass


class DuplicateSeriesError(ConfigError):
    """Series already exists in configuration."""

    pass


class FetchError(SumppiError):
    """Fetching series data from the API failed."""

    pass


class SeriesDecodeError(FetchError):
    """Series JSON could not be decoded or validated."""

    pass


class FeedGenerationError(SumppiError):
    """RSS document could not be serialized."""

    pass


class EpisodeDateError(SumppiError):
    """No latest episode date could be determined."""

    pass


class NoEpisodesError(EpisodeDateError):
    """The series has no episodes at all."""

    pass


class NoValidEpisodesError(EpisodeDateError):
    """Every episode was skipped (bad date or too far in the future)."""

    pass


class StorageError(SumppiError):
    """Writing or uploading a feed failed."""

    pass


class InvalidStoragePathError(StorageError):
    """S3 path is not of the form s3://bucket/key."""

    pass


class ClipboardError(SumppiError):
    """Copying to the system clipboard failed."""

    pass
