"""Configuration manager for loading and saving Sumppi config."""

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from sumppi.config.schema import SeriesEntry, SumppiConfig
from sumppi.utils.errors import (
    ConfigNotFoundError,
    DuplicateSeriesError,
    InvalidConfigError,
    SeriesNotFoundError,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SUMPPI_CONFIG"
DEFAULT_CONFIG_FILE = "series.yaml"


def get_config_file() -> Path:
    """Resolve the config file path from the environment or the default."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path(DEFAULT_CONFIG_FILE)


class ConfigManager:
    """Manages the Sumppi series configuration file."""

    def __init__(self, config_file: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_file: Optional config file path. Defaults to
                ``$SUMPPI_CONFIG`` or ``series.yaml`` in the working directory.
        """
        self.config_file = config_file or get_config_file()

    def load_config(self) -> SumppiConfig:
        """Load and validate configuration.

        Returns:
            Validated SumppiConfig instance

        Raises:
            ConfigNotFoundError: If config file doesn't exist
            InvalidConfigError: If config is invalid
        """
        if not self.config_file.exists():
            raise ConfigNotFoundError(f"Config file not found: {self.config_file}")

        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            config = SumppiConfig(**data)
        except (OSError, yaml.YAMLError, TypeError, ValidationError) as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

        logger.debug(
            "Loaded %d series from %s", len(config.series), self.config_file
        )
        return config

    def load_config_or_default(self) -> SumppiConfig:
        """Load configuration, falling back to defaults if the file is missing.

        Raises:
            InvalidConfigError: If the file exists but is invalid
        """
        try:
            return self.load_config()
        except ConfigNotFoundError:
            logger.debug("No config at %s, using defaults", self.config_file)
            return SumppiConfig()

    def save_config(self, config: SumppiConfig) -> None:
        """Save configuration.

        Args:
            config: SumppiConfig instance to save
        """
        data = config.model_dump(mode="json")

        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    def get_series(self, guid: str) -> SeriesEntry:
        """Get a single configured series.

        Args:
            guid: Series identifier

        Returns:
            SeriesEntry instance

        Raises:
            SeriesNotFoundError: If the series isn't configured
        """
        for entry in self.load_config().series:
            if entry.guid == guid:
                return entry

        raise SeriesNotFoundError(f"Series '{guid}' not found in {self.config_file}")

    def add_series(self, entry: SeriesEntry) -> None:
        """Add a series to the configuration file.

        Creates the file if it doesn't exist yet.

        Args:
            entry: Series to add

        Raises:
            DuplicateSeriesError: If a series with the same GUID exists
            InvalidConfigError: If the existing file is invalid
        """
        config = self.load_config_or_default()

        if any(existing.guid == entry.guid for existing in config.series):
            raise DuplicateSeriesError(
                f"Series '{entry.guid}' already exists in {self.config_file}"
            )

        config.series.append(entry)
        self.save_config(config)
        logger.info("Added series %s -> %s", entry.guid, entry.s3_path)
