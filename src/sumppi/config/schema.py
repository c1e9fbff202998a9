"""Configuration schema models using Pydantic."""

from pathlib import PurePosixPath
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from sumppi.feeds.fetcher import DEFAULT_API_URL_TEMPLATE
from sumppi.storage.s3 import parse_s3_path
from sumppi.utils.errors import InvalidStoragePathError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
ThemeName = Literal["light", "dark", "auto"]


class SeriesEntry(BaseModel):
    """A configured series and where its feed is published."""

    guid: str = Field(..., min_length=1)
    s3_path: str

    @field_validator("s3_path")
    @classmethod
    def _validate_s3_path(cls, value: str) -> str:
        try:
            parse_s3_path(value)
        except InvalidStoragePathError as e:
            raise ValueError(str(e)) from e
        return value

    @property
    def name(self) -> str:
        """Display name: the object name of the S3 path."""
        return PurePosixPath(self.s3_path).name or self.s3_path


class SumppiConfig(BaseModel):
    """Global Sumppi configuration."""

    log_level: LogLevel = "WARNING"
    api_url_template: str = DEFAULT_API_URL_TEMPLATE
    s3_region: str | None = None
    theme: ThemeName = "auto"
    series: list[SeriesEntry] = Field(default_factory=list)

    @field_validator("api_url_template")
    @classmethod
    def _validate_template(cls, value: str) -> str:
        if "{guid}" not in value:
            raise ValueError("api_url_template must contain a {guid} placeholder")
        return value
